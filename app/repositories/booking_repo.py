"""
Booking Repository

Data access layer for Booking model.
"""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_

from app.repositories.base import BaseRepository
from app.models import Booking, Gym

CANCELLED = "cancelled"


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Booking, db)

    async def list_for_user_with_gym(
        self,
        user_id: UUID,
        from_date: Optional[date] = None
    ) -> List[Tuple[Booking, Gym]]:
        """
        A user's bookings joined to their gym, latest booking date first.

        Args:
            user_id: Booking owner
            from_date: Only bookings on or after this day
        """
        stmt = (
            select(Booking, Gym)
            .join(Gym, Gym.id == Booking.gym_id)
            .where(Booking.user_id == user_id)
        )
        if from_date is not None:
            stmt = stmt.where(Booking.booking_date >= from_date)

        stmt = stmt.order_by(Booking.booking_date.desc(), Booking.created_at.desc())
        result = await self.db.execute(stmt)
        return [(booking, gym) for booking, gym in result.all()]

    async def count_active_in_slot(self, time_slot_id: UUID, booking_date: date) -> int:
        """Non-cancelled bookings already holding a place in a slot on a day."""
        result = await self.db.execute(
            select(func.count(Booking.id)).where(
                and_(
                    Booking.time_slot_id == time_slot_id,
                    Booking.booking_date == booking_date,
                    Booking.status != CANCELLED,
                )
            )
        )
        return result.scalar() or 0

    async def list_for_gym(self, gym_id: UUID) -> List[Booking]:
        result = await self.db.execute(
            select(Booking).where(Booking.gym_id == gym_id)
        )
        return list(result.scalars().all())
