"""
Gym Repository

Data access layer for Gym model.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete

from app.repositories.base import BaseRepository
from app.models import Gym, Booking, Favorite, Review, TimeSlot, Trainer


class GymRepository(BaseRepository[Gym]):
    """Repository for Gym model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Gym, db)

    async def search(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        max_price: Optional[float] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Gym]:
        """
        Active gyms filtered by case-insensitive name/location substrings
        and a price ceiling, best rated first.
        """
        stmt = select(Gym).where(Gym.is_active.is_(True))

        if name:
            stmt = stmt.where(Gym.name.icontains(name, autoescape=True))
        if location:
            stmt = stmt.where(Gym.location.icontains(location, autoescape=True))
        if max_price is not None:
            stmt = stmt.where(Gym.price_per_session <= max_price)

        stmt = stmt.order_by(Gym.rating.desc(), Gym.name).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_owner_with_booking_counts(self, owner_id: UUID) -> List[Tuple[Gym, int]]:
        """Owner's gyms, newest first, each with its number of bookings."""
        stmt = (
            select(Gym, func.count(Booking.id))
            .outerjoin(Booking, Booking.gym_id == Gym.id)
            .where(Gym.owner_id == owner_id)
            .group_by(Gym.id)
            .order_by(Gym.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [(gym, count) for gym, count in result.all()]

    async def delete_with_children(self, gym_id: UUID) -> None:
        """
        Remove a gym and every row that hangs off it in one transaction.

        Child rows are deleted explicitly so the result does not depend on
        the database enforcing ON DELETE CASCADE.
        """
        for model in (Booking, Favorite, Review, TimeSlot, Trainer):
            await self.db.execute(delete(model).where(model.gym_id == gym_id))
        await self.db.execute(delete(Gym).where(Gym.id == gym_id))
        await self.db.commit()
