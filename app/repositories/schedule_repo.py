"""
Trainer and TimeSlot Repositories

Data access for the per-gym staff list and daily booking windows.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from app.repositories.base import BaseRepository
from app.models import Booking, TimeSlot, Trainer


class TrainerRepository(BaseRepository[Trainer]):
    """Repository for Trainer model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Trainer, db)

    async def list_for_gym(self, gym_id: UUID) -> List[Trainer]:
        """Trainers in the order they were added."""
        result = await self.db.execute(
            select(Trainer)
            .where(Trainer.gym_id == gym_id)
            .order_by(Trainer.created_at.asc())
        )
        return list(result.scalars().all())


class TimeSlotRepository(BaseRepository[TimeSlot]):
    """Repository for TimeSlot model."""

    def __init__(self, db: AsyncSession):
        super().__init__(TimeSlot, db)

    async def list_for_gym(self, gym_id: UUID) -> List[TimeSlot]:
        """Slots ordered by start time."""
        result = await self.db.execute(
            select(TimeSlot)
            .where(TimeSlot.gym_id == gym_id)
            .order_by(TimeSlot.start_time.asc())
        )
        return list(result.scalars().all())

    async def delete_slot(self, slot_id: UUID) -> None:
        """Delete a slot; bookings made in it keep their date but lose the slot."""
        await self.db.execute(
            update(Booking)
            .where(Booking.time_slot_id == slot_id)
            .values(time_slot_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(delete(TimeSlot).where(TimeSlot.id == slot_id))
        await self.db.commit()
