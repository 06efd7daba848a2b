"""
Gym Service
Business logic for gym listings, their trainers and time slots, and the
owner's booking analytics.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.models import Gym, TimeSlot, Trainer, User
from app.models.base import utcnow
from app.repositories.booking_repo import BookingRepository, CANCELLED
from app.repositories.gym_repo import GymRepository
from app.repositories.schedule_repo import TimeSlotRepository, TrainerRepository
from app.schemas.gym import (
    GymCreate,
    GymStatsResponse,
    GymUpdate,
    OwnedGymResponse,
    StatusCount,
    TimeSlotCreate,
    TrainerCreate,
)

logger = logging.getLogger(__name__)

GYM_OWNER = "gym_owner"
DEFAULT_RATING = 4.0


class GymService:
    """Service class for gym operations."""

    def __init__(self, db: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        """Initialize with database session."""
        self.db = db
        self.now = clock or utcnow
        self.gym_repo = GymRepository(db)
        self.trainer_repo = TrainerRepository(db)
        self.slot_repo = TimeSlotRepository(db)
        self.booking_repo = BookingRepository(db)

    # ============================================================
    # Create Gym
    # ============================================================
    async def create_gym(self, gym_data: GymCreate, owner: User) -> Gym:
        """
        List a new gym owned by `owner`.

        Raises:
            PermissionDeniedError: If the account is not a gym owner
        """
        if owner.user_type != GYM_OWNER:
            raise PermissionDeniedError("Only gym owner accounts can list gyms")

        gym = await self.gym_repo.create(
            owner_id=owner.id,
            rating=DEFAULT_RATING,
            is_active=True,
            **gym_data.model_dump(mode="json"),
        )
        logger.info(f"Gym {gym.id} listed by {owner.id}")
        return gym

    # ============================================================
    # Search / Get Gym
    # ============================================================
    async def search_gyms(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        max_price: Optional[float] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[Gym]:
        return await self.gym_repo.search(
            name=(name or "").strip() or None,
            location=(location or "").strip() or None,
            max_price=max_price,
            skip=skip,
            limit=limit,
        )

    async def get_gym(self, gym_id: UUID) -> Gym:
        """
        Raises:
            NotFoundError: If the gym does not exist
        """
        gym = await self.gym_repo.get_by_id(gym_id)
        if not gym:
            raise NotFoundError("Gym not found")
        return gym

    async def get_owned_gym(self, gym_id: UUID, owner_id: UUID) -> Gym:
        """
        Get a gym, verifying the caller owns it.

        Raises:
            NotFoundError: If the gym does not exist
            PermissionDeniedError: If someone else owns it
        """
        gym = await self.get_gym(gym_id)
        if gym.owner_id != owner_id:
            raise PermissionDeniedError("You do not manage this gym")
        return gym

    # ============================================================
    # Owner Dashboard
    # ============================================================
    async def list_owned_gyms(self, owner_id: UUID) -> List[OwnedGymResponse]:
        rows = await self.gym_repo.list_for_owner_with_booking_counts(owner_id)
        return [
            OwnedGymResponse(
                id=gym.id,
                name=gym.name,
                location=gym.location,
                is_active=gym.is_active,
                bookings_count=count,
            )
            for gym, count in rows
        ]

    # ============================================================
    # Update / Delete Gym
    # ============================================================
    async def update_gym(self, gym_id: UUID, gym_data: GymUpdate, owner_id: UUID) -> Gym:
        gym = await self.get_owned_gym(gym_id, owner_id)

        update_data = gym_data.model_dump(exclude_unset=True, mode="json")
        if not update_data:
            return gym
        return await self.gym_repo.update(gym_id, **update_data)

    async def delete_gym(self, gym_id: UUID, owner_id: UUID) -> None:
        """Delete a gym with its trainers, slots, bookings, favorites and reviews."""
        await self.get_owned_gym(gym_id, owner_id)
        await self.gym_repo.delete_with_children(gym_id)
        logger.info(f"Gym {gym_id} deleted by {owner_id}")

    # ============================================================
    # Trainers
    # ============================================================
    async def list_trainers(self, gym_id: UUID) -> List[Trainer]:
        await self.get_gym(gym_id)
        return await self.trainer_repo.list_for_gym(gym_id)

    async def add_trainer(self, gym_id: UUID, trainer_data: TrainerCreate, owner_id: UUID) -> Trainer:
        await self.get_owned_gym(gym_id, owner_id)
        return await self.trainer_repo.create(
            gym_id=gym_id,
            name=trainer_data.name,
            speciality=trainer_data.speciality,
        )

    async def remove_trainer(self, gym_id: UUID, trainer_id: UUID, owner_id: UUID) -> None:
        await self.get_owned_gym(gym_id, owner_id)
        trainer = await self.trainer_repo.get_by_id(trainer_id)
        if not trainer or trainer.gym_id != gym_id:
            raise NotFoundError("Trainer not found")
        await self.trainer_repo.delete(trainer_id)

    # ============================================================
    # Time Slots
    # ============================================================
    async def list_time_slots(self, gym_id: UUID) -> List[TimeSlot]:
        await self.get_gym(gym_id)
        return await self.slot_repo.list_for_gym(gym_id)

    async def add_time_slot(self, gym_id: UUID, slot_data: TimeSlotCreate, owner_id: UUID) -> TimeSlot:
        await self.get_owned_gym(gym_id, owner_id)
        return await self.slot_repo.create(
            gym_id=gym_id,
            start_time=slot_data.start_time,
            end_time=slot_data.end_time,
            max_capacity=slot_data.max_capacity,
        )

    async def remove_time_slot(self, gym_id: UUID, slot_id: UUID, owner_id: UUID) -> None:
        await self.get_owned_gym(gym_id, owner_id)
        slot = await self.slot_repo.get_by_id(slot_id)
        if not slot or slot.gym_id != gym_id:
            raise NotFoundError("Time slot not found")
        await self.slot_repo.delete_slot(slot_id)

    # ============================================================
    # Booking Analytics
    # ============================================================
    async def get_stats(self, gym_id: UUID, owner_id: UUID) -> GymStatsResponse:
        """
        Booking counts for today, the last seven days and overall, revenue
        from bookings that were not cancelled, and a count per status.
        """
        gym = await self.get_owned_gym(gym_id, owner_id)
        bookings = await self.booking_repo.list_for_gym(gym_id)

        today = self.now().date()
        week_start = today - timedelta(days=7)
        status_counts = Counter(booking.status for booking in bookings)

        return GymStatsResponse(
            gym_id=gym.id,
            name=gym.name,
            location=gym.location,
            total_bookings=len(bookings),
            today_bookings=sum(1 for b in bookings if b.booking_date == today),
            week_bookings=sum(1 for b in bookings if b.booking_date >= week_start),
            total_revenue=round(
                sum(b.amount for b in bookings if b.status != CANCELLED), 2
            ),
            status_breakdown=[
                StatusCount(status=status, count=count)
                for status, count in sorted(status_counts.items())
            ],
        )
