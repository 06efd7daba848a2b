"""
Booking Service
Business logic for booking sessions, paying for them and cancelling.

A new booking is confirmed immediately with payment pending, the way the
booking page always created it.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models import Booking, Gym, User
from app.models.base import utcnow
from app.repositories.booking_repo import BookingRepository, CANCELLED
from app.repositories.gym_repo import GymRepository
from app.repositories.schedule_repo import TimeSlotRepository
from app.schemas.booking import BookingCreate, BookingResponse
from app.schemas.gym import GymSummary

logger = logging.getLogger(__name__)

CONFIRMED = "confirmed"
PAYMENT_PENDING = "pending"
PAYMENT_PAID = "paid"


def to_booking_response(booking: Booking, gym: Optional[Gym] = None) -> BookingResponse:
    response = BookingResponse.model_validate(booking)
    if gym is not None:
        response.gym = GymSummary.model_validate(gym)
    return response


class BookingService:
    """Service class for booking operations."""

    def __init__(self, db: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.now = clock or utcnow
        self.booking_repo = BookingRepository(db)
        self.gym_repo = GymRepository(db)
        self.slot_repo = TimeSlotRepository(db)

    # ============================================================
    # Book a Session
    # ============================================================
    async def create_booking(self, booking_data: BookingCreate, user: User) -> BookingResponse:
        """
        Book a session at a gym.

        Raises:
            NotFoundError: If the gym or time slot does not exist
            ValueError: If the date is in the past or the slot is full
        """
        gym = await self.gym_repo.get_by_id(booking_data.gym_id)
        if not gym or not gym.is_active:
            raise NotFoundError("Gym not found")

        if booking_data.booking_date < self.now().date():
            raise ValueError("Booking date cannot be in the past")

        if booking_data.time_slot_id is not None:
            slot = await self.slot_repo.get_by_id(booking_data.time_slot_id)
            if not slot or slot.gym_id != gym.id:
                raise NotFoundError("Time slot not found")

            taken = await self.booking_repo.count_active_in_slot(slot.id, booking_data.booking_date)
            if taken >= slot.max_capacity:
                raise ValueError("This time slot is fully booked")

        booking = await self.booking_repo.create(
            user_id=user.id,
            gym_id=gym.id,
            time_slot_id=booking_data.time_slot_id,
            booking_date=booking_data.booking_date,
            status=CONFIRMED,
            payment_status=PAYMENT_PENDING,
            payment_method=booking_data.payment_method,
            amount=gym.price_per_session,
        )
        logger.info(f"Booking {booking.id} created for gym {gym.id}")
        return to_booking_response(booking, gym)

    # ============================================================
    # List Bookings
    # ============================================================
    async def list_bookings(self, user_id: UUID, upcoming: bool = False) -> List[BookingResponse]:
        """
        A user's bookings, latest date first.

        Args:
            upcoming: Only bookings dated today or later
        """
        from_date = self.now().date() if upcoming else None
        rows = await self.booking_repo.list_for_user_with_gym(user_id, from_date)
        return [to_booking_response(booking, gym) for booking, gym in rows]

    # ============================================================
    # Cancel / Pay
    # ============================================================
    async def _get_user_booking(self, booking_id: UUID, user_id: UUID) -> Booking:
        booking = await self.booking_repo.get_by_id(booking_id)
        if not booking or booking.user_id != user_id:
            raise NotFoundError("Booking not found")
        return booking

    async def cancel_booking(self, booking_id: UUID, user_id: UUID) -> BookingResponse:
        booking = await self._get_user_booking(booking_id, user_id)
        if booking.status == CANCELLED:
            raise ValueError("Booking is already cancelled")

        booking = await self.booking_repo.update(booking_id, status=CANCELLED)
        return to_booking_response(booking)

    async def pay_booking(self, booking_id: UUID, user_id: UUID) -> BookingResponse:
        """Record payment for a pending booking."""
        booking = await self._get_user_booking(booking_id, user_id)
        if booking.status == CANCELLED:
            raise ValueError("Cannot pay for a cancelled booking")
        if booking.payment_status == PAYMENT_PAID:
            raise ValueError("Booking is already paid")

        booking = await self.booking_repo.update(booking_id, payment_status=PAYMENT_PAID)
        return to_booking_response(booking)
