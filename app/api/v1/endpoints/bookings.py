"""
Booking Endpoints
HTTP API for booking sessions and managing your bookings.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_booking_service, get_current_user
from app.api.errors import SERVICE_ERRORS, http_error
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingResponse
from app.services.booking_service import BookingService

# ============================================================
# Router Setup
# ============================================================
router = APIRouter(tags=["Bookings"])

BOOKING_RESPONSES = {
    400: {"description": "Booking cannot change state"},
    401: {"description": "Not authenticated"},
    404: {"description": "Booking not found"},
}


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Date in the past or slot full"},
        401: {"description": "Not authenticated"},
        404: {"description": "Gym or time slot not found"},
    }
)
async def create_booking(
    booking_data: BookingCreate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Book a session.

    The booking is confirmed straight away with payment pending.
    """
    try:
        return await booking_service.create_booking(booking_data, current_user)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    upcoming: bool = Query(False, description="Only bookings from today on"),
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
):
    """Your bookings, latest date first. Without `upcoming` this is the full history."""
    return await booking_service.list_bookings(current_user.id, upcoming)


@router.post("/{booking_id}/cancel", response_model=BookingResponse, responses=BOOKING_RESPONSES)
async def cancel_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
):
    try:
        return await booking_service.cancel_booking(booking_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.post("/{booking_id}/pay", response_model=BookingResponse, responses=BOOKING_RESPONSES)
async def pay_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
):
    """Mark a pending booking as paid."""
    try:
        return await booking_service.pay_booking(booking_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)
