"""
Gym Endpoints
HTTP API for gym search and listing, plus owner management of trainers,
time slots and booking analytics.
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_current_user, get_gym_service, get_review_service
from app.api.errors import SERVICE_ERRORS, http_error
from app.models.user import User
from app.schemas.gym import (
    GymCreate,
    GymResponse,
    GymStatsResponse,
    GymUpdate,
    OwnedGymResponse,
    TimeSlotCreate,
    TimeSlotResponse,
    TrainerCreate,
    TrainerResponse,
)
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services.gym_service import GymService
from app.services.review_service import ReviewService

# ============================================================
# Router Setup
# ============================================================
router = APIRouter(tags=["Gyms"])

OWNER_RESPONSES = {
    401: {"description": "Not authenticated"},
    403: {"description": "Not the owner of this gym"},
    404: {"description": "Gym not found"},
}


# ============================================================
# Search Gyms
# ============================================================
@router.get("", response_model=List[GymResponse])
async def search_gyms(
    name: Optional[str] = Query(None, description="Part of the gym name"),
    location: Optional[str] = Query(None, description="Part of the location"),
    max_price: Optional[float] = Query(None, ge=0, description="Highest price per session"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Search active gyms, best rated first.

    Name and location match case-insensitively anywhere in the field.
    """
    return await gym_service.search_gyms(name, location, max_price, skip, limit)


# ============================================================
# Create Gym
# ============================================================
@router.post(
    "",
    response_model=GymResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Gym listed"},
        401: {"description": "Not authenticated"},
        403: {"description": "Account is not a gym owner"},
    }
)
async def create_gym(
    gym_data: GymCreate,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """List a new gym. Only gym-owner accounts may list gyms."""
    try:
        return await gym_service.create_gym(gym_data, current_user)
    except SERVICE_ERRORS as e:
        raise http_error(e)


# ============================================================
# Owner Dashboard
# ============================================================
@router.get("/mine", response_model=List[OwnedGymResponse])
async def list_my_gyms(
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """Gyms owned by the authenticated user with their booking counts."""
    return await gym_service.list_owned_gyms(current_user.id)


# ============================================================
# Get / Update / Delete Gym
# ============================================================
@router.get("/{gym_id}", response_model=GymResponse, responses={404: {"description": "Gym not found"}})
async def get_gym(
    gym_id: UUID,
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        return await gym_service.get_gym(gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.patch("/{gym_id}", response_model=GymResponse, responses=OWNER_RESPONSES)
async def update_gym(
    gym_id: UUID,
    gym_data: GymUpdate,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """Update a gym. Only provided fields change."""
    try:
        return await gym_service.update_gym(gym_id, gym_data, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.delete("/{gym_id}", status_code=status.HTTP_204_NO_CONTENT, responses=OWNER_RESPONSES)
async def delete_gym(
    gym_id: UUID,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Delete a gym.

    Its trainers, time slots, bookings, favorites and reviews go with it.
    """
    try:
        await gym_service.delete_gym(gym_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)
    return None


# ============================================================
# Booking Analytics
# ============================================================
@router.get("/{gym_id}/stats", response_model=GymStatsResponse, responses=OWNER_RESPONSES)
async def get_gym_stats(
    gym_id: UUID,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """Today's, this week's and total bookings, revenue and status breakdown."""
    try:
        return await gym_service.get_stats(gym_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


# ============================================================
# Trainers
# ============================================================
@router.get("/{gym_id}/trainers", response_model=List[TrainerResponse])
async def list_trainers(
    gym_id: UUID,
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        return await gym_service.list_trainers(gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.post(
    "/{gym_id}/trainers",
    response_model=TrainerResponse,
    status_code=status.HTTP_201_CREATED,
    responses=OWNER_RESPONSES,
)
async def add_trainer(
    gym_id: UUID,
    trainer_data: TrainerCreate,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        return await gym_service.add_trainer(gym_id, trainer_data, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.delete(
    "/{gym_id}/trainers/{trainer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=OWNER_RESPONSES,
)
async def remove_trainer(
    gym_id: UUID,
    trainer_id: UUID,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        await gym_service.remove_trainer(gym_id, trainer_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)
    return None


# ============================================================
# Time Slots
# ============================================================
@router.get("/{gym_id}/time-slots", response_model=List[TimeSlotResponse])
async def list_time_slots(
    gym_id: UUID,
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        return await gym_service.list_time_slots(gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.post(
    "/{gym_id}/time-slots",
    response_model=TimeSlotResponse,
    status_code=status.HTTP_201_CREATED,
    responses=OWNER_RESPONSES,
)
async def add_time_slot(
    gym_id: UUID,
    slot_data: TimeSlotCreate,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        return await gym_service.add_time_slot(gym_id, slot_data, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.delete(
    "/{gym_id}/time-slots/{slot_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=OWNER_RESPONSES,
)
async def remove_time_slot(
    gym_id: UUID,
    slot_id: UUID,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    try:
        await gym_service.remove_time_slot(gym_id, slot_id, current_user.id)
    except SERVICE_ERRORS as e:
        raise http_error(e)
    return None


# ============================================================
# Reviews
# ============================================================
@router.get("/{gym_id}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    gym_id: UUID,
    review_service: ReviewService = Depends(get_review_service),
):
    try:
        return await review_service.list_reviews(gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.post(
    "/{gym_id}/reviews",
    response_model=ReviewResponse,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Owners cannot review their own gym"},
        404: {"description": "Gym not found"},
    }
)
async def submit_review(
    gym_id: UUID,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    """Rate a gym 1-5 with an optional comment. Posting again replaces your review."""
    try:
        return await review_service.submit_review(gym_id, review_data, current_user)
    except SERVICE_ERRORS as e:
        raise http_error(e)
