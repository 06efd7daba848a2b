from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, get_favorite_service
from app.api.errors import SERVICE_ERRORS, http_error
from app.models.user import User
from app.schemas.favorite import FavoriteToggleResponse
from app.schemas.gym import GymResponse
from app.services.favorite_service import FavoriteService

router = APIRouter(tags=["Favorites"])


@router.get("", response_model=List[GymResponse])
async def list_favorites(
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """Gyms you have favorited, most recent first."""
    return await favorite_service.list_favorite_gyms(current_user.id)


@router.post(
    "/{gym_id}/toggle",
    response_model=FavoriteToggleResponse,
    responses={404: {"description": "Gym not found"}},
)
async def toggle_favorite(
    gym_id: UUID,
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.toggle_favorite(current_user.id, gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)


@router.delete(
    "/{gym_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Gym is not in your favorites"}},
)
async def remove_favorite(
    gym_id: UUID,
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        await favorite_service.remove_favorite(current_user.id, gym_id)
    except SERVICE_ERRORS as e:
        raise http_error(e)
    return None
