"""
Favorite Service
Business logic for a user's saved gyms.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models import Gym
from app.repositories.favorite_repo import FavoriteRepository
from app.repositories.gym_repo import GymRepository
from app.schemas.favorite import FavoriteToggleResponse


class FavoriteService:
    """Service class for favorite operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.favorite_repo = FavoriteRepository(db)
        self.gym_repo = GymRepository(db)

    async def toggle_favorite(self, user_id: UUID, gym_id: UUID) -> FavoriteToggleResponse:
        """
        Add the gym to the user's favorites, or remove it if already there.

        Raises:
            NotFoundError: If the gym does not exist
        """
        if not await self.gym_repo.get_by_id(gym_id):
            raise NotFoundError("Gym not found")

        favorite = await self.favorite_repo.get_for_user(user_id, gym_id)
        if favorite:
            await self.favorite_repo.delete(favorite.id)
            return FavoriteToggleResponse(gym_id=gym_id, is_favorite=False)

        await self.favorite_repo.create(user_id=user_id, gym_id=gym_id)
        return FavoriteToggleResponse(gym_id=gym_id, is_favorite=True)

    async def list_favorite_gyms(self, user_id: UUID) -> List[Gym]:
        return await self.favorite_repo.list_gyms_for_user(user_id)

    async def remove_favorite(self, user_id: UUID, gym_id: UUID) -> None:
        favorite = await self.favorite_repo.get_for_user(user_id, gym_id)
        if not favorite:
            raise NotFoundError("Gym is not in your favorites")
        await self.favorite_repo.delete(favorite.id)
