"""
Favorite Repository

Data access layer for Favorite model.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from app.repositories.base import BaseRepository
from app.models import Favorite, Gym


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for Favorite model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_for_user(self, user_id: UUID, gym_id: UUID) -> Optional[Favorite]:
        result = await self.db.execute(
            select(Favorite).where(
                and_(Favorite.user_id == user_id, Favorite.gym_id == gym_id)
            )
        )
        return result.scalar_one_or_none()

    async def list_gyms_for_user(self, user_id: UUID) -> List[Gym]:
        """Gyms a user has favorited, most recently favorited first."""
        result = await self.db.execute(
            select(Gym)
            .join(Favorite, Favorite.gym_id == Gym.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc())
        )
        return list(result.scalars().all())
