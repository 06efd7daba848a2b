"""
Review Repository

Data access layer for Review model.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_

from app.repositories.base import BaseRepository
from app.models import Review, User


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def get_for_user(self, user_id: UUID, gym_id: UUID) -> Optional[Review]:
        result = await self.db.execute(
            select(Review).where(
                and_(Review.user_id == user_id, Review.gym_id == gym_id)
            )
        )
        return result.scalar_one_or_none()

    async def list_for_gym(self, gym_id: UUID) -> List[Tuple[Review, str]]:
        """Reviews of a gym with the reviewer's name, newest first."""
        result = await self.db.execute(
            select(Review, User.full_name)
            .join(User, User.id == Review.user_id)
            .where(Review.gym_id == gym_id)
            .order_by(Review.created_at.desc())
        )
        return [(review, name) for review, name in result.all()]

    async def average_for_gym(self, gym_id: UUID) -> Optional[float]:
        result = await self.db.execute(
            select(func.avg(Review.rating)).where(Review.gym_id == gym_id)
        )
        average = result.scalar()
        return float(average) if average is not None else None
