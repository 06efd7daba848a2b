"""
Review Service
Star ratings and comments on gyms. A gym's rating is the mean of its
reviews, rounded to one decimal, and is recomputed on every review.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.models import User
from app.repositories.gym_repo import GymRepository
from app.repositories.review_repo import ReviewRepository
from app.schemas.review import ReviewCreate, ReviewResponse


class ReviewService:
    """Service class for review operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.gym_repo = GymRepository(db)

    async def submit_review(self, gym_id: UUID, review_data: ReviewCreate, user: User) -> ReviewResponse:
        """
        Create the user's review of a gym, or replace their earlier one.

        Raises:
            NotFoundError: If the gym does not exist
            PermissionDeniedError: If the user owns the gym
        """
        gym = await self.gym_repo.get_by_id(gym_id)
        if not gym:
            raise NotFoundError("Gym not found")
        if gym.owner_id == user.id:
            raise PermissionDeniedError("You cannot review your own gym")

        review = await self.review_repo.get_for_user(user.id, gym_id)
        if review:
            review = await self.review_repo.update(
                review.id, rating=review_data.rating, comment=review_data.comment
            )
        else:
            review = await self.review_repo.create(
                user_id=user.id,
                gym_id=gym_id,
                rating=review_data.rating,
                comment=review_data.comment,
            )

        average = await self.review_repo.average_for_gym(gym_id)
        await self.gym_repo.update(gym_id, rating=round(average, 1))

        return ReviewResponse(
            id=review.id,
            gym_id=review.gym_id,
            user_id=review.user_id,
            reviewer_name=user.full_name,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )

    async def list_reviews(self, gym_id: UUID) -> List[ReviewResponse]:
        if not await self.gym_repo.get_by_id(gym_id):
            raise NotFoundError("Gym not found")

        rows = await self.review_repo.list_for_gym(gym_id)
        return [
            ReviewResponse(
                id=review.id,
                gym_id=review.gym_id,
                user_id=review.user_id,
                reviewer_name=name,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at,
            )
            for review, name in rows
        ]
