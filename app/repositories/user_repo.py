"""
User Repository

Data access layer for User model.
All user-related database operations.
"""

from typing import Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.repositories.base import BaseRepository
from app.models import User
from app.core.security import get_password_hash


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    # =================
    # Get by email
    # =================
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    # =================
    # Create user
    # =================
    async def create_user(
        self,
        email: str,
        password: str,
        full_name: str,
        user_type: str = "gym_goer",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> User:
        """Create a new user with a hashed password."""
        user_metadata = dict(metadata or {})
        user_metadata.update({"full_name": full_name, "user_type": user_type})

        return await self.create(
            email=email.strip().lower(),
            password_hash=get_password_hash(password),
            full_name=full_name,
            user_type=user_type,
            user_metadata=user_metadata,
            is_active=True,
        )

    # =================
    # Set password
    # =================
    async def set_password(self, user: User, new_password: str) -> User:
        """Replace a user's password hash."""
        user.password_hash = get_password_hash(new_password)
        await self.db.commit()
        await self.db.refresh(user)
        return user
