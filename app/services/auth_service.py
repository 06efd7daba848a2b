from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from typing import Optional
import uuid

from app.models import User
from app.repositories.user_repo import UserRepository
from app.schemas.auth import UserRegister, UserLogin, TokenResponse, AuthUser
from app.core.events import AuthEvent, AuthStateNotifier
from app.core.security import (
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_refresh_token,
    verify_token,
)
from app.models.base import utcnow

from app.core.config import settings


class AuthService:
    """
    Service class for account sign-up, sign-in and session lookup.

    """
    def __init__(self, db: AsyncSession, events: Optional[AuthStateNotifier] = None):
        """
        Initialize with database session.

        Args:
            db: AsyncSession instance
            events: Notifier that receives SIGNED_UP / SIGNED_IN events
        """
        self.db = db
        self.events = events if events is not None else AuthStateNotifier()
        self.user_repo = UserRepository(db)

    # ============================================================
    # User Registration
    # ============================================================
    async def register(self, user_data: UserRegister) -> TokenResponse:
        """
        Register a new user.

        Args:
            user_data: Validated registration data

        Returns:
            TokenResponse with tokens and user info

        Raises:
            ValueError: If email already exists
        """
        existing_user = await self.user_repo.get_by_email(user_data.email)

        if existing_user:
            raise ValueError("A user with this email already exists")

        try:
            user = await self.user_repo.create_user(
                email=user_data.email,
                password=user_data.password,
                full_name=user_data.full_name,
                user_type=user_data.user_type,
            )
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            await self.db.rollback()
            raise ValueError("A user with this email already exists")

        response = self._create_token_response(user)
        self.events.emit(AuthEvent.SIGNED_UP, response.user, user.email)
        return response

    # ============================================================
    # User Login
    # ============================================================
    async def login(self, login_data: UserLogin) -> TokenResponse:
        """
        Authenticate user and return tokens.

        Raises:
            ValueError: If credentials are invalid
        """
        user = await self.user_repo.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.password_hash):
            raise ValueError("Invalid email or password")

        if not user.is_active:
            raise ValueError("This account has been deactivated")

        user.last_sign_in_at = utcnow()
        await self.db.commit()
        await self.db.refresh(user)

        response = self._create_token_response(user)
        self.events.emit(AuthEvent.SIGNED_IN, response.user, user.email)
        return response

    # ============================================================
    # Token Refresh
    # ============================================================
    async def refresh_token(self, refresh_token: str) -> dict:
        """
        Create new access token from refresh token.

        Raises:
            ValueError: If refresh token is invalid
        """
        user_id = verify_refresh_token(refresh_token)

        if not user_id:
            raise ValueError("Invalid or expired refresh token")

        user = await self.user_repo.get_by_id(_parse_uuid(user_id))

        if not user or not user.is_active:
            raise ValueError("User not found or inactive")

        return {
            "access_token": create_access_token(subject=str(user.id)),
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        }

    # ============================================================
    # Get Current User
    # ============================================================
    async def get_current_user(self, token: str) -> User:
        """
        Get user from access token.

        Raises:
            ValueError: If token is invalid
        """
        payload = verify_token(token)

        if not payload:
            raise ValueError("Invalid or expired token")

        user = await self.user_repo.get_by_id(_parse_uuid(payload.get("sub")))

        if not user:
            raise ValueError("User not found")

        if not user.is_active:
            raise ValueError("User account is deactivated")

        return user

    # ============================================================
    # Helper Methods
    # ============================================================
    def _create_token_response(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(subject=str(user.id)),
            refresh_token=create_refresh_token(subject=str(user.id)),
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=AuthUser.from_user(user),
        )


def _parse_uuid(value) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValueError("Invalid or expired token")
