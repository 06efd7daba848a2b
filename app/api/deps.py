from fastapi import HTTPException, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.db.database import get_db
from app.models import User
from app.models.base import utcnow
from app.core.events import AuthStateNotifier
from app.services.auth_service import AuthService
from app.services.password_reset_service import PasswordResetService
from app.services.gym_service import GymService
from app.services.booking_service import BookingService
from app.services.favorite_service import FavoriteService
from app.services.review_service import ReviewService
from app.utils.email import send_password_reset_code


# Security scheme for Swagger UI
security = HTTPBearer()


# =====================================================
# Collaborators
# =====================================================
def get_auth_events(request: Request) -> AuthStateNotifier:
    """The application's auth-state notifier."""
    return request.app.state.auth_events


def get_email_sender():
    """Coroutine function used to email reset codes."""
    return send_password_reset_code


def get_clock():
    return utcnow


# =====================================================
# Services
# =====================================================
def get_auth_service(
    db: AsyncSession = Depends(get_db),
    events: AuthStateNotifier = Depends(get_auth_events),
) -> AuthService:
    return AuthService(db, events=events)


def get_password_reset_service(
    db: AsyncSession = Depends(get_db),
    events: AuthStateNotifier = Depends(get_auth_events),
    email_sender=Depends(get_email_sender),
    clock=Depends(get_clock),
) -> PasswordResetService:
    return PasswordResetService(db, events=events, email_sender=email_sender, clock=clock)


def get_gym_service(
    db: AsyncSession = Depends(get_db),
    clock=Depends(get_clock),
) -> GymService:
    return GymService(db, clock=clock)


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    clock=Depends(get_clock),
) -> BookingService:
    return BookingService(db, clock=clock)


def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


# =====================================================
# Get Current user
# =====================================================
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency that validates JWT token and returns current user.

    Raises:
        HTTPException 401: If token is invalid or missing
    """
    try:
        return await auth_service.get_current_user(credentials.credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )
