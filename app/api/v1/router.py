from fastapi import APIRouter
from app.api.v1.endpoints import auth, gyms, bookings, favorites

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Include auth routes at /auth
api_router.include_router(
    auth.router,
    prefix="/auth"
)

api_router.include_router(
    gyms.router,
    prefix="/gyms"
)

api_router.include_router(
    bookings.router,
    prefix="/bookings"
)

api_router.include_router(
    favorites.router,
    prefix="/favorites"
)
