from app.repositories.base import BaseRepository
from app.repositories.user_repo import UserRepository
from app.repositories.password_reset_otp_repo import PasswordResetOTPRepository
from app.repositories.gym_repo import GymRepository
from app.repositories.schedule_repo import TrainerRepository, TimeSlotRepository
from app.repositories.booking_repo import BookingRepository
from app.repositories.favorite_repo import FavoriteRepository
from app.repositories.review_repo import ReviewRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PasswordResetOTPRepository",
    "GymRepository",
    "TrainerRepository",
    "TimeSlotRepository",
    "BookingRepository",
    "FavoriteRepository",
    "ReviewRepository",
]
