from app.models.base import Base
from app.models.user import User
from app.models.password_reset_otp import PasswordResetOTP
from app.models.gym import Gym
from app.models.trainer import Trainer
from app.models.time_slot import TimeSlot
from app.models.booking import Booking
from app.models.favorite import Favorite
from app.models.review import Review

__all__ = [
    "Base",
    "User",
    "PasswordResetOTP",
    "Gym",
    "Trainer",
    "TimeSlot",
    "Booking",
    "Favorite",
    "Review",
]
