from sqlalchemy import Column, String, Boolean, DateTime, JSON
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False)
    user_type = Column(String(20), default="gym_goer", nullable=False)
    user_metadata = Column(JSON, default=dict, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_sign_in_at = Column(DateTime(timezone=True), nullable=True)
