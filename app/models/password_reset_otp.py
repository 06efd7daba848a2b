"""
Password Reset OTP Model

One row per emailed reset code. Rows are never deleted; a consumed code
keeps used=True as an audit trail.
"""

from sqlalchemy import Column, String, DateTime, Boolean, Index
from .base import BaseModel


class PasswordResetOTP(BaseModel):
    __tablename__ = "password_reset_otps"
    __table_args__ = (
        Index("ix_password_reset_otps_lookup", "email", "otp", "used"),
    )

    # Not a foreign key: codes may be issued for addresses with no account
    email = Column(String(255), nullable=False, index=True)
    otp = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, default=False, nullable=False)
