"""
Password Reset OTP Repository

Data access layer for PasswordResetOTP model.
Insert, newest-valid lookup and one-way consumption of reset codes.
"""

import secrets
from typing import Optional
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_

from app.repositories.base import BaseRepository
from app.models.password_reset_otp import PasswordResetOTP

OTP_MIN = 100000
OTP_MAX = 999999


class PasswordResetOTPRepository(BaseRepository[PasswordResetOTP]):
    """Repository for PasswordResetOTP model."""

    def __init__(self, db: AsyncSession):
        super().__init__(PasswordResetOTP, db)

    # =================
    # Generate code
    # =================
    @staticmethod
    def generate_code() -> str:
        """Generate a uniformly random code in [100000, 999999]."""
        return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))

    # =================
    # Create code
    # =================
    async def create_code(
        self,
        email: str,
        now: datetime,
        expires_in_minutes: int,
    ) -> PasswordResetOTP:
        """
        Persist a new reset code for an email.

        Earlier outstanding codes for the same email are left untouched.

        Args:
            email: Address the code is issued for
            now: Creation time
            expires_in_minutes: Validity window

        Returns:
            PasswordResetOTP instance with the new code
        """
        return await self.create(
            email=email,
            otp=self.generate_code(),
            expires_at=now + timedelta(minutes=expires_in_minutes),
            used=False,
            created_at=now,
            updated_at=now,
        )

    # =================
    # Find valid code
    # =================
    async def find_valid_code(
        self,
        email: str,
        code: str,
        now: datetime,
    ) -> Optional[PasswordResetOTP]:
        """
        Newest row matching email and code that is unused and not expired.

        Args:
            email: Address the code was issued for
            code: The 6-digit code
            now: Current time

        Returns:
            PasswordResetOTP if valid, None otherwise
        """
        result = await self.db.execute(
            select(PasswordResetOTP)
            .where(
                and_(
                    PasswordResetOTP.email == email,
                    PasswordResetOTP.otp == code,
                    PasswordResetOTP.used.is_(False),
                    PasswordResetOTP.expires_at >= now,
                )
            )
            .order_by(PasswordResetOTP.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    # =================
    # Mark code as used
    # =================
    async def mark_used(self, otp_id, now: datetime) -> bool:
        """
        Consume a code.

        The update only matches while used is still False, so of two
        racing verifications exactly one sees a changed row.

        Returns:
            True if this call consumed the code
        """
        result = await self.db.execute(
            update(PasswordResetOTP)
            .where(
                and_(
                    PasswordResetOTP.id == otp_id,
                    PasswordResetOTP.used.is_(False),
                )
            )
            .values(used=True, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount == 1
