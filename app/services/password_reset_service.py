"""
Password Reset Service

One-time-code password reset:

    request  --RequestReset-->  otp  --VerifyCode-->  password  --CompleteReset-->  done

Each public method is a command handler that returns a ResetResult instead
of raising. Internals raise the domain exceptions from app.core.exceptions
and the handlers translate them.

Verifying a code issues a short-lived reset token. CompleteReset requires
that token and updates the password for the verified email directly, so
the user never needs a signed-in session to finish the reset.
"""

import logging
import re
from datetime import datetime
from typing import Awaitable, Callable, Optional
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.events import AuthEvent, AuthStateNotifier
from app.core.exceptions import (
    CodeNotFoundOrExpired,
    DependencyError,
    ValidationError,
)
from app.core.security import (
    create_password_reset_token,
    password_fingerprint,
    verify_password_reset_token,
)
from app.models.base import utcnow
from app.repositories.password_reset_otp_repo import PasswordResetOTPRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import AuthUser, ResetErrorKind, ResetResult, ResetStep
from app.utils.email import send_password_reset_code

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, int], Awaitable[None]]
Clock = Callable[[], datetime]

SIGN_IN_PATH = "/auth"
RESET_PAGE_PATH = "/reset-password"
UPDATE_FAILED_MESSAGE = "Unable to update password. Please try requesting a new OTP."


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def normalize_code(code: Optional[str]) -> str:
    """Drop everything that is not a digit."""
    return re.sub(r"\D", "", code or "")


class PasswordResetService:
    """
    Command handlers for the password reset flow.
    """

    def __init__(
        self,
        db: AsyncSession,
        events: Optional[AuthStateNotifier] = None,
        email_sender: Optional[EmailSender] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            db: AsyncSession instance
            events: Notifier for PASSWORD_RECOVERY / USER_UPDATED
            email_sender: Coroutine function (email, code, expires_in_minutes)
            clock: Returns the current UTC time
        """
        self.db = db
        self.events = events if events is not None else AuthStateNotifier()
        self.send_code = email_sender or send_password_reset_code
        self.now = clock or utcnow
        self.otp_repo = PasswordResetOTPRepository(db)
        self.user_repo = UserRepository(db)

    # ============================================================
    # Entry point (reset page opened with ?email=)
    # ============================================================
    def start(self, email: Optional[str]) -> ResetResult:
        email = normalize_email(email)
        if not email:
            return ResetResult.fail(
                ResetStep.REQUEST,
                ResetErrorKind.VALIDATION,
                "Please enter your email address",
            )
        return ResetResult.ok(
            ResetStep.OTP,
            "Enter the OTP sent to your email",
            email=email,
        )

    # ============================================================
    # RequestReset
    # ============================================================
    async def request_reset(self, email: Optional[str]) -> ResetResult:
        """
        Issue a new code for `email` and send it.

        Earlier codes stay valid. If the email fails after the row was
        written, the row is kept and remains consumable.
        """
        try:
            email = self._require_email(email)
            otp = await self._create_code(email)
            await self._deliver(email, otp.otp)
        except ValidationError as e:
            return ResetResult.fail(ResetStep.REQUEST, ResetErrorKind.VALIDATION, str(e))
        except DependencyError as e:
            logger.error(f"Password reset request failed for {email}: {e.message}")
            return ResetResult.fail(
                ResetStep.REQUEST,
                ResetErrorKind.DEPENDENCY,
                e.message,
                email=email or None,
            )

        logger.info(f"Password reset code issued for {email}")
        return ResetResult.ok(
            ResetStep.OTP,
            "Check your email for the 6-digit OTP",
            email=email,
            redirect_to=f"{RESET_PAGE_PATH}?email={quote(email, safe='')}",
        )

    # ============================================================
    # VerifyCode
    # ============================================================
    async def verify_code(self, email: Optional[str], code: Optional[str]) -> ResetResult:
        """
        Consume the newest matching unused, unexpired code.

        Wrong, expired and already-used codes all produce the same
        not_found_or_expired result.
        """
        try:
            email = self._require_email(email)
            code = normalize_code(code)
            if len(code) != 6:
                raise ValidationError("Please enter a valid 6-digit OTP")

            reset_token, user = await self._consume_code(email, code)
        except ValidationError as e:
            return ResetResult.fail(ResetStep.OTP, ResetErrorKind.VALIDATION, str(e), email=email or None)
        except CodeNotFoundOrExpired as e:
            return ResetResult.fail(
                ResetStep.OTP,
                ResetErrorKind.NOT_FOUND_OR_EXPIRED,
                e.message,
                email=email,
            )
        except DependencyError as e:
            logger.error(f"Password reset verification failed for {email}: {e.message}")
            return ResetResult.fail(ResetStep.OTP, ResetErrorKind.DEPENDENCY, e.message, email=email)

        self.events.emit(AuthEvent.PASSWORD_RECOVERY, user, email)
        return ResetResult.ok(
            ResetStep.PASSWORD,
            "OTP verified. Please enter your new password",
            email=email,
            reset_token=reset_token,
        )

    # ============================================================
    # CompleteReset
    # ============================================================
    async def complete_reset(
        self,
        email: Optional[str],
        new_password: str,
        confirm_password: str,
        reset_token: Optional[str],
    ) -> ResetResult:
        """
        Set a new password for a verified email.

        Authorized by the reset token from verify_code, not by a session.
        """
        email = normalize_email(email)
        try:
            self._check_new_password(new_password, confirm_password)
            user = await self._update_password(email, new_password, reset_token or "")
        except ValidationError as e:
            return ResetResult.fail(
                ResetStep.PASSWORD,
                ResetErrorKind.VALIDATION,
                str(e),
                email=email or None,
                reset_token=reset_token,
            )
        except DependencyError as e:
            logger.warning(f"Password update rejected for {email}: {e.message}")
            return ResetResult.fail(
                ResetStep.PASSWORD,
                ResetErrorKind.DEPENDENCY,
                e.message,
                email=email or None,
                reset_token=reset_token,
            )

        self.events.emit(AuthEvent.USER_UPDATED, user, email)
        logger.info(f"Password reset completed for {email}")
        return ResetResult.ok(
            ResetStep.DONE,
            "Your password has been successfully reset. Please sign in.",
            email=email,
            redirect_to=SIGN_IN_PATH,
        )

    # ============================================================
    # Helper Methods
    # ============================================================
    @staticmethod
    def _require_email(email: Optional[str]) -> str:
        email = normalize_email(email)
        if not email:
            raise ValidationError("Please enter your email address")
        return email

    @staticmethod
    def _check_new_password(new_password: str, confirm_password: str) -> None:
        # Mismatch is reported before strength
        if new_password != confirm_password:
            raise ValidationError("Passwords don't match")
        if len(new_password or "") < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
            )

    async def _create_code(self, email: str):
        try:
            return await self.otp_repo.create_code(
                email,
                now=self.now(),
                expires_in_minutes=settings.PASSWORD_RESET_OTP_EXPIRE_MINUTES,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DependencyError(f"Failed to send OTP: {e}", cause=e) from e

    async def _deliver(self, email: str, code: str) -> None:
        try:
            await self.send_code(email, code, settings.PASSWORD_RESET_OTP_EXPIRE_MINUTES)
        except DependencyError as e:
            raise DependencyError(f"Failed to send OTP: {e.message}", cause=e) from e
        except Exception as e:
            raise DependencyError(f"Failed to send OTP: {e}", cause=e) from e

    async def _consume_code(self, email: str, code: str):
        now = self.now()
        try:
            otp = await self.otp_repo.find_valid_code(email, code, now)
            if otp is None:
                raise CodeNotFoundOrExpired()

            # Everything the token needs is read before the code is spent
            user = await self.user_repo.get_by_email(email)
            if not await self.otp_repo.mark_used(otp.id, now):
                raise CodeNotFoundOrExpired()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DependencyError(str(e), cause=e) from e

        token = create_password_reset_token(
            email,
            otp.id,
            user.password_hash if user else None,
            now=now,
        )
        return token, AuthUser.from_user(user) if user else None

    async def _update_password(self, email: str, new_password: str, reset_token: str) -> AuthUser:
        payload = verify_password_reset_token(reset_token, email) if reset_token else None
        if payload is None:
            raise DependencyError(UPDATE_FAILED_MESSAGE)

        try:
            user = await self.user_repo.get_by_email(email)
            if not user or not user.is_active:
                raise DependencyError(UPDATE_FAILED_MESSAGE)
            if payload.get("pwf") != password_fingerprint(user.password_hash):
                raise DependencyError(UPDATE_FAILED_MESSAGE)

            user = await self.user_repo.set_password(user, new_password)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DependencyError(UPDATE_FAILED_MESSAGE, cause=e) from e

        return AuthUser.from_user(user)
