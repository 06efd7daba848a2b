"""
Domain Exceptions

Errors raised by services. The password reset command handlers map each
kind onto the error field of their result. Other endpoints map
NotFoundError to 404, PermissionDeniedError to 403 and ValueError to 400.
"""

from typing import Optional


class ValidationError(ValueError):
    """Input rejected before any store, email or auth call."""


class CodeNotFoundOrExpired(Exception):
    """No unused, unexpired reset code matched."""

    def __init__(self, message: str = "The OTP you entered is invalid or has expired"):
        super().__init__(message)
        self.message = message


class DependencyError(Exception):
    """A table store, email sender or auth call failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class EmailDeliveryError(DependencyError):
    """The email backend could not deliver a message."""


class NotFoundError(Exception):
    """Record does not exist or is not visible to the caller."""


class PermissionDeniedError(Exception):
    """Caller is signed in but may not act on the record."""
