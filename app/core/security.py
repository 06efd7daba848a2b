from datetime import datetime, timezone, timedelta
from typing import Any, Union, Optional, Dict
import hashlib
import uuid

from jose import JWTError, jwt

# Use bcrypt directly to avoid passlib/bcrypt version conflicts
import bcrypt

from app.core.config import settings


# =====================================================
# Password Hashing Context
# =====================================================
class PasswordContext:
    """
    Simple password hashing and verification utility.
    """

    @staticmethod
    def hash(password: str) -> str:
        """
        Hash a plain-text password using bcrypt.
        """
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt()
        ).decode("utf-8")

    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain-text password against a bcrypt hash.
        """
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )


pwd_context = PasswordContext()


# =====================================================
# Token Type Constants
# =====================================================
TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"
TOKEN_TYPE_PASSWORD_RESET = "password_reset"


# =====================================================
# JWT Creation Functions
# =====================================================
def _encode(
    subject: Union[str, Any],
    token_type: str,
    expire: datetime,
    now: datetime,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    to_encode = {
        "exp": expire,
        "sub": str(subject),
        "type": token_type,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    if extra:
        to_encode.update(extra)

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return _encode(subject, TOKEN_TYPE_ACCESS, expire, now)


def create_refresh_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT refresh token.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))
    return _encode(subject, TOKEN_TYPE_REFRESH, expire, now)


def password_fingerprint(password_hash: Optional[str]) -> str:
    """Short digest of a stored hash; changes whenever the password does."""
    if not password_hash:
        return ""
    return hashlib.sha256(password_hash.encode("utf-8")).hexdigest()[:16]


def create_password_reset_token(
    email: str,
    otp_id: Union[str, Any],
    password_hash: Optional[str],
    now: Optional[datetime] = None,
) -> str:
    """
    Create the token that proves a reset code was verified for `email`.

    It carries a fingerprint of the current password hash, so it stops
    working once the password has been changed.
    """
    now = now or datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES)
    return _encode(
        email,
        TOKEN_TYPE_PASSWORD_RESET,
        expire,
        now,
        extra={"otp": str(otp_id), "pwf": password_fingerprint(password_hash)},
    )


# =====================================================
# Token Verification Functions
# =====================================================
def verify_token(
    token: str,
    token_type: str = TOKEN_TYPE_ACCESS
) -> Optional[Dict[str, Any]]:
    """
    Verify a JWT token and return its payload if valid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )

        if payload.get("type") != token_type:
            return None

        return payload

    except JWTError:
        return None


def verify_access_token(token: str) -> Optional[str]:
    """
    Verify access token and return the subject.
    """
    payload = verify_token(token, TOKEN_TYPE_ACCESS)
    return payload.get("sub") if payload else None


def verify_refresh_token(token: str) -> Optional[str]:
    """
    Verify refresh token and return the subject.
    """
    payload = verify_token(token, TOKEN_TYPE_REFRESH)
    return payload.get("sub") if payload else None


def verify_password_reset_token(token: str, email: str) -> Optional[Dict[str, Any]]:
    """
    Return the reset token payload if it is valid and issued for `email`.
    """
    payload = verify_token(token, TOKEN_TYPE_PASSWORD_RESET)
    if not payload or payload.get("sub") != email:
        return None
    return payload


# =====================================================
# Password Utility Functions
# =====================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hashed value.
    """
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    """
    if not password:
        raise ValueError("Password cannot be empty")
    return pwd_context.hash(password)
