from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Dict, Any, Literal
from datetime import datetime
from enum import Enum


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class UserRegister(BaseModel):
    """Schema for user registration request"""

    email: EmailStr
    password: str = Field(
        min_length=6,
        max_length=100,
        description="Password must be 6-100 characters"
    )
    full_name: str = Field(
        min_length=2,
        max_length=100,
        description="Full name must be 2-100 characters"
    )
    user_type: Literal["gym_goer", "gym_owner"] = "gym_goer"

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        """Remove extra whitespace from name"""
        return " ".join(v.split())

    class Config:
        json_schema_extra = {
            "example": {
                "email": "member@flexifit.app",
                "password": "strongpass",
                "full_name": "Sam Rivera",
                "user_type": "gym_goer"
            }
        }


class UserLogin(BaseModel):
    """Schema for user login request"""

    email: EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    """Schema for token refresh request"""

    refresh_token: str


# ============================================================
# Password Reset Requests
# ============================================================
# Field rules are enforced by the reset flow itself so that failures come
# back as validation_error results rather than 422s.

class PasswordResetRequest(BaseModel):
    """Schema for requesting a reset code"""
    email: str = ""


class VerifyResetCodeRequest(BaseModel):
    """Schema for verifying a reset code"""
    email: str = ""
    code: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "email": "member@flexifit.app",
                "code": "123456"
            }
        }


class PasswordResetConfirm(BaseModel):
    """Schema for setting a new password after code verification"""
    email: str = ""
    new_password: str = ""
    confirm_password: str = ""
    reset_token: str = ""


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class AuthUser(BaseModel):
    """The signed-in user as seen by clients (NO password!)"""

    id: str
    email: str
    created_at: datetime
    last_sign_in_at: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user(cls, user) -> "AuthUser":
        return cls(
            id=str(user.id),
            email=user.email,
            created_at=user.created_at,
            last_sign_in_at=user.last_sign_in_at,
            metadata=dict(user.user_metadata or {}),
        )


class TokenResponse(BaseModel):
    """Schema for authentication token response"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until access token expires
    user: AuthUser


class TokenRefreshResponse(BaseModel):
    """Schema for token refresh response"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class ResetStep(str, Enum):
    REQUEST = "request"
    OTP = "otp"
    PASSWORD = "password"
    DONE = "done"


class ResetErrorKind(str, Enum):
    VALIDATION = "validation_error"
    NOT_FOUND_OR_EXPIRED = "not_found_or_expired"
    DEPENDENCY = "dependency_error"


class ResetResult(BaseModel):
    """
    Outcome of one password reset command.

    Exactly one of success / error is meaningful: on success `error` is
    None and `step` is the step to show next; on failure `step` is the
    step the user stays on.
    """

    success: bool
    step: ResetStep
    message: str
    error: Optional[ResetErrorKind] = None
    email: Optional[str] = None
    reset_token: Optional[str] = None
    redirect_to: Optional[str] = None

    @classmethod
    def ok(cls, step: ResetStep, message: str, **kwargs) -> "ResetResult":
        return cls(success=True, step=step, message=message, **kwargs)

    @classmethod
    def fail(
        cls,
        step: ResetStep,
        error: ResetErrorKind,
        message: str,
        **kwargs
    ) -> "ResetResult":
        return cls(success=False, step=step, error=error, message=message, **kwargs)


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Schema for error responses"""

    detail: str
