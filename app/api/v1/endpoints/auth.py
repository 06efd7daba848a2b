from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from app.schemas.auth import (
    UserRegister,
    UserLogin,
    TokenResponse,
    TokenRefreshResponse,
    RefreshTokenRequest,
    AuthUser,
    ErrorResponse,
    PasswordResetRequest,
    PasswordResetConfirm,
    VerifyResetCodeRequest,
    ResetErrorKind,
    ResetResult,
)
from app.services.auth_service import AuthService
from app.services.password_reset_service import PasswordResetService
from app.api.deps import get_auth_service, get_current_user, get_password_reset_service
from app.models.user import User

# ============================================================
# Router Setup
# ============================================================

router = APIRouter(tags=["Authentication"])

RESET_ERROR_STATUS = {
    ResetErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ResetErrorKind.NOT_FOUND_OR_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ResetErrorKind.DEPENDENCY: status.HTTP_502_BAD_GATEWAY,
}

RESET_RESPONSES = {
    200: {"model": ResetResult, "description": "Step completed"},
    400: {"model": ResetResult, "description": "Invalid input or code"},
    502: {"model": ResetResult, "description": "Store, email or auth failure"},
}


def render_reset_result(result: ResetResult) -> JSONResponse:
    """Turn a reset command result into an HTTP response."""
    status_code = status.HTTP_200_OK if result.success else RESET_ERROR_STATUS[result.error]
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


# ============================================================
# Registration Endpoint
# ============================================================

@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Email already exists"},
        422: {"description": "Validation error"}
    }
)
async def register(
    user_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new gym-goer or gym-owner account.

    Returns access token, refresh token, and user info.
    """
    try:
        return await auth_service.register(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


# ============================================================
# Login Endpoint
# ============================================================
@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    }
)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and get tokens.

    - **email**: Registered email address
    - **password**: Account password
    """
    try:
        return await auth_service.login(login_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


# ============================================================
# Token Refresh Endpoint
# ============================================================

@router.post(
    "/refresh",
    response_model=TokenRefreshResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid refresh token"},
    }
)
async def refresh_token(
    token_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Get new access token using refresh token."""
    try:
        return await auth_service.refresh_token(token_data.refresh_token)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )


# ============================================================
# Get Current User Endpoint
# ============================================================

@router.get(
    "/me",
    response_model=AuthUser,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    }
)
async def get_me(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user's information.

    Requires `Authorization: Bearer <access_token>`.
    """
    return AuthUser.from_user(current_user)


# ============================================================
# Forgot Password Endpoint
# ============================================================

@router.post("/forgot-password", response_model=ResetResult, responses=RESET_RESPONSES)
async def forgot_password(
    request_data: PasswordResetRequest,
    reset_service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Email a 6-digit reset code.

    On success the client moves to the code step at `redirect_to`.
    """
    return render_reset_result(await reset_service.request_reset(request_data.email))


# ============================================================
# Reset Page Entry
# ============================================================

@router.get("/reset-password", response_model=ResetResult, responses=RESET_RESPONSES)
async def reset_password_entry(
    email: Optional[str] = Query(default=None),
    reset_service: PasswordResetService = Depends(get_password_reset_service),
):
    """Initial state of the reset page for `?email=`."""
    return render_reset_result(reset_service.start(email))


# ============================================================
# Verify Reset Code Endpoint
# ============================================================

@router.post("/verify-reset-code", response_model=ResetResult, responses=RESET_RESPONSES)
async def verify_reset_code(
    request_data: VerifyResetCodeRequest,
    reset_service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Verify and consume a reset code.

    - **email**: Email address that requested the reset
    - **code**: 6-digit code from the email

    Returns the `reset_token` needed to set the new password.
    """
    return render_reset_result(
        await reset_service.verify_code(request_data.email, request_data.code)
    )


# ============================================================
# Reset Password Endpoint
# ============================================================

@router.post("/reset-password", response_model=ResetResult, responses=RESET_RESPONSES)
async def reset_password(
    request_data: PasswordResetConfirm,
    reset_service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Set a new password.

    - **new_password** / **confirm_password**: must match, 6+ characters
    - **reset_token**: token from `/verify-reset-code`
    """
    return render_reset_result(
        await reset_service.complete_reset(
            request_data.email,
            request_data.new_password,
            request_data.confirm_password,
            request_data.reset_token,
        )
    )
