"""
Authentication API endpoints.

Mounted under /api/auth. Every endpoint except profile and
change-password is public and sits behind the auth rate limiter.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from api.models.responses import envelope
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyEmailRequest,
)

router = APIRouter()


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """
    Create a restaurant admin account.

    A 6-digit verification code is emailed; the account cannot log in
    (in production) until the code is confirmed.
    """
    user = await service.register(
        body.name,
        body.email,
        body.password,
        body.confirm_password,
        phone_number=body.phone_number,
    )
    return envelope(
        request,
        "Registration successful. Please check your email for the verification code.",
        {"user": user.to_public()},
        key="auth.registered",
    )


@router.post("/verify-email")
async def verify_email(
    body: VerifyEmailRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    result = await service.verify_email(body.email, body.code)
    return envelope(request, "Email verified successfully", result, key="auth.email_verified")


@router.post("/resend-verification")
async def resend_verification(
    body: EmailRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    await service.resend_verification(body.email)
    return envelope(request, "A new verification code has been sent", key="auth.code_resent")


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    result = await service.login(body.email, body.password)
    return envelope(request, "Login successful", result, key="auth.logged_in")


@router.post("/forgot-password")
async def forgot_password(
    body: EmailRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    await service.forgot_password(body.email)
    return envelope(
        request,
        "A password reset code has been sent to your email",
        key="auth.reset_code_sent",
    )


@router.post("/reset-password")
async def reset_password(
    body: ResetPasswordRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    result = await service.reset_password(body.email, body.code, body.password)
    return envelope(request, "Password reset successfully", result, key="auth.password_reset")


@router.get("/profile")
async def get_profile(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """Current user, as stored."""
    profile = await service.get_profile(user.id)
    return envelope(request, "Profile retrieved", {"user": profile.to_public()})


@router.put("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    await service.change_password(
        user.id,
        body.current_password,
        body.new_password,
        body.confirm_password,
    )
    return envelope(request, "Password changed successfully", key="auth.password_changed")
