"""
Authentication module data models.

User is the full stored record, secrets included, and never leaves the
service layer. UserPublic is what the API returns.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import (
    AccountStatus,
    AuthenticatedUser,
    KycStatus,
    Permission,
    UserRole,
)


class UserPublic(BaseModel):
    """User fields safe to expose through the API."""

    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    role: UserRole
    restaurant_id: Optional[str] = None
    permissions: list[Permission] = Field(default_factory=list)
    is_verified: bool
    account_status: AccountStatus
    kyc_status: KycStatus
    invited_by: Optional[str] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class User(BaseModel):
    """A row of the users table."""

    model_config = {"extra": "ignore"}

    id: str
    name: str = ""
    email: str
    phone_number: Optional[str] = None
    password_hash: str = ""
    role: UserRole = UserRole.RESTAURANT_STAFF
    restaurant_id: Optional[str] = None
    permissions: list[Permission] = Field(default_factory=list)
    is_verified: bool = False
    account_status: AccountStatus = AccountStatus.ACTIVE
    kyc_status: KycStatus = KycStatus.NOT_SUBMITTED
    kyc_submission_id: Optional[str] = None

    # One-time codes; each kind holds at most one outstanding value
    verification_code: Optional[str] = None
    verification_expires: Optional[datetime] = None
    verification_sent_at: Optional[datetime] = None
    reset_code: Optional[str] = None
    reset_expires: Optional[datetime] = None
    invitation_token: Optional[str] = None
    invitation_expires: Optional[datetime] = None
    invited_by: Optional[str] = None

    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump())

    def to_authenticated(self) -> AuthenticatedUser:
        return AuthenticatedUser.model_validate(self.model_dump())


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = None
    role: Optional[str] = None
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class AuthResult(BaseModel):
    """Access token plus the user it was issued for."""

    token: str
    user: UserPublic


# -----------------------------------------------------------------------------
# Requests
#
# Fields are optional on purpose: missing values are reported by the
# itemized validators in validation.py, not by pydantic.
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class VerifyEmailRequest(BaseModel):
    email: Optional[str] = None
    code: Optional[str] = None


class EmailRequest(BaseModel):
    """Body of resend-verification and forgot-password."""

    email: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    email: Optional[str] = None
    code: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None
