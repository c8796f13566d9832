"""
Authentication module.

Handles registration, email verification, login, password reset and
JWT validation.

Public API:
- IAuthService: Interface for auth operations
- User / UserPublic: Stored user record and its API view
- Auth exceptions: InvalidTokenError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService
from .models import AuthResult, TokenPayload, User, UserPublic
from .exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    EmailNotVerifiedError,
    ExpiredTokenError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidTokenError,
    KycNotApprovedError,
    MissingTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthResult",
    "TokenPayload",
    "User",
    "UserPublic",
    # Exceptions
    "AccountInactiveError",
    "AccountNotFoundError",
    "EmailNotVerifiedError",
    "ExpiredTokenError",
    "InsufficientPermissionsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "KycNotApprovedError",
    "MissingTokenError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
