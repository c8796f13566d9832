"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when the token's user no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            "User belonging to this token no longer exists",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidCredentialsError(AuthenticationError):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailNotVerifiedError(AuthorizationError):
    def __init__(self):
        super().__init__(
            "Please verify your email before logging in",
            code="EMAIL_NOT_VERIFIED",
        )


class AccountInactiveError(AuthorizationError):
    def __init__(self, account_status: str):
        super().__init__(
            f"Your account is {account_status}. Please contact support.",
            code="ACCOUNT_INACTIVE",
            details={"account_status": account_status},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required role or permission."""

    def __init__(self, required: list[str], user_role: str):
        super().__init__(
            "You do not have permission to perform this action",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required": required, "user_role": user_role},
        )


class KycNotApprovedError(AuthorizationError):
    def __init__(self, kyc_status: str):
        super().__init__(
            "KYC verification must be approved to access this resource",
            code="KYC_NOT_APPROVED",
            details={"kyc_status": kyc_status},
        )


class UserAlreadyExistsError(ConflictError):
    def __init__(self, email: str):
        super().__init__(
            "A user with this email already exists",
            code="USER_ALREADY_EXISTS",
            details={"email": email},
        )


class AccountNotFoundError(NotFoundError):
    def __init__(self, message: str = "No account found with this email"):
        super().__init__(message, code="ACCOUNT_NOT_FOUND")


class AlreadyVerifiedError(ValidationError):
    def __init__(self):
        super().__init__("Email is already verified", code="ALREADY_VERIFIED")


class InvalidVerificationCodeError(ValidationError):
    def __init__(self):
        super().__init__(
            "Invalid or expired verification code",
            code="INVALID_VERIFICATION_CODE",
        )


class InvalidResetCodeError(ValidationError):
    def __init__(self):
        super().__init__("Invalid or expired reset code", code="INVALID_RESET_CODE")


class ResendTooSoonError(RateLimitError):
    def __init__(self, retry_after: Optional[int] = None):
        super().__init__(
            "Please wait before requesting a new code",
            retry_after=retry_after,
            code="RESEND_TOO_SOON",
        )
