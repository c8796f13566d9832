"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AuthResult, User


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        phone_number: Optional[str] = None,
    ) -> User:
        """
        Create an unverified restaurant admin and email a verification code.

        Raises:
            ValidationError: Itemized input problems; nothing is stored
            UserAlreadyExistsError: Email is taken
            EmailDeliveryError: Code could not be sent; the user is removed
        """
        ...

    async def verify_email(self, email: Optional[str], code: Optional[str]) -> AuthResult:
        """Consume a verification code and log the user in."""
        ...

    async def resend_verification(self, email: Optional[str]) -> None:
        """Issue a fresh verification code, replacing the previous one."""
        ...

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Exchange credentials for an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            EmailNotVerifiedError: Unverified account (production only)
            AccountInactiveError: Account is not active
        """
        ...

    async def forgot_password(self, email: Optional[str]) -> None:
        """Email a password reset code to a verified account."""
        ...

    async def reset_password(
        self,
        email: Optional[str],
        code: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Consume a reset code, set the new password and log the user in."""
        ...

    async def get_profile(self, user_id: str) -> User:
        ...

    async def change_password(
        self,
        user_id: str,
        current_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> None:
        ...

    def issue_token(self, user: User) -> str:
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """
        Resolve a bearer token to the current state of its user.

        Raises:
            AuthenticationError: Token invalid, expired or user gone
            AuthorizationError: Account unverified (production) or inactive
        """
        ...
