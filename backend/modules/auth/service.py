"""
Authentication service implementation.

Registration, email verification, login, password reset and token
validation for platform users.
"""

import logging
from datetime import timedelta
from typing import Optional

from modules.notifications.exceptions import EmailDeliveryError
from modules.notifications.interfaces import INotificationService
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.models import AccountStatus, AuthenticatedUser, KycStatus, UserRole
from shared.repository import to_iso, utc_now

from .exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    AlreadyVerifiedError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidResetCodeError,
    InvalidVerificationCodeError,
    MissingTokenError,
    ResendTooSoonError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .interfaces import IAuthService
from .models import AuthResult, User
from .phone import normalize_phone_number
from .repository import UserRepository
from .security import PasswordHasher, TokenManager, generate_numeric_code
from .validation import (
    code_errors,
    email_errors,
    new_password_errors,
    normalize_email,
    password_errors,
    registration_errors,
)

logger = logging.getLogger(__name__)


def _raise_if(errors: list[str]) -> None:
    if errors:
        raise ValidationError(errors=errors, code="VALIDATION_FAILED")


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Users live in the Supabase users table; tokens are self-issued JWTs.
    """

    def __init__(
        self,
        repository: UserRepository,
        notifications: INotificationService,
        settings: Optional[Settings] = None,
        hasher: Optional[PasswordHasher] = None,
        tokens: Optional[TokenManager] = None,
    ):
        self._settings = settings or get_settings()
        self._users = repository
        self._notifications = notifications
        self._hasher = hasher or PasswordHasher(self._settings.bcrypt_rounds)
        self._tokens = tokens or TokenManager(self._settings)

    @property
    def hasher(self) -> PasswordHasher:
        return self._hasher

    def _result(self, user: User) -> AuthResult:
        return AuthResult(token=self.issue_token(user), user=user.to_public())

    def _new_verification_code(self) -> dict:
        now = utc_now()
        ttl = timedelta(minutes=self._settings.verification_code_ttl_minutes)
        return {
            "verification_code": generate_numeric_code(),
            "verification_expires": to_iso(now + ttl),
            "verification_sent_at": to_iso(now),
        }

    # -------------------------------------------------------------------------
    # Registration and verification
    # -------------------------------------------------------------------------

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        phone_number: Optional[str] = None,
    ) -> User:
        _raise_if(registration_errors(name, email, password, confirm_password, phone_number))

        email = normalize_email(email)
        if self._users.email_exists(email):
            raise UserAlreadyExistsError(email)

        code_fields = self._new_verification_code()
        user = self._users.create({
            "name": name.strip(),
            "email": email,
            "phone_number": normalize_phone_number(phone_number),
            "password_hash": self._hasher.hash(password),
            "role": UserRole.RESTAURANT_ADMIN.value,
            "permissions": [],
            "is_verified": False,
            "account_status": AccountStatus.ACTIVE.value,
            "kyc_status": KycStatus.NOT_SUBMITTED.value,
            **code_fields,
        })

        try:
            await self._notifications.send_verification_code(
                user.email, user.name, code_fields["verification_code"]
            )
        except EmailDeliveryError:
            logger.error(f"Verification email failed for {email}; removing new user {user.id}")
            self._users.delete(user.id)
            raise

        logger.info(f"Registered user {user.id}")
        return user

    async def verify_email(self, email: Optional[str], code: Optional[str]) -> AuthResult:
        _raise_if(email_errors(email) + code_errors(code))

        user = self._users.consume_verification_code(normalize_email(email), code)
        if user is None:
            raise InvalidVerificationCodeError()

        logger.info(f"Verified email for user {user.id}")
        return self._result(user)

    async def resend_verification(self, email: Optional[str]) -> None:
        _raise_if(email_errors(email))

        user = self._users.get_by_email(normalize_email(email))
        if user is None:
            raise AccountNotFoundError()
        if user.is_verified:
            raise AlreadyVerifiedError()

        if user.verification_sent_at is not None:
            elapsed = (utc_now() - user.verification_sent_at).total_seconds()
            cooldown = self._settings.resend_cooldown_seconds
            if elapsed < cooldown:
                raise ResendTooSoonError(retry_after=max(1, int(cooldown - elapsed)))

        code_fields = self._new_verification_code()
        self._users.update(user.id, code_fields)
        await self._notifications.send_verification_code(
            user.email, user.name, code_fields["verification_code"]
        )

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if not email or not password:
            raise ValidationError(
                errors=["Email and password are required"], code="VALIDATION_FAILED"
            )

        user = self._users.get_by_email(normalize_email(email))
        if user is None or not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_verified:
            if self._settings.is_production:
                raise EmailNotVerifiedError()
            logger.warning(f"Allowing unverified login for {user.id} outside production")

        if user.account_status != AccountStatus.ACTIVE:
            raise AccountInactiveError(user.account_status.value)

        user = self._users.update(user.id, {"last_login_at": to_iso(utc_now())}) or user
        return self._result(user)

    # -------------------------------------------------------------------------
    # Password management
    # -------------------------------------------------------------------------

    async def forgot_password(self, email: Optional[str]) -> None:
        _raise_if(email_errors(email))

        user = self._users.get_by_email(normalize_email(email))
        if user is None or not user.is_verified:
            raise AccountNotFoundError("No verified account found with this email")

        code = generate_numeric_code()
        expires = utc_now() + timedelta(minutes=self._settings.reset_code_ttl_minutes)
        self._users.update(user.id, {"reset_code": code, "reset_expires": to_iso(expires)})
        await self._notifications.send_password_reset_code(user.email, user.name, code)

    async def reset_password(
        self,
        email: Optional[str],
        code: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        _raise_if(
            email_errors(email)
            + code_errors(code, label="Reset code")
            + password_errors(password)
        )

        user = self._users.consume_reset_code(
            normalize_email(email), code, self._hasher.hash(password)
        )
        if user is None:
            raise InvalidResetCodeError()

        logger.info(f"Password reset for user {user.id}")
        return self._result(user)

    async def get_profile(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def change_password(
        self,
        user_id: str,
        current_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> None:
        user = await self.get_profile(user_id)
        if not self._hasher.verify(current_password or "", user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")

        errors = new_password_errors(new_password, confirm_password)
        if not errors and new_password == current_password:
            errors.append("New password must be different from the current password")
        _raise_if(errors)

        self._users.update(user.id, {"password_hash": self._hasher.hash(new_password)})
        logger.info(f"Password changed for user {user.id}")

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def issue_token(self, user: User) -> str:
        return self._tokens.issue(user)

    async def authenticate(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        payload = self._tokens.decode(token)
        user = self._users.get_by_id(payload.sub)
        if user is None:
            raise UserNotFoundError(payload.sub)
        if not user.is_verified and self._settings.is_production:
            raise EmailNotVerifiedError()
        if user.account_status != AccountStatus.ACTIVE:
            raise AccountInactiveError(user.account_status.value)

        return user.to_authenticated()

