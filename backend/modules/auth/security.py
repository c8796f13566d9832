"""
Password hashing, one-time codes and access tokens.

Passwords are hashed with passlib's bcrypt scheme. Access tokens are
HS256 JWTs signed with JWT_SECRET and carry the user ID as `sub`.
"""

import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.exceptions import KlarityError

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenPayload, User


class PasswordHasher:
    """bcrypt via passlib, cost factor taken from settings."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # Malformed or unknown hash stored for this user
            return False


def generate_numeric_code(length: int = 6) -> str:
    """Random zero-padded numeric code."""
    return "".join(secrets.choice(string.digits) for _ in range(length))


def generate_invitation_token() -> str:
    """64 hex characters."""
    return secrets.token_hex(32)


def generate_temporary_password() -> str:
    """
    Placeholder password for invited users.

    Satisfies the strength rules but is never shown to anyone; the invitee
    sets their own password when accepting.
    """
    return f"Tmp-{secrets.token_urlsafe(24)}-9a"


class TokenManager:
    """Issues and validates access tokens."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise KlarityError(
                "Server authentication not configured",
                code="AUTH_NOT_CONFIGURED",
            )
        return self._settings.jwt_secret

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        expires = now + timedelta(minutes=self._settings.jwt_expires_minutes)
        payload = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._secret(), algorithm=self._settings.jwt_algorithm)

    def decode(self, token: str) -> TokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._secret(),
                algorithms=[self._settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()
        try:
            return TokenPayload(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Authentication token is missing required claims")
