"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
settings with a known JWT secret, a service container wired to in-memory
fakes, and helpers for seeding users and building auth headers.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.auth.models import User
from shared.config import Settings
from shared.models import AccountStatus, KycStatus, UserRole

from tests.fakes import FakeEmailProvider, FakeImageStorage, FakeSupabase

# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

TEST_PASSWORD = "Passw0rd!"


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the developer's .env file."""
    values = {
        "environment": "test",
        "jwt_secret": TEST_JWT_SECRET,
        "bcrypt_rounds": 4,
        "upload_dir": "test-uploads",
        "client_url": "https://app.klarity.test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    role: str = "restaurant_admin",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        role: Role claim
        expired: If True, creates an expired token
        secret: Signing key

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def seed_user(
    container: ServiceContainer,
    email: str = "owner@example.com",
    password: str = TEST_PASSWORD,
    **fields: Any,
) -> User:
    """Insert a verified, active user straight into the repository."""
    row = {
        "name": "Test User",
        "email": email,
        "password_hash": container.hasher.hash(password),
        "role": UserRole.RESTAURANT_ADMIN.value,
        "permissions": [],
        "is_verified": True,
        "account_status": AccountStatus.ACTIVE.value,
        "kyc_status": KycStatus.NOT_SUBMITTED.value,
    }
    row.update({k: getattr(v, "value", v) for k, v in fields.items()})
    return container.user_repository.create(row)


def seed_restaurant(
    container: ServiceContainer,
    name: str = "Chez Test",
    admin: Optional[User] = None,
    **fields: Any,
):
    """Create a restaurant and, when given, attach its admin to it."""
    row = {
        "name": name,
        "status": "active",
        "max_users": container.settings.default_max_users,
        "admin_id": admin.id if admin else None,
    }
    row.update({k: getattr(v, "value", v) for k, v in fields.items()})
    restaurant = container.restaurant_repository.create(row)
    if admin is not None:
        container.user_repository.update(
            admin.id,
            {"restaurant_id": restaurant.id, "kyc_status": KycStatus.APPROVED.value},
        )
    return restaurant


def auth_headers_for(container: ServiceContainer, user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {container.tokens.issue(user)}"}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def email_provider() -> FakeEmailProvider:
    return FakeEmailProvider()


@pytest.fixture
def storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def container(settings, db, email_provider, storage):
    """Service container wired to the fakes and installed for the API."""
    container = ServiceContainer(
        settings=settings,
        db=db,
        email_provider=email_provider,
        storage=storage,
    )
    set_container(container)
    yield container
    reset_container()


@pytest.fixture
def app(container, settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def owner(container) -> User:
    """Restaurant admin with approved KYC and a restaurant."""
    user = seed_user(container)
    seed_restaurant(container, admin=user)
    return container.user_repository.get_by_id(user.id)


@pytest.fixture
def super_admin(container) -> User:
    return seed_user(
        container,
        email="root@klarity.test",
        name="Platform Admin",
        role=UserRole.SUPER_ADMIN,
        kyc_status=KycStatus.APPROVED,
    )


@pytest.fixture
def owner_headers(container, owner) -> dict[str, str]:
    return auth_headers_for(container, owner)


@pytest.fixture
def admin_headers(container, super_admin) -> dict[str, str]:
    return auth_headers_for(container, super_admin)
