import pytest
from datetime import datetime, timezone

from modules.auth.models import TokenPayload, User, UserPublic
from shared.models import AccountStatus, AuthenticatedUser, KycStatus, Permission, UserRole


def _user(**overrides) -> User:
    data = {
        "id": "user-123",
        "name": "Ada",
        "email": "ada@example.com",
        "password_hash": "$2b$04$hash",
        "verification_code": "123456",
        "reset_code": "654321",
        "invitation_token": "a" * 64,
        "role": "restaurant_staff",
        "permissions": ["manage_ingredients"],
        "restaurant_id": "rest-1",
        "kyc_status": "approved",
        "created_at": "2024-05-01T10:00:00+00:00",
    }
    data.update(overrides)
    return User(**data)


class TestUser:
    def test_parses_row(self):
        """Should parse enum and timestamp columns from a stored row."""
        user = _user()
        assert user.role == UserRole.RESTAURANT_STAFF
        assert user.permissions == [Permission.MANAGE_INGREDIENTS]
        assert user.kyc_status == KycStatus.APPROVED
        assert user.created_at == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    def test_ignores_unknown_columns(self):
        user = _user(legacy_column="x")
        assert not hasattr(user, "legacy_column")

    def test_public_view_hides_secrets(self):
        """to_public must never carry hashes, codes or tokens."""
        public = _user().to_public().model_dump()
        for secret in ("password_hash", "verification_code", "reset_code", "invitation_token"):
            assert secret not in public
        assert public["email"] == "ada@example.com"
        assert isinstance(_user().to_public(), UserPublic)

    def test_authenticated_view(self):
        authenticated = _user().to_authenticated()
        assert isinstance(authenticated, AuthenticatedUser)
        assert authenticated.restaurant_id == "rest-1"
        assert authenticated.account_status == AccountStatus.ACTIVE
        assert authenticated.has_permission(Permission.MANAGE_INGREDIENTS)
        assert not authenticated.has_permission(Permission.MANAGE_USERS)


class TestAuthenticatedUser:
    def test_user_is_immutable(self):
        """AuthenticatedUser should be immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"

    def test_super_admin_flag(self):
        assert AuthenticatedUser(id="1", email="a@b.co", role="super_admin").is_super_admin
        assert not AuthenticatedUser(id="1", email="a@b.co").is_super_admin


class TestTokenPayload:
    def test_parse_payload(self):
        payload = TokenPayload(
            sub="user-123", email="ada@example.com", role="restaurant_admin", exp=1704067200, iat=1704063600
        )
        assert payload.sub == "user-123"
        assert payload.role == "restaurant_admin"

    def test_requires_subject_and_expiry(self):
        with pytest.raises(Exception):
            TokenPayload(iat=1704063600)
