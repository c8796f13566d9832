import pytest
from datetime import datetime, timedelta, timezone

import jwt

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.models import User
from modules.auth.security import (
    PasswordHasher,
    TokenManager,
    generate_invitation_token,
    generate_numeric_code,
    generate_temporary_password,
)
from modules.auth.validation import INVITATION_TOKEN_PATTERN, password_errors
from shared.exceptions import KlarityError

from tests.conftest import TEST_JWT_SECRET, make_settings


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenManager(make_settings(jwt_expires_minutes=30))


@pytest.fixture
def user():
    return User(id="user-123", email="ada@example.com", role="restaurant_admin")


class TestPasswordHasher:
    def test_hash_and_verify(self, hasher):
        password_hash = hasher.hash("Passw0rd!")
        assert password_hash.startswith("$2")
        assert hasher.verify("Passw0rd!", password_hash)
        assert not hasher.verify("passw0rd!", password_hash)

    def test_salted(self, hasher):
        assert hasher.hash("Passw0rd!") != hasher.hash("Passw0rd!")

    def test_empty_inputs(self, hasher):
        assert not hasher.verify("", hasher.hash("Passw0rd!"))
        assert not hasher.verify("Passw0rd!", "")

    def test_malformed_hash(self, hasher):
        """A corrupt stored hash reads as a failed match, not a crash."""
        assert not hasher.verify("Passw0rd!", "not-a-bcrypt-hash")


class TestGenerators:
    def test_numeric_code(self):
        for _ in range(50):
            code = generate_numeric_code()
            assert len(code) == 6 and code.isdigit()

    def test_invitation_token(self):
        token = generate_invitation_token()
        assert INVITATION_TOKEN_PATTERN.match(token)
        assert token != generate_invitation_token()

    def test_temporary_password_is_strong(self):
        assert password_errors(generate_temporary_password()) == []


class TestTokenManager:
    def test_round_trip_claims(self, tokens, user):
        payload = tokens.decode(tokens.issue(user))
        assert payload.sub == "user-123"
        assert payload.email == "ada@example.com"
        assert payload.role == "restaurant_admin"
        assert payload.exp - payload.iat == 30 * 60

    def test_signed_with_configured_secret(self, tokens, user):
        claims = jwt.decode(tokens.issue(user), TEST_JWT_SECRET, algorithms=["HS256"])
        assert claims["sub"] == "user-123"

    def test_expired(self, tokens, user):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        with pytest.raises(ExpiredTokenError):
            tokens.decode(tokens.issue(user, now=issued))

    def test_tampered(self, tokens, user):
        token = tokens.issue(user)
        with pytest.raises(InvalidTokenError):
            tokens.decode(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_missing_claims(self, tokens):
        token = jwt.encode(
            {"email": "ada@example.com", "exp": int(datetime.now(timezone.utc).timestamp()) + 60},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            tokens.decode(token)

    def test_unconfigured_secret(self, user):
        manager = TokenManager(make_settings(jwt_secret=""))
        with pytest.raises(KlarityError) as exc_info:
            manager.issue(user)
        assert exc_info.value.code == "AUTH_NOT_CONFIGURED"
