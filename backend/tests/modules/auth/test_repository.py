from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from modules.auth.exceptions import UserAlreadyExistsError
from modules.auth.repository import UserRepository
from shared.repository import to_iso

from tests.fakes import FakeSupabase


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    return UserRepository(FakeSupabase())


def _seed(repo, **fields):
    row = {"name": "Ada", "email": "ada@example.com", "password_hash": "h"}
    row.update(fields)
    return repo.create(row)


class TestLookups:
    def test_create_stamps_timestamps(self, repo):
        user = _seed(repo)
        assert user.id
        assert user.created_at is not None
        assert user.updated_at == user.created_at

    def test_get_by_email_and_exists(self, repo):
        user = _seed(repo)
        assert repo.get_by_email("ada@example.com").id == user.id
        assert repo.email_exists("ada@example.com")
        assert not repo.email_exists("bob@example.com")
        assert repo.get_by_email("bob@example.com") is None

    def test_list_by_restaurant_newest_first(self, repo):
        _seed(repo, email="a@x.co", restaurant_id="r1", created_at="2024-01-01T00:00:00+00:00")
        _seed(repo, email="b@x.co", restaurant_id="r1", created_at="2024-03-01T00:00:00+00:00")
        _seed(repo, email="c@x.co", restaurant_id="r2")

        emails = [u.email for u in repo.list_by_restaurant("r1")]
        assert emails == ["b@x.co", "a@x.co"]
        assert repo.count_by_restaurant("r1") == 2

    def test_count_active(self, repo):
        _seed(repo, email="a@x.co", account_status="active")
        _seed(repo, email="b@x.co", account_status="inactive")
        assert repo.count_active() == 1

    def test_delete(self, repo):
        user = _seed(repo)
        repo.delete(user.id)
        assert repo.get_by_id(user.id) is None


class TestConsume:
    def test_verification_code_consumed_once(self, repo):
        _seed(
            repo,
            verification_code="123456",
            verification_expires=to_iso(NOW + timedelta(minutes=5)),
        )

        user = repo.consume_verification_code("ada@example.com", "123456", now=NOW)
        assert user.is_verified
        assert user.verification_code is None
        assert repo.consume_verification_code("ada@example.com", "123456", now=NOW) is None

    def test_expired_verification_code(self, repo):
        _seed(
            repo,
            verification_code="123456",
            verification_expires=to_iso(NOW - timedelta(seconds=1)),
        )
        assert repo.consume_verification_code("ada@example.com", "123456", now=NOW) is None
        assert repo.get_by_email("ada@example.com").is_verified is False

    def test_reset_code_replaces_hash(self, repo):
        _seed(repo, reset_code="654321", reset_expires=to_iso(NOW + timedelta(minutes=5)))
        user = repo.consume_reset_code("ada@example.com", "654321", "new-hash", now=NOW)
        assert user.password_hash == "new-hash"
        assert user.reset_code is None

    def test_invitation_activates_account_once(self, repo):
        _seed(
            repo,
            account_status="inactive",
            invitation_token="t" * 64,
            invitation_expires=to_iso(NOW + timedelta(days=7)),
        )

        user = repo.consume_invitation("t" * 64, "new-hash", now=NOW)
        assert user.account_status.value == "active"
        assert user.is_verified
        assert repo.consume_invitation("t" * 64, "other-hash", now=NOW) is None

    def test_consume_is_a_single_conditional_update(self):
        """The code check happens in the UPDATE filter, not after a read."""
        db = MagicMock()
        chain = db.table.return_value.update.return_value
        chain.eq.return_value = chain
        chain.gt.return_value = chain
        chain.execute.return_value.data = []

        assert UserRepository(db).consume_verification_code("ada@example.com", "123456", now=NOW) is None
        db.table.return_value.select.assert_not_called()
        chain.eq.assert_any_call("verification_code", "123456")
        chain.gt.assert_called_once_with("verification_expires", to_iso(NOW))


class TestUniqueEmail:
    def _rejecting_db(self, code: str) -> MagicMock:
        db = MagicMock()
        db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": code, "message": "insert failed", "details": None, "hint": None}
        )
        return db

    def test_unique_violation_becomes_conflict(self):
        """Should report a duplicate email when the unique index rejects the insert."""
        repo = UserRepository(self._rejecting_db("23505"))

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            repo.create({"name": "Ada", "email": "ada@example.com", "password_hash": "h"})

        assert exc_info.value.code == "USER_ALREADY_EXISTS"
        assert exc_info.value.details == {"email": "ada@example.com"}

    def test_other_database_errors_propagate(self):
        repo = UserRepository(self._rejecting_db("23502"))

        with pytest.raises(APIError):
            repo.create({"name": "Ada", "email": "ada@example.com", "password_hash": "h"})
