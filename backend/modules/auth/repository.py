"""
User repository for database access.

Encapsulates all Supabase queries against the users table. One-time code
consumption is a single conditional UPDATE filtered on the code value, so
two concurrent requests can never both consume the same code.
"""

from datetime import datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.models import AccountStatus
from shared.repository import BaseRepository, to_iso, utc_now

from .exceptions import UserAlreadyExistsError
from .models import User

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for tenant scoping.
    """

    table = "users"

    def _map(self, row: dict[str, Any]) -> User:
        return User.model_validate(row)

    def _first(self, result) -> Optional[User]:
        if not result.data:
            return None
        return self._map(result.data[0])

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._query().select("*").eq("id", user_id).limit(1).execute()
        return self._first(result)

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._query().select("*").eq("email", email).limit(1).execute()
        return self._first(result)

    def email_exists(self, email: str) -> bool:
        return self._count(email=email) > 0

    def list_by_restaurant(self, restaurant_id: str) -> list[User]:
        result = (
            self._query()
            .select("*")
            .eq("restaurant_id", restaurant_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map(row) for row in result.data]

    def count_by_restaurant(self, restaurant_id: str) -> int:
        """All users attached to a restaurant, pending invitations included."""
        return self._count(restaurant_id=restaurant_id)

    def count_active(self) -> int:
        return self._count(account_status=AccountStatus.ACTIVE.value)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> User:
        now = to_iso(utc_now())
        row = {"created_at": now, "updated_at": now, **data}
        try:
            result = self._query().insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UserAlreadyExistsError(data.get("email", "")) from e
            raise
        return self._map(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        data = {**data, "updated_at": to_iso(utc_now())}
        result = self._query().update(data).eq("id", user_id).execute()
        return self._first(result)

    def delete(self, user_id: str) -> None:
        self._query().delete().eq("id", user_id).execute()

    # -------------------------------------------------------------------------
    # Single-use codes
    # -------------------------------------------------------------------------

    def consume_verification_code(
        self,
        email: str,
        code: str,
        now: Optional[datetime] = None,
    ) -> Optional[User]:
        """Mark the user verified if the code matches and has not expired."""
        now_iso = to_iso(now or utc_now())
        result = (
            self._query()
            .update({
                "is_verified": True,
                "verification_code": None,
                "verification_expires": None,
                "updated_at": now_iso,
            })
            .eq("email", email)
            .eq("verification_code", code)
            .gt("verification_expires", now_iso)
            .execute()
        )
        return self._first(result)

    def consume_reset_code(
        self,
        email: str,
        code: str,
        password_hash: str,
        now: Optional[datetime] = None,
    ) -> Optional[User]:
        """Replace the password if the reset code matches and has not expired."""
        now_iso = to_iso(now or utc_now())
        result = (
            self._query()
            .update({
                "password_hash": password_hash,
                "reset_code": None,
                "reset_expires": None,
                "updated_at": now_iso,
            })
            .eq("email", email)
            .eq("reset_code", code)
            .gt("reset_expires", now_iso)
            .execute()
        )
        return self._first(result)

    def consume_invitation(
        self,
        token: str,
        password_hash: str,
        now: Optional[datetime] = None,
    ) -> Optional[User]:
        """Activate the invited account holding this token, at most once."""
        now_iso = to_iso(now or utc_now())
        result = (
            self._query()
            .update({
                "password_hash": password_hash,
                "is_verified": True,
                "account_status": AccountStatus.ACTIVE.value,
                "invitation_token": None,
                "invitation_expires": None,
                "updated_at": now_iso,
            })
            .eq("invitation_token", token)
            .gt("invitation_expires", now_iso)
            .execute()
        )
        return self._first(result)
