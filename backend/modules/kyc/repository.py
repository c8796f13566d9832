"""
KYC submission repository for database access.

Status changes go through transition(), a conditional UPDATE filtered on
the current status. A transition that returns None lost the race or
started from the wrong state.
"""

from typing import Any, Iterable, Optional

from shared.repository import BaseRepository, to_iso, utc_now

from .models import KycSubmission, SubmissionStatus


class KycRepository(BaseRepository[KycSubmission]):
    """Supabase access for the kyc_submissions table."""

    table = "kyc_submissions"

    def _map(self, row: dict[str, Any]) -> KycSubmission:
        return KycSubmission.model_validate(row)

    def _first(self, result) -> Optional[KycSubmission]:
        if not result.data:
            return None
        return self._map(result.data[0])

    def create(self, data: dict[str, Any]) -> KycSubmission:
        now = to_iso(utc_now())
        row = {"created_at": now, "updated_at": now, **data}
        result = self._query().insert(row).execute()
        return self._map(result.data[0])

    def get_by_id(self, submission_id: str) -> Optional[KycSubmission]:
        result = self._query().select("*").eq("id", submission_id).limit(1).execute()
        return self._first(result)

    def get_latest_for_user(self, user_id: str) -> Optional[KycSubmission]:
        result = (
            self._query()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return self._first(result)

    def list_submissions(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[SubmissionStatus] = None,
    ) -> tuple[list[KycSubmission], int]:
        rows, total = self._page(
            page,
            page_size,
            {"status": status.value if status else None},
        )
        return [self._map(row) for row in rows], total

    def transition(
        self,
        submission_id: str,
        from_statuses: Iterable[SubmissionStatus],
        data: dict[str, Any],
    ) -> Optional[KycSubmission]:
        """
        Apply `data` only if the submission is currently in one of
        `from_statuses`.
        """
        data = {**data, "updated_at": to_iso(utc_now())}
        result = (
            self._query()
            .update(data)
            .eq("id", submission_id)
            .in_("status", [s.value for s in from_statuses])
            .execute()
        )
        return self._first(result)

    def update(self, submission_id: str, data: dict[str, Any]) -> Optional[KycSubmission]:
        data = {**data, "updated_at": to_iso(utc_now())}
        result = self._query().update(data).eq("id", submission_id).execute()
        return self._first(result)

    def count_by_status(self, status: SubmissionStatus) -> int:
        return self._count(status=status.value)
