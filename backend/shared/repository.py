"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage (ISO-8601, UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - Pagination helper shared by list endpoints

    Subclasses set `table` and implement domain-specific data access
    methods, handling dict-to-Pydantic model mapping internally.

    Example:
        class RestaurantRepository(BaseRepository[Restaurant]):
            table = "restaurants"

            def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
                result = self._query().select("*").eq("id", restaurant_id).execute()
                if not result.data:
                    return None
                return self._map(result.data[0])
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _query(self):
        return self._db.table(self.table)

    def _count(self, **filters: Any) -> int:
        """Count rows matching equality filters."""
        query = self._query().select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        result = query.execute()
        return result.count or 0

    def _page(
        self,
        page: int,
        page_size: int,
        filters: Optional[dict[str, Any]] = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Fetch one page of rows, newest first.

        Returns:
            Tuple of (rows, total matching rows)
        """
        filters = {k: v for k, v in (filters or {}).items() if v is not None}
        offset = (page - 1) * page_size

        total = self._count(**filters)

        query = self._query().select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        result = query.order("created_at", desc=True).range(offset, offset + page_size - 1).execute()

        return result.data, total
