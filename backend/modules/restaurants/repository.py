"""
Restaurant repository for database access.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, to_iso, utc_now

from .models import Restaurant, RestaurantStatus


class RestaurantRepository(BaseRepository[Restaurant]):
    """Supabase access for the restaurants table."""

    table = "restaurants"

    def _map(self, row: dict[str, Any]) -> Restaurant:
        return Restaurant.model_validate(row)

    def create(self, data: dict[str, Any]) -> Restaurant:
        now = to_iso(utc_now())
        row = {"created_at": now, "updated_at": now, **data}
        result = self._query().insert(row).execute()
        return self._map(result.data[0])

    def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        result = self._query().select("*").eq("id", restaurant_id).limit(1).execute()
        if not result.data:
            return None
        return self._map(result.data[0])

    def list_restaurants(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[RestaurantStatus] = None,
    ) -> tuple[list[Restaurant], int]:
        rows, total = self._page(
            page,
            page_size,
            {"status": status.value if status else None},
        )
        return [self._map(row) for row in rows], total

    def update_status(self, restaurant_id: str, status: RestaurantStatus) -> Optional[Restaurant]:
        result = (
            self._query()
            .update({"status": status.value, "updated_at": to_iso(utc_now())})
            .eq("id", restaurant_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map(result.data[0])

    def count_by_status(self, status: RestaurantStatus) -> int:
        return self._count(status=status.value)
