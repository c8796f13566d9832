"""
Ingredient repository for database access.

Every query is scoped by restaurant_id; an ingredient of another tenant
is indistinguishable from a missing one.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, to_iso, utc_now

from .models import Ingredient


class IngredientRepository(BaseRepository[Ingredient]):
    """Supabase access for the ingredients table."""

    table = "ingredients"

    def _map(self, row: dict[str, Any]) -> Ingredient:
        return Ingredient.model_validate(row)

    def create(self, data: dict[str, Any]) -> Ingredient:
        now = to_iso(utc_now())
        row = {"created_at": now, "updated_at": now, **data}
        result = self._query().insert(row).execute()
        return self._map(result.data[0])

    def get(self, restaurant_id: str, ingredient_id: str) -> Optional[Ingredient]:
        result = (
            self._query()
            .select("*")
            .eq("id", ingredient_id)
            .eq("restaurant_id", restaurant_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map(result.data[0])

    def list_for_restaurant(self, restaurant_id: str) -> list[Ingredient]:
        result = (
            self._query()
            .select("*")
            .eq("restaurant_id", restaurant_id)
            .order("name")
            .execute()
        )
        return [self._map(row) for row in result.data]

    def update(
        self,
        restaurant_id: str,
        ingredient_id: str,
        data: dict[str, Any],
    ) -> Optional[Ingredient]:
        data = {**data, "updated_at": to_iso(utc_now())}
        result = (
            self._query()
            .update(data)
            .eq("id", ingredient_id)
            .eq("restaurant_id", restaurant_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map(result.data[0])

    def delete(self, restaurant_id: str, ingredient_id: str) -> bool:
        result = (
            self._query()
            .delete()
            .eq("id", ingredient_id)
            .eq("restaurant_id", restaurant_id)
            .execute()
        )
        return bool(result.data)

    def count_by_restaurant(self, restaurant_id: str) -> int:
        return self._count(restaurant_id=restaurant_id)
