"""
Restaurant module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    PlatformStats,
    Restaurant,
    RestaurantDetail,
    RestaurantListResponse,
)


@runtime_checkable
class IRestaurantService(Protocol):
    """Tenant records and platform-wide statistics."""

    async def create_restaurant(self, data: dict[str, Any]) -> Restaurant:
        ...

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        """
        Raises:
            RestaurantNotFoundError: If no such restaurant exists
        """
        ...

    async def get_active_restaurant(self, restaurant_id: str) -> Restaurant:
        """
        Load a restaurant that can accept new users.

        Raises:
            RestaurantNotFoundError: If no such restaurant exists
            RestaurantNotActiveError: If it is suspended or inactive
        """
        ...

    async def get_restaurant_detail(self, restaurant_id: str) -> RestaurantDetail:
        """Restaurant plus its user and ingredient counts."""
        ...

    async def list_restaurants(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
    ) -> RestaurantListResponse:
        ...

    async def update_status(self, restaurant_id: str, status: Optional[str]) -> Restaurant:
        ...

    async def get_platform_stats(self) -> PlatformStats:
        ...
