"""
Restaurant service implementation.
"""

import logging
from typing import Any, Optional

from modules.auth.repository import UserRepository
from modules.ingredients.repository import IngredientRepository
from modules.kyc.models import SubmissionStatus
from modules.kyc.repository import KycRepository
from shared.config import Settings, get_settings
from shared.models import Pagination

from .exceptions import (
    InvalidRestaurantStatusError,
    RestaurantNotActiveError,
    RestaurantNotFoundError,
)
from .interfaces import IRestaurantService
from .models import (
    KycCounts,
    PlatformStats,
    Restaurant,
    RestaurantDetail,
    RestaurantListResponse,
    RestaurantStats,
    RestaurantStatus,
)
from .repository import RestaurantRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Optional[str]) -> RestaurantStatus:
    try:
        return RestaurantStatus(value)
    except ValueError:
        raise InvalidRestaurantStatusError(value)


class RestaurantService(IRestaurantService):
    def __init__(
        self,
        repository: RestaurantRepository,
        users: UserRepository,
        ingredients: IngredientRepository,
        kyc: KycRepository,
        settings: Optional[Settings] = None,
    ):
        self._restaurants = repository
        self._users = users
        self._ingredients = ingredients
        self._kyc = kyc
        self._settings = settings or get_settings()

    async def create_restaurant(self, data: dict[str, Any]) -> Restaurant:
        row = {
            "status": RestaurantStatus.ACTIVE.value,
            "max_users": self._settings.default_max_users,
            **data,
        }
        restaurant = self._restaurants.create(row)
        logger.info(f"Created restaurant {restaurant.id} ({restaurant.name})")
        return restaurant

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        restaurant = self._restaurants.get_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant

    async def get_active_restaurant(self, restaurant_id: str) -> Restaurant:
        restaurant = await self.get_restaurant(restaurant_id)
        if restaurant.status != RestaurantStatus.ACTIVE:
            raise RestaurantNotActiveError(restaurant_id, restaurant.status.value)
        return restaurant

    async def get_restaurant_detail(self, restaurant_id: str) -> RestaurantDetail:
        restaurant = await self.get_restaurant(restaurant_id)
        stats = RestaurantStats(
            user_count=self._users.count_by_restaurant(restaurant_id),
            ingredient_count=self._ingredients.count_by_restaurant(restaurant_id),
        )
        return RestaurantDetail(restaurant=restaurant, stats=stats)

    async def list_restaurants(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
    ) -> RestaurantListResponse:
        status_filter = _parse_status(status) if status else None
        restaurants, total = self._restaurants.list_restaurants(page, page_size, status_filter)
        return RestaurantListResponse(
            restaurants=restaurants,
            pagination=Pagination.build(page, page_size, total),
        )

    async def update_status(self, restaurant_id: str, status: Optional[str]) -> Restaurant:
        new_status = _parse_status(status)
        restaurant = self._restaurants.update_status(restaurant_id, new_status)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        logger.info(f"Restaurant {restaurant_id} status set to {new_status.value}")
        return restaurant

    async def get_platform_stats(self) -> PlatformStats:
        return PlatformStats(
            total_restaurants=self._restaurants.count_by_status(RestaurantStatus.ACTIVE),
            total_users=self._users.count_active(),
            kyc=KycCounts(
                pending=self._kyc.count_by_status(SubmissionStatus.PENDING),
                approved=self._kyc.count_by_status(SubmissionStatus.APPROVED),
                rejected=self._kyc.count_by_status(SubmissionStatus.REJECTED),
            ),
        )
