"""
Restaurants module.

Tenant records, their lifecycle status and per-restaurant statistics.
"""

from .interfaces import IRestaurantService
from .models import Restaurant, RestaurantDetail, RestaurantStatus, PlatformStats
from .exceptions import (
    InvalidRestaurantStatusError,
    RestaurantNotActiveError,
    RestaurantNotFoundError,
    RestaurantRequiredError,
)

__all__ = [
    "IRestaurantService",
    "Restaurant",
    "RestaurantDetail",
    "RestaurantStatus",
    "PlatformStats",
    "InvalidRestaurantStatusError",
    "RestaurantNotActiveError",
    "RestaurantNotFoundError",
    "RestaurantRequiredError",
]
