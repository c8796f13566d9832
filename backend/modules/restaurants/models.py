"""
Restaurant module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from shared.models import Pagination


class RestaurantStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class Restaurant(BaseModel):
    """A row of the restaurants table."""

    model_config = {"extra": "ignore"}

    id: str
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    status: RestaurantStatus = RestaurantStatus.ACTIVE
    admin_id: Optional[str] = None
    created_by: Optional[str] = None
    kyc_submission_id: Optional[str] = None
    max_users: int = 5
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RestaurantStats(BaseModel):
    user_count: int
    ingredient_count: int


class RestaurantDetail(BaseModel):
    restaurant: Restaurant
    stats: RestaurantStats


class RestaurantListResponse(BaseModel):
    restaurants: list[Restaurant]
    pagination: Pagination


class KycCounts(BaseModel):
    pending: int
    approved: int
    rejected: int


class PlatformStats(BaseModel):
    """Headline numbers for the super admin dashboard."""

    total_restaurants: int
    total_users: int
    kyc: KycCounts


class UpdateRestaurantStatusRequest(BaseModel):
    status: Optional[str] = None
