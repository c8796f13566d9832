"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from math import ceil
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    RESTAURANT_ADMIN = "restaurant_admin"
    RESTAURANT_STAFF = "restaurant_staff"


class Permission(str, Enum):
    MANAGE_INGREDIENTS = "manage_ingredients"
    MANAGE_SUPPLIERS = "manage_suppliers"
    MANAGE_STOCK = "manage_stock"
    VIEW_REPORTS = "view_reports"
    MANAGE_USERS = "manage_users"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class KycStatus(str, Enum):
    NOT_SUBMITTED = "not_submitted"
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Loaded from the users table for every authenticated request, so role
    and permission changes take effect without re-issuing tokens.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="User's email address")
    name: str = Field(default="", description="Display name")
    role: UserRole = Field(default=UserRole.RESTAURANT_STAFF, description="User role")
    restaurant_id: Optional[str] = Field(None, description="Tenant the user belongs to")
    permissions: list[Permission] = Field(default_factory=list)
    is_verified: bool = Field(default=False, description="Whether email is verified")
    account_status: AccountStatus = Field(default=AccountStatus.ACTIVE)
    kyc_status: KycStatus = Field(default=KycStatus.NOT_SUBMITTED)

    last_login_at: Optional[datetime] = Field(None, description="Last sign-in time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def has_permission(self, permission: Permission) -> bool:
        return permission in self.permissions


class Pagination(BaseModel):
    """Pagination block returned alongside list results."""

    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "Pagination":
        total_pages = ceil(total / page_size) if page_size else 0
        return cls(
            current_page=page,
            page_size=page_size,
            total_items=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )
