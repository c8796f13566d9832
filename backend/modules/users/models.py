"""
User management data models.
"""

from typing import Optional
from pydantic import BaseModel

from modules.auth.models import UserPublic


class InviteUserRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    permissions: Optional[list[str]] = None
    restaurant_id: Optional[str] = None


class AcceptInvitationRequest(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = None


class UpdatePermissionsRequest(BaseModel):
    permissions: Optional[list[str]] = None


class RestaurantUsersResponse(BaseModel):
    users: list[UserPublic]
    count: int
