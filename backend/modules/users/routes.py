"""
User management API endpoints.

Mounted under /api/users. Only accept-invitation is public; the rest need
an admin role and approved KYC.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_user_management_service
from api.middleware.auth import require_roles
from api.models.responses import envelope
from shared.models import AuthenticatedUser, UserRole

from .interfaces import IUserManagementService
from .models import (
    AcceptInvitationRequest,
    InviteUserRequest,
    UpdatePermissionsRequest,
)

router = APIRouter()

require_user_admin = require_roles(
    UserRole.RESTAURANT_ADMIN,
    UserRole.SUPER_ADMIN,
    kyc_approved=True,
)


@router.post("/accept-invitation")
async def accept_invitation(
    body: AcceptInvitationRequest,
    request: Request,
    service: IUserManagementService = Depends(get_user_management_service),
) -> dict:
    """Set a password for an invited account and log in."""
    result = await service.accept_invitation(body.token, body.password)
    return envelope(
        request,
        "Invitation accepted! Welcome to the team.",
        result,
        key="users.invitation_accepted",
    )


@router.post("/invite", status_code=201)
async def invite_user(
    body: InviteUserRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user_admin),
    service: IUserManagementService = Depends(get_user_management_service),
) -> dict:
    invited = await service.invite(user, body)
    return envelope(
        request,
        "Invitation sent successfully",
        {"user": invited.to_public()},
        key="users.invited",
    )


@router.get("/restaurant-users")
async def list_restaurant_users(
    request: Request,
    restaurant_id: Optional[str] = Query(default=None, description="Required for super admins"),
    user: AuthenticatedUser = Depends(require_user_admin),
    service: IUserManagementService = Depends(get_user_management_service),
) -> dict:
    """Users of a restaurant, newest first."""
    result = await service.list_restaurant_users(user, restaurant_id)
    return envelope(request, "Users retrieved", result)


@router.patch("/{user_id}/permissions")
async def update_permissions(
    user_id: str,
    body: UpdatePermissionsRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user_admin),
    service: IUserManagementService = Depends(get_user_management_service),
) -> dict:
    updated = await service.update_permissions(user, user_id, body.permissions)
    return envelope(
        request,
        "Permissions updated",
        {"user": updated.to_public()},
        key="users.permissions_updated",
    )


@router.delete("/{user_id}")
async def remove_user(
    user_id: str,
    request: Request,
    user: AuthenticatedUser = Depends(require_user_admin),
    service: IUserManagementService = Depends(get_user_management_service),
) -> dict:
    await service.remove_user(user, user_id)
    return envelope(request, "User removed successfully", key="users.removed")
