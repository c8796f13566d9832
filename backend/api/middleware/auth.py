"""
Authentication and access-control dependencies.

get_current_user resolves the bearer token to the user's current state in
the database. The require_* factories layer flat role, permission and KYC
checks on top of it.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_auth_service
from modules.auth.exceptions import (
    InsufficientPermissionsError,
    KycNotApprovedError,
    MissingTokenError,
)
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser, KycStatus, Permission, UserRole

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError("Not authorized, no token provided")
    return await auth.authenticate(credentials.credentials)


def _ensure_kyc_approved(user: AuthenticatedUser) -> None:
    if user.is_super_admin:
        return
    if user.kyc_status != KycStatus.APPROVED:
        raise KycNotApprovedError(user.kyc_status.value)


async def require_kyc_approval(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Pass super admins and users whose KYC is approved."""
    _ensure_kyc_approved(user)
    return user


def require_roles(*roles: UserRole, kyc_approved: bool = False):
    """
    Dependency factory: the user's role must be one of `roles`.

    Usage:
        @router.get("/admin-only")
        async def route(user: AuthenticatedUser = Depends(require_roles(UserRole.SUPER_ADMIN))):
            ...
    """
    allowed = set(roles)

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if user.role not in allowed:
            raise InsufficientPermissionsError(
                [role.value for role in roles], user.role.value
            )
        if kyc_approved:
            _ensure_kyc_approved(user)
        return user

    return dependency


def require_permission(
    permission: Permission,
    roles: tuple[UserRole, ...] = (UserRole.RESTAURANT_ADMIN,),
):
    """
    Dependency factory: the user holds `permission`, or one of `roles`
    which implies every permission within its restaurant.
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if user.role in roles or user.has_permission(permission):
            return user
        raise InsufficientPermissionsError(
            [permission.value, *(role.value for role in roles)], user.role.value
        )

    return dependency


require_super_admin = require_roles(UserRole.SUPER_ADMIN)
