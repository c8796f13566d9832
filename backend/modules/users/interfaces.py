"""
User management interface.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import AuthResult, User
from shared.models import AuthenticatedUser

from .models import InviteUserRequest, RestaurantUsersResponse


@runtime_checkable
class IUserManagementService(Protocol):
    """Restaurant staff invitations and membership management."""

    async def invite(self, inviter: AuthenticatedUser, request: InviteUserRequest) -> User:
        """
        Create an inactive staff account and email its invitation link.

        Raises:
            UserAlreadyExistsError: Email is taken
            RestaurantNotFoundError / RestaurantNotActiveError
            UserLimitReachedError: Restaurant is at max_users
            EmailDeliveryError: Invitation could not be sent; the account is removed
        """
        ...

    async def accept_invitation(self, token: Optional[str], password: Optional[str]) -> AuthResult:
        ...

    async def list_restaurant_users(
        self,
        caller: AuthenticatedUser,
        restaurant_id: Optional[str] = None,
    ) -> RestaurantUsersResponse:
        ...

    async def update_permissions(
        self,
        caller: AuthenticatedUser,
        user_id: str,
        permissions: Optional[list[str]],
    ) -> User:
        ...

    async def remove_user(self, caller: AuthenticatedUser, user_id: str) -> None:
        ...
