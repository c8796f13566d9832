"""
User management service implementation.

Restaurant admins invite staff into their own restaurant; super admins
name the restaurant explicitly. Invitees get an inactive shell account
that the invitation token activates exactly once.
"""

import logging
from datetime import timedelta
from typing import Optional

from modules.auth.exceptions import UserAlreadyExistsError
from modules.auth.models import AuthResult, User
from modules.auth.phone import normalize_phone_number
from modules.auth.repository import UserRepository
from modules.auth.security import (
    PasswordHasher,
    TokenManager,
    generate_invitation_token,
    generate_temporary_password,
)
from modules.auth.validation import (
    email_errors,
    normalize_email,
    password_errors,
    phone_errors,
)
from modules.notifications.exceptions import EmailDeliveryError
from modules.notifications.interfaces import INotificationService
from modules.restaurants.exceptions import RestaurantRequiredError
from modules.restaurants.interfaces import IRestaurantService
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.models import (
    AccountStatus,
    AuthenticatedUser,
    KycStatus,
    Permission,
    UserRole,
)
from shared.repository import to_iso, utc_now

from .exceptions import (
    InvalidInvitationError,
    ProtectedUserError,
    UserLimitReachedError,
    UserNotInRestaurantError,
)
from .interfaces import IUserManagementService
from .models import InviteUserRequest, RestaurantUsersResponse

logger = logging.getLogger(__name__)

ADMIN_ROLES = (UserRole.SUPER_ADMIN, UserRole.RESTAURANT_ADMIN)


def _parse_permissions(values: Optional[list[str]]) -> tuple[list[Permission], list[str]]:
    permissions, errors = [], []
    for value in values or []:
        try:
            permission = Permission(value)
        except ValueError:
            errors.append(f"Invalid permission: {value}")
            continue
        if permission not in permissions:
            permissions.append(permission)
    return permissions, errors


class UserManagementService(IUserManagementService):
    def __init__(
        self,
        users: UserRepository,
        restaurants: IRestaurantService,
        notifications: INotificationService,
        hasher: PasswordHasher,
        tokens: TokenManager,
        settings: Optional[Settings] = None,
    ):
        self._users = users
        self._restaurants = restaurants
        self._notifications = notifications
        self._hasher = hasher
        self._tokens = tokens
        self._settings = settings or get_settings()

    def _target_restaurant(
        self,
        caller: AuthenticatedUser,
        requested: Optional[str],
    ) -> str:
        """Super admins choose the restaurant; everyone else uses their own."""
        if caller.is_super_admin:
            if not requested:
                raise ValidationError(
                    errors=["restaurant_id is required for super admins"],
                    code="VALIDATION_FAILED",
                )
            return requested
        if not caller.restaurant_id:
            raise RestaurantRequiredError()
        return caller.restaurant_id

    def _scoped_user(self, caller: AuthenticatedUser, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotInRestaurantError(user_id)
        if not caller.is_super_admin and user.restaurant_id != caller.restaurant_id:
            raise UserNotInRestaurantError(user_id)
        return user

    # -------------------------------------------------------------------------
    # Invitations
    # -------------------------------------------------------------------------

    async def invite(self, inviter: AuthenticatedUser, request: InviteUserRequest) -> User:
        permissions, errors = _parse_permissions(request.permissions)
        if not request.name or not request.name.strip():
            errors.insert(0, "Name is required")
        errors.extend(email_errors(request.email))
        errors.extend(phone_errors(request.phone_number))
        if errors:
            raise ValidationError(errors=errors, code="VALIDATION_FAILED")

        restaurant_id = self._target_restaurant(inviter, request.restaurant_id)
        email = normalize_email(request.email)
        if self._users.email_exists(email):
            raise UserAlreadyExistsError(email)

        restaurant = await self._restaurants.get_active_restaurant(restaurant_id)
        if self._users.count_by_restaurant(restaurant.id) >= restaurant.max_users:
            raise UserLimitReachedError(restaurant.max_users)

        token = generate_invitation_token()
        expires = utc_now() + timedelta(days=self._settings.invitation_ttl_days)
        user = self._users.create({
            "name": request.name.strip(),
            "email": email,
            "phone_number": normalize_phone_number(request.phone_number),
            "password_hash": self._hasher.hash(generate_temporary_password()),
            "role": UserRole.RESTAURANT_STAFF.value,
            "restaurant_id": restaurant.id,
            "permissions": [p.value for p in permissions],
            "invited_by": inviter.id,
            "invitation_token": token,
            "invitation_expires": to_iso(expires),
            "is_verified": False,
            "kyc_status": KycStatus.APPROVED.value,
            "account_status": AccountStatus.INACTIVE.value,
        })

        try:
            await self._notifications.send_invitation(
                user.email,
                user.name,
                restaurant.name,
                inviter.name or inviter.email,
                token,
            )
        except EmailDeliveryError:
            logger.error(f"Invitation email to {email} failed; removing shell user {user.id}")
            self._users.delete(user.id)
            raise

        logger.info(f"User {inviter.id} invited {user.id} to restaurant {restaurant.id}")
        return user

    async def accept_invitation(self, token: Optional[str], password: Optional[str]) -> AuthResult:
        if not token or not password:
            raise ValidationError(
                errors=["Token and password are required"], code="VALIDATION_FAILED"
            )
        errors = password_errors(password)
        if errors:
            raise ValidationError(errors=errors, code="VALIDATION_FAILED")

        user = self._users.consume_invitation(token, self._hasher.hash(password))
        if user is None:
            raise InvalidInvitationError()

        logger.info(f"Invitation accepted by user {user.id}")
        return AuthResult(token=self._tokens.issue(user), user=user.to_public())

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    async def list_restaurant_users(
        self,
        caller: AuthenticatedUser,
        restaurant_id: Optional[str] = None,
    ) -> RestaurantUsersResponse:
        target = self._target_restaurant(caller, restaurant_id)
        users = [user.to_public() for user in self._users.list_by_restaurant(target)]
        return RestaurantUsersResponse(users=users, count=len(users))

    async def update_permissions(
        self,
        caller: AuthenticatedUser,
        user_id: str,
        permissions: Optional[list[str]],
    ) -> User:
        if permissions is None:
            raise ValidationError(errors=["Permissions are required"], code="VALIDATION_FAILED")
        parsed, errors = _parse_permissions(permissions)
        if errors:
            raise ValidationError(errors=errors, code="VALIDATION_FAILED")

        user = self._scoped_user(caller, user_id)
        if user.role in ADMIN_ROLES:
            raise ProtectedUserError("Cannot modify admin permissions")

        updated = self._users.update(user.id, {"permissions": [p.value for p in parsed]})
        logger.info(f"Permissions of user {user.id} set to {[p.value for p in parsed]}")
        return updated or user

    async def remove_user(self, caller: AuthenticatedUser, user_id: str) -> None:
        user = self._scoped_user(caller, user_id)
        if user.id == caller.id:
            raise ProtectedUserError("You cannot remove yourself")
        if user.role in ADMIN_ROLES:
            raise ProtectedUserError("Cannot remove restaurant admin")

        self._users.delete(user.id)
        logger.info(f"User {caller.id} removed user {user.id}")
