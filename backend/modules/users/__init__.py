"""
User management module.

Staff invitations, invitation acceptance, and per-restaurant membership
(listing, permissions, removal).
"""

from .interfaces import IUserManagementService
from .exceptions import (
    InvalidInvitationError,
    ProtectedUserError,
    UserLimitReachedError,
    UserNotInRestaurantError,
)

__all__ = [
    "IUserManagementService",
    "InvalidInvitationError",
    "ProtectedUserError",
    "UserLimitReachedError",
    "UserNotInRestaurantError",
]
