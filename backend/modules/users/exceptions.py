"""
User management exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class UserLimitReachedError(ValidationError):
    def __init__(self, max_users: int):
        super().__init__(
            f"User limit reached. Your plan allows {max_users} users.",
            code="USER_LIMIT_REACHED",
            details={"max_users": max_users},
        )


class InvalidInvitationError(ValidationError):
    def __init__(self):
        super().__init__(
            "Invalid or expired invitation token",
            code="INVALID_INVITATION",
        )


class UserNotInRestaurantError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(
            "User not found in your restaurant",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class ProtectedUserError(AuthorizationError):
    """Raised when an action targets an admin or the caller themself."""

    def __init__(self, message: str):
        super().__init__(message, code="PROTECTED_USER")
