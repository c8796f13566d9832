"""
Restaurant module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class RestaurantNotFoundError(NotFoundError):
    def __init__(self, restaurant_id: str):
        super().__init__(
            "Restaurant not found",
            code="RESTAURANT_NOT_FOUND",
            details={"restaurant_id": restaurant_id},
        )


class RestaurantNotActiveError(AuthorizationError):
    def __init__(self, restaurant_id: str, status: str):
        super().__init__(
            f"Restaurant is {status}",
            code="RESTAURANT_NOT_ACTIVE",
            details={"restaurant_id": restaurant_id, "status": status},
        )


class InvalidRestaurantStatusError(ValidationError):
    def __init__(self, status: object):
        super().__init__(
            "Invalid status. Must be one of: active, suspended, inactive",
            code="INVALID_STATUS",
            details={"status": status},
        )


class RestaurantRequiredError(AuthorizationError):
    """Raised when a tenant-scoped action is attempted by a user with no restaurant."""

    def __init__(self):
        super().__init__(
            "You are not associated with a restaurant",
            code="RESTAURANT_REQUIRED",
        )
