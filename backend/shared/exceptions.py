"""
Base exception classes for the Klarity backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code, so choosing the
right base is how a module decides what the client sees.
"""

from typing import Optional, Any


class KlarityError(Exception):
    """
    Base exception for all Klarity errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(KlarityError):
    """Resource not found."""

    pass


class ValidationError(KlarityError):
    """
    Input validation failed.

    Carries an itemized list of human-readable problems so the client can
    show every failing field at once.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[list[str]] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.errors = list(errors or [])

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.errors:
            result["errors"] = self.errors
        return result


class AuthenticationError(KlarityError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(KlarityError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(KlarityError):
    """Resource already exists or is in a state that forbids the operation."""

    pass


class RateLimitError(KlarityError):
    """Too many requests in the current window."""

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        retry_after: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, code or "RATE_LIMITED")
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ExternalServiceError(KlarityError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
