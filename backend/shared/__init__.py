"""
Shared infrastructure for Klarity backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- i18n: Locale negotiation and message catalog
- repository: Base repository over Supabase tables
- uploads: Validation of uploaded files

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    KlarityError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    RateLimitError,
    ExternalServiceError,
)
from .models import (
    AuthenticatedUser,
    UserRole,
    Permission,
    AccountStatus,
    KycStatus,
    Pagination,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "KlarityError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "RateLimitError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "UserRole",
    "Permission",
    "AccountStatus",
    "KycStatus",
    "Pagination",
]
