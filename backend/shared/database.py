"""
Supabase client for the Klarity backend.

Every repository goes through the single service-role client built here.
Tenant isolation is enforced by the services through the restaurant_id
column; row level security is not relied on.
"""

from typing import Optional

from supabase import Client, create_client
from supabase.client import ClientOptions

from .config import Settings, get_settings

_client: Optional[Client] = None


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Get the shared service-role client, creating it on first use.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _client

    if _client is not None:
        return _client

    settings = settings or get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        raise RuntimeError(f"Supabase configuration missing: set {', '.join(missing)}")

    _client = create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(postgrest_client_timeout=settings.supabase_timeout_seconds),
    )
    return _client


def reset_client_cache() -> None:
    """Forget the shared client so the next call rebuilds it."""
    global _client
    _client = None
