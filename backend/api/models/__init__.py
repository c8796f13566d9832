"""API models package."""

from .responses import envelope, error_envelope, request_locale

__all__ = [
    "envelope",
    "error_envelope",
    "request_locale",
]
