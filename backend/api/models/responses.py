"""
Response envelope.

Every endpoint answers with {success, message, data}; failed validation
adds an itemized `errors` list.
"""

from typing import Any, Optional

from fastapi import Request

from shared.i18n import DEFAULT_LOCALE, translate


def request_locale(request: Request) -> str:
    return getattr(request.state, "locale", DEFAULT_LOCALE)


def envelope(
    request: Request,
    message: str,
    data: Any = None,
    key: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build a success envelope.

    `key` selects the catalog entry used for non-English locales; the
    English `message` is the fallback.
    """
    return {
        "success": True,
        "message": translate(key, request_locale(request), message),
        "data": data,
    }


def error_envelope(
    request: Request,
    message: str,
    code: Optional[str] = None,
    errors: Optional[list[str]] = None,
    error: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": False,
        "message": translate(code, request_locale(request), message),
    }
    if errors:
        body["errors"] = errors
    if error:
        body["error"] = error
    return body
