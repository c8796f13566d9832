"""
Locale negotiation middleware.

Picks the response language from Accept-Language, stores it on
request.state.locale and echoes it in Content-Language.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from shared.i18n import DEFAULT_LOCALE, SUPPORTED_LOCALES, negotiate_locale


class LocaleMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        supported: tuple[str, ...] = SUPPORTED_LOCALES,
        default: str = DEFAULT_LOCALE,
    ):
        super().__init__(app)
        self.supported = supported
        self.default = default if default in supported else DEFAULT_LOCALE

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        locale = negotiate_locale(
            request.headers.get("accept-language"),
            supported=self.supported,
            default=self.default,
        )
        request.state.locale = locale
        response = await call_next(request)
        response.headers["Content-Language"] = locale
        return response
