"""
Exception handlers.

Maps the KlarityError taxonomy to HTTP status codes and renders every
failure in the response envelope.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import Settings, get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    KlarityError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

from .models.responses import error_envelope

logger = logging.getLogger(__name__)


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


# Checked in order; the first matching base class wins
STATUS_BY_ERROR: tuple[tuple[type[KlarityError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (RateLimitError, 429),
    (ExternalServiceError, 500),
)


def status_for(exc: KlarityError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _format_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


async def klarity_error_handler(request: Request, exc: KlarityError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}", exc_info=exc)

    error = {"code": exc.code}
    if not _settings(request).is_production and exc.details:
        error["details"] = exc.details

    headers = {}
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)
    if isinstance(exc, AuthenticationError):
        headers["WWW-Authenticate"] = "Bearer"

    errors = exc.errors if isinstance(exc, ValidationError) else None
    return JSONResponse(
        status_code=status_code,
        content=error_envelope(request, exc.message, exc.code, errors=errors, error=error),
        headers=headers or None,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=400,
        content=error_envelope(request, "Validation failed", "VALIDATION_FAILED", errors=errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content=error_envelope(
                request,
                "Route not found",
                "ROUTE_NOT_FOUND",
                error={"path": request.url.path, "method": request.method},
            ),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(request, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    error = {"code": "INTERNAL_ERROR"}
    if not _settings(request).is_production:
        error["details"] = str(exc)
        error["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(
        status_code=500,
        content=error_envelope(request, "Internal server error", "INTERNAL_ERROR", error=error),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KlarityError, klarity_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
