"""
Health check and welcome endpoints.

Provides endpoints for monitoring application health.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from shared.config import Settings, get_settings

router = APIRouter()

_started_at = time.monotonic()


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime
    uptime: float


class WelcomeResponse(BaseModel):
    success: bool
    message: str
    version: str
    environment: str
    documentation: str
    health: str


@router.get("/", response_model=WelcomeResponse)
async def welcome(request: Request) -> WelcomeResponse:
    settings = _settings(request)
    base = str(request.base_url).rstrip("/")
    return WelcomeResponse(
        success=True,
        message=f"Welcome to the {settings.app_name}",
        version=settings.app_version,
        environment=settings.environment,
        documentation=f"{base}/api-docs",
        health=f"{base}/health",
    )


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    settings = _settings(request)
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _started_at, 3),
    )
