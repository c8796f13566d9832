"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from modules.auth.routes import router as auth_router
from modules.ingredients.routes import router as ingredients_router
from modules.kyc.routes import router as kyc_router
from modules.users.routes import router as users_router
from shared.config import Settings, get_settings

from .errors import register_exception_handlers
from .middleware.locale import LocaleMiddleware
from .middleware.rate_limit import SlidingWindowRateLimiter, api_rate_limit, auth_rate_limit
from .routes import admin, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings: Settings = app.state.settings
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"({settings.environment})"
    )
    yield
    logger.info(f"Shutting down {settings.app_name}")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Authentication, RBAC and KYC onboarding for restaurant tenants",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url="/api-redoc",
    )
    app.state.settings = settings
    app.state.api_rate_limiter = SlidingWindowRateLimiter(
        settings.rate_limit_requests, settings.rate_limit_window
    )
    app.state.auth_rate_limiter = SlidingWindowRateLimiter(
        settings.auth_rate_limit_requests, settings.rate_limit_window
    )

    register_exception_handlers(app)

    app.add_middleware(LocaleMiddleware, default=settings.default_locale)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    limited = [Depends(api_rate_limit)]
    app.include_router(health.router, tags=["health"])
    app.include_router(
        auth_router,
        prefix="/api/auth",
        tags=["auth"],
        dependencies=[Depends(auth_rate_limit)],
    )
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"], dependencies=limited)
    app.include_router(users_router, prefix="/api/users", tags=["users"], dependencies=limited)
    app.include_router(kyc_router, prefix="/api/kyc", tags=["kyc"], dependencies=limited)
    app.include_router(
        ingredients_router,
        prefix="/api/ingredients",
        tags=["ingredients"],
        dependencies=limited,
    )

    # Locally stored images and documents
    app.mount(
        "/uploads",
        StaticFiles(directory=Path(settings.upload_dir), check_dir=False),
        name="uploads",
    )

    return app


# Application instance for uvicorn
app = create_app()
