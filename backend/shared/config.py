"""
Centralized configuration for the Klarity backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, CLOUDINARY_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Klarity API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"
    default_locale: str = "en"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Rate limiting
    rate_limit_requests: int = 100
    rate_limit_window: int = 900  # seconds
    auth_rate_limit_requests: int = 50
    # Reverse proxies in front of the API; 0 ignores X-Forwarded-For
    trusted_proxy_hops: int = 1

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""
    supabase_timeout_seconds: float = 10.0

    # JWT
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24 * 7

    # One-time codes and tokens
    verification_code_ttl_minutes: int = 10
    reset_code_ttl_minutes: int = 10
    invitation_ttl_days: int = 7
    resend_cooldown_seconds: int = 60
    bcrypt_rounds: int = 12

    # Email providers (Resend is preferred when both keys are set)
    resend_api_key: str = ""
    brevo_api_key: str = ""
    email_from: str = "onboarding@resend.dev"
    email_sender_name: str = "Klarity"
    email_timeout_seconds: float = 15.0

    # Frontend URL (for invitation links)
    client_url: str = "http://localhost:3000"

    # Image storage
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_dir: str = "uploads"
    max_image_size_bytes: int = 5 * 1024 * 1024
    max_document_size_bytes: int = 10 * 1024 * 1024

    # Tenancy
    default_max_users: int = 5

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
