"""
Application configuration.

Loads settings from environment variables with sensible defaults.
The signing secret has no default and must be provided by the environment.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 5000
    cors_origins: str = "http://localhost:5173"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "token"
    session_ttl_minutes: int = 60 * 24 * 7  # 0 disables the exp claim
    cookie_secure: bool | None = None  # None follows is_production
    password_hash_iterations: int = 100_000

    # ==========================================================================
    # Storage
    # ==========================================================================

    store_timeout_seconds: float = 5.0
    upload_dir: str = "./uploads"
    upload_max_bytes: int = 10 * 1024 * 1024
    download_timeout_seconds: float = 10.0

    # ==========================================================================
    # Bookings
    # ==========================================================================

    reject_overlapping_bookings: bool = False

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def secure_cookies(self) -> bool:
        if self.cookie_secure is None:
            return self.is_production
        return self.cookie_secure

    @property
    def session_ttl_seconds(self) -> int | None:
        """Token lifetime in seconds, or None when sessions never expire."""
        if self.session_ttl_minutes <= 0:
            return None
        return self.session_ttl_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
