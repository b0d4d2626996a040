# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FRONTEND_URL = "https://grok-talk.vercel.app"
DEFAULT_ENCRYPTION_KEY = "fallback-32-character-key-123456"

# Local dev servers allowed outside production (Expo, CRA/Next, Vite)
DEV_ORIGINS = (
    "http://localhost:8081",
    "http://localhost:3000",
    "http://localhost:5173",
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key (used for password sign-in)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret. Empty = verify tokens via Supabase Auth"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="URL prefix for all API routes"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    ENCRYPTION_KEY: str = Field(
        default=DEFAULT_ENCRYPTION_KEY,
        min_length=1,
        description="Passphrase the API-key encryption key is derived from"
    )

    FRONTEND_URL: str = Field(
        default=DEFAULT_FRONTEND_URL,
        description="Primary frontend origin allowed by CORS"
    )

    # Extra CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="",
        description="Additional allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        All allowed CORS origins, deduplicated in declaration order.

        Frontend URL first, then the default frontend, then CORS_ORIGINS
        extras, then local dev servers when not in production.
        """
        candidates = [self.FRONTEND_URL, DEFAULT_FRONTEND_URL]
        candidates += [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
        if not self.is_production:
            candidates += list(DEV_ORIGINS)

        origins: list[str] = []
        for origin in candidates:
            origin = origin.rstrip("/")
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    @property
    def using_default_encryption_key(self) -> bool:
        return self.ENCRYPTION_KEY == DEFAULT_ENCRYPTION_KEY

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
