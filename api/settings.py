"""
Application settings using pydantic-settings for type-safe configuration.

All environment variables are centralized here with proper typing, validation,
and sensible defaults. Settings are loaded once at startup and cached.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gasbygas.credentials import DEFAULT_SALT

logger = logging.getLogger(__name__)

# PyJWT warns about HS256 keys shorter than the digest size
MIN_SESSION_SECRET_BYTES = 32


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings except SESSION_SECRET have defaults for local development.
    Production values should be set via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars not defined here
        case_sensitive=False,
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="http://127.0.0.1:8090",
        description="PocketBase server URL",
    )
    pocketbase_admin_email: str = Field(
        default="admin@gasbygas.local",
        description="PocketBase admin email for API authentication",
    )
    pocketbase_admin_password: str = Field(
        default="",
        description="PocketBase admin password (required - no default for security)",
    )
    skip_pb_auth: bool = Field(
        default=False,
        description="Skip PocketBase authentication on startup (for testing)",
    )
    store_page_size: int = Field(
        default=200,
        description="Records fetched per page when listing or scanning a collection",
    )

    # === Tenant Sessions ===
    session_secret: str = Field(
        default="",
        description="HMAC secret used to sign tenant session tokens (required)",
    )
    session_ttl_minutes: int = Field(
        default=720,
        description="Lifetime of a tenant session token",
    )
    credential_salt: str = Field(
        default=DEFAULT_SALT,
        description="Salt appended before encoding credentials. Changing it invalidates every stored credential.",
    )

    # === CORS Configuration ===
    # Note: Use str type for env var parsing, convert to list via property
    allowed_origins_str: str = Field(
        default="http://localhost:8081,http://localhost:19006",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    @field_validator("pocketbase_admin_password", mode="after")
    @classmethod
    def validate_admin_password(cls, v: str) -> str:
        """Warn when the admin password is unset or an insecure default."""
        insecure_defaults = {"password", "admin", "123456", ""}
        if v in insecure_defaults:
            logger.warning(
                "SECURITY WARNING: POCKETBASE_ADMIN_PASSWORD is not set or uses an insecure default. "
                "Set a strong password in your .env file for production use."
            )
        return v

    @field_validator("session_secret", mode="after")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Refuse to start without a signing key; warn when it is shorter than the HS256 digest."""
        if not v.strip():
            raise ValueError("SESSION_SECRET must be set to sign tenant session tokens")
        if len(v.encode()) < MIN_SESSION_SECRET_BYTES:
            logger.warning(
                f"SECURITY WARNING: SESSION_SECRET is shorter than {MIN_SESSION_SECRET_BYTES} bytes. "
                "Use a longer random value in production."
            )
        return v

    @field_validator("store_page_size", "session_ttl_minutes", mode="after")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins string into list."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.
    Use this function to access settings throughout the codebase.
    """
    return Settings()
