# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.AIRTABLE_ENDPOINT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Handlers never read the environment themselves. main.py turns Settings into
# a RelayConfig once at startup and hands it to the relay service.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.relay import RelayConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Airtable (data store)
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    AIRTABLE_API_KEY: str = Field(
        ...,
        min_length=1,
        description="Airtable personal access token (sent as a bearer token)"
    )

    AIRTABLE_ENDPOINT: str = Field(
        ...,
        min_length=1,
        description="Table URL, e.g. https://api.airtable.com/v0/<base>/<table>"
    )

    # -------------------------------------------------------------------------
    # Zapier (automation webhooks)
    # -------------------------------------------------------------------------
    # All optional. With no webhook configured an operation only talks to
    # Airtable.

    ZAPIER_ENDPOINT_SUBSCRIBE: str | None = Field(
        default=None,
        description="Catch hook notified with each new submission"
    )

    ZAPIER_ENDPOINT_UNSUBSCRIBE: str | None = Field(
        default=None,
        description="Catch hook notified with the fields of a removed record"
    )

    ZAPIER_ENDPOINT: str | None = Field(
        default=None,
        description="Shared catch hook used when an operation-specific one is unset"
    )

    # -------------------------------------------------------------------------
    # Relay Behaviour
    # -------------------------------------------------------------------------

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout applied to every outbound request"
    )

    UNSUBSCRIBE_REDIRECT_URL: str = Field(
        default="/?msg=unsubscribe",
        description="Location sent back after a successful unsubscribe"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="Path prefix for the relay and health routes"
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

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Blank variables count as unset, so ZAPIER_ENDPOINT_SUBSCRIBE= disables the hook
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def subscribe_webhook_url(self) -> str | None:
        """Webhook for subscribe events, falling back to the shared one."""
        return self.ZAPIER_ENDPOINT_SUBSCRIBE or self.ZAPIER_ENDPOINT

    @property
    def unsubscribe_webhook_url(self) -> str | None:
        """Webhook for unsubscribe events, falling back to the shared one."""
        return self.ZAPIER_ENDPOINT_UNSUBSCRIBE or self.ZAPIER_ENDPOINT

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://mysite.com" -> ["http://localhost:3000", "https://mysite.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    def to_relay_config(self) -> RelayConfig:
        """
        Build the immutable config consumed by RelayService.

        Returns:
            RelayConfig: Endpoints, credentials and timeouts for one process
        """
        return RelayConfig(
            data_store_endpoint=self.AIRTABLE_ENDPOINT.rstrip("/"),
            data_store_api_key=self.AIRTABLE_API_KEY,
            subscribe_webhook_url=self.subscribe_webhook_url,
            unsubscribe_webhook_url=self.unsubscribe_webhook_url,
            timeout_seconds=self.HTTP_TIMEOUT_SECONDS,
            unsubscribe_redirect_url=self.UNSUBSCRIBE_REDIRECT_URL,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
