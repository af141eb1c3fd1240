"""
Social Saver Configuration Management Module

This module provides configuration management for the Social Saver backend
using Pydantic Settings. It loads and validates the environment variables
required for:
- Application settings (name, environment, debug mode, logging)
- MongoDB connection and pooling for bookmark storage
- AI classification providers (Gemini primary, Cohere secondary)
- Content extraction (scrape timeouts, redirect limit, media resolver)
- WhatsApp transport credentials (Twilio)
- Dashboard behaviour (page size, pin limit)

A missing AI provider key is not an error: the classification engine treats
the provider as unavailable and falls through to the next one.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration settings for the Social Saver backend.

    Values come from environment variables (case-insensitive) and an optional
    ``.env`` file. Every field has a default so the service can start with no
    configuration at all; in that mode classification runs on the offline
    keyword fallback and WhatsApp replies are only logged.

    Example usage:
        ```python
        from app.config import get_settings

        settings = get_settings()
        print(settings.get_available_ai_providers())
        ```
    """

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(
        default="Social-Saver",
        description="Application name displayed in API documentation and logs",
    )

    app_env: str = Field(
        default="development",
        description="Application environment (development, staging, production, testing)",
    )

    debug: bool = Field(default=True, description="Enable debug mode with hot-reload")

    log_level: str = Field(
        default="info", description="Logging level (debug, info, warning, error, critical)"
    )

    json_logs: bool = Field(
        default=False, description="Emit structured JSON log lines instead of plain text"
    )

    host: str = Field(default="0.0.0.0", description="Host address for the API server to bind to")

    port: int = Field(default=5000, description="Port number for the API server", ge=1, le=65535)

    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="List of allowed CORS origins for dashboard access",
    )

    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Dashboard URL included in WhatsApp confirmation replies",
    )

    # =========================================================================
    # MongoDB Configuration
    # =========================================================================

    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI (e.g., mongodb://localhost:27017)",
    )

    mongodb_db_name: str = Field(
        default="social_saver", description="MongoDB database name for bookmark storage"
    )

    mongodb_min_pool_size: int = Field(
        default=1, description="Minimum number of connections in MongoDB connection pool", ge=0
    )

    mongodb_max_pool_size: int = Field(
        default=20, description="Maximum number of connections in MongoDB connection pool", ge=1
    )

    # =========================================================================
    # AI Classification Providers
    # =========================================================================

    gemini_api_key: str | None = Field(
        default=None, description="Google Gemini API key (primary classification provider)"
    )

    gemini_model: str = Field(
        default="gemini-2.0-flash", description="Gemini model name used for classification"
    )

    cohere_api_key: str | None = Field(
        default=None, description="Cohere API key (secondary classification provider)"
    )

    cohere_model: str = Field(
        default="command-r", description="Cohere chat model name used for classification"
    )

    ai_temperature: float = Field(
        default=0.3, description="Sampling temperature for classification prompts", ge=0.0, le=2.0
    )

    ai_max_output_tokens: int = Field(
        default=200, description="Maximum tokens a provider may return", ge=16
    )

    ai_request_timeout_seconds: float = Field(
        default=15.0, description="Hard timeout for a single provider call", gt=0
    )

    ai_max_input_chars: int = Field(
        default=1000, description="Analysis text is cut to this many characters", ge=100
    )

    # =========================================================================
    # Content Extraction
    # =========================================================================

    scrape_timeout_seconds: float = Field(
        default=10.0, description="Timeout for page scrapes and oEmbed calls", gt=0
    )

    scrape_max_redirects: int = Field(
        default=5, description="Maximum redirect hops followed while scraping", ge=0, le=20
    )

    scrape_max_response_bytes: int = Field(
        default=2 * 1024 * 1024, description="Largest page body read while scraping", ge=1024
    )

    enable_media_resolver: bool = Field(
        default=True, description="Try the external media-URL resolver for Instagram videos"
    )

    media_resolver_timeout_seconds: float = Field(
        default=30.0, description="Hard timeout for one media resolver invocation", gt=0
    )

    # =========================================================================
    # WhatsApp Transport (Twilio)
    # =========================================================================

    twilio_account_sid: str | None = Field(default=None, description="Twilio account SID")

    twilio_auth_token: str | None = Field(default=None, description="Twilio auth token")

    twilio_whatsapp_number: str = Field(
        default="whatsapp:+14155238886",
        description="Sender number for WhatsApp replies (Twilio sandbox by default)",
    )

    # =========================================================================
    # Dashboard
    # =========================================================================

    max_pinned_bookmarks: int = Field(
        default=3, description="Maximum number of bookmarks that can be pinned", ge=0
    )

    default_page_size: int = Field(default=9, description="Default bookmarks per page", ge=1)

    max_page_size: int = Field(default=50, description="Upper bound for the limit parameter", ge=1)

    # =========================================================================
    # Model Configuration
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid logging level."""
        valid_levels = {"debug", "info", "warning", "error", "critical"}
        normalized = v.lower()
        if normalized not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {', '.join(valid_levels)}")
        return normalized

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate that app_env is a valid environment name."""
        valid_envs = {"development", "staging", "production", "testing"}
        normalized = v.lower()
        if normalized not in valid_envs:
            raise ValueError(f"Invalid app_env '{v}'. Must be one of: {', '.join(valid_envs)}")
        return normalized

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string if provided as string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("gemini_api_key", "cohere_api_key", "twilio_account_sid", "twilio_auth_token")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only credentials as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def has_gemini_configured(self) -> bool:
        """Check if the Gemini API key is configured."""
        return bool(self.gemini_api_key)

    @property
    def has_cohere_configured(self) -> bool:
        """Check if the Cohere API key is configured."""
        return bool(self.cohere_api_key)

    @property
    def has_twilio_configured(self) -> bool:
        """Check if Twilio credentials are present for outbound WhatsApp replies."""
        return bool(self.twilio_account_sid and self.twilio_auth_token)

    def get_available_ai_providers(self) -> list[str]:
        """
        Get the classification chain in priority order.

        Only providers with a key are listed; the keyword fallback is always
        last since it needs no credentials.
        """
        providers = []
        if self.has_gemini_configured:
            providers.append("gemini")
        if self.has_cohere_configured:
            providers.append("cohere")
        providers.append("keyword")
        return providers


@lru_cache
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    The ``lru_cache`` decorator makes configuration load once per process;
    subsequent calls return the cached instance without re-reading the
    environment or ``.env`` file.

    Returns:
        Settings: The global configuration instance.
    """
    return Settings()
