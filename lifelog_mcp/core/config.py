"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
All values are loaded from environment variables and an optional ``.env`` file.

Settings are constructed once at startup via :func:`load_settings` and passed
explicitly to the components that need them; request logic never reads the
environment on its own.
"""

from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifelog_mcp.errors import ConfigurationError

API_KEY_ENV_VAR = "LIMITLESS_API_KEY"
API_BASE_ENV_VAR = "LIMITLESS_API_BASE"
DEFAULT_API_BASE = "https://api.limitless.ai"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Limitless API Configuration
    # =====================================================================
    api_key: str = Field(
        ...,
        alias=API_KEY_ENV_VAR,
        description="Limitless API key sent as the X-API-KEY header",
        repr=False,
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE,
        alias=API_BASE_ENV_VAR,
        description="Base URL of the Limitless REST API",
    )
    request_timeout: Optional[float] = Field(
        default=None,
        alias="LIMITLESS_REQUEST_TIMEOUT",
        description="HTTP timeout in seconds for remote API calls (unset means no timeout)",
        gt=0,
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        alias="LIFELOG_MCP_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="simple",
        alias="LIFELOG_MCP_LOG_FORMAT",
        description="Log line format (simple, detailed, json)",
    )

    # =====================================================================
    # Monitoring Configuration
    # =====================================================================
    logfire_enabled: bool = Field(
        default=False,
        alias="LOGFIRE_ENABLED",
        description="Send traces and tool call logs to Logfire",
    )
    logfire_token: Optional[str] = Field(
        default=None,
        alias="LOGFIRE_TOKEN",
        description="Logfire write token",
        repr=False,
    )
    logfire_environment: str = Field(
        default="development",
        alias="LOGFIRE_ENVIRONMENT",
        description="Deployment environment reported to Logfire",
    )
    logfire_service_name: str = Field(
        default="lifelog-mcp",
        alias="LOGFIRE_SERVICE_NAME",
        description="Service name reported to Logfire",
    )
    logfire_trace_httpx: bool = Field(
        default=True,
        alias="LOGFIRE_TRACE_HTTPX",
        description="Trace outbound HTTPX requests",
    )
    logfire_trace_mcp: bool = Field(
        default=True,
        alias="LOGFIRE_TRACE_MCP",
        description="Trace MCP sessions",
    )

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("API key must not be blank")
        return value

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of: {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("simple", "detailed", "json"):
            raise ValueError("log format must be one of: simple, detailed, json")
        return value


def load_settings(**overrides: Any) -> Settings:
    """Build the settings for this process.

    Args:
        overrides: Field values (by name or alias) taking precedence over the
            environment. ``_env_file`` may be passed to control dotenv loading.

    Returns:
        The validated ``Settings``.

    Raises:
        ConfigurationError: If the API key is missing or any value is invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        for error in e.errors():
            if API_KEY_ENV_VAR in error.get("loc", ()) or "api_key" in error.get("loc", ()):
                raise ConfigurationError(f"Missing {API_KEY_ENV_VAR} in environment variables") from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e
