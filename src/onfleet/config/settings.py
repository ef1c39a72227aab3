"""SDK settings and environment configuration.

Uses pydantic-settings to load and validate configuration from environment
variables (prefixed with ``ONFLEET_``) with type safety and validation.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from onfleet.constants import (
    DEFAULT_API_PATH,
    DEFAULT_API_VERSION,
    DEFAULT_BACKOFF_BASE_SECONDS,
    DEFAULT_BACKOFF_JITTER_SECONDS,
    DEFAULT_BACKOFF_MAX_SECONDS,
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_USER_TIMEOUT_MS,
    ONFLEET_RATE_LIMIT_CAPACITY,
    ONFLEET_RATE_LIMIT_PERIOD_SECONDS,
)


class Settings(BaseSettings):
    """SDK settings loaded from environment variables.

    All settings are loaded from a .env file or environment variables and
    have defaults, so an empty environment yields a usable configuration
    (apart from the API key, which the client checks on construction).
    """

    model_config = SettingsConfigDict(
        env_prefix="ONFLEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Onfleet API (HTTP Basic authentication)
    api_key: str | None = Field(
        default=None,
        description="Onfleet API key used as the Basic auth username",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Onfleet host URL",
    )
    api_path: str = Field(
        default=DEFAULT_API_PATH,
        description="Path prefix of the REST API",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="API version path segment",
    )
    user_timeout_ms: int = Field(
        default=DEFAULT_USER_TIMEOUT_MS,
        gt=0,
        le=DEFAULT_USER_TIMEOUT_MS,
        description="Overall deadline per API call in milliseconds",
    )

    # Rate limiting
    rate_limit_capacity: int = Field(
        default=ONFLEET_RATE_LIMIT_CAPACITY,
        ge=1,
        description="Requests allowed per refill period",
    )
    rate_limit_period_seconds: float = Field(
        default=ONFLEET_RATE_LIMIT_PERIOD_SECONDS,
        gt=0,
        description="Seconds needed to refill an empty bucket",
    )

    # Retry policy
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        le=10,
        description="Maximum attempts per call, including the first",
    )
    backoff_base_seconds: float = Field(
        default=DEFAULT_BACKOFF_BASE_SECONDS,
        ge=0,
        description="Delay before the first retry",
    )
    backoff_max_seconds: float = Field(
        default=DEFAULT_BACKOFF_MAX_SECONDS,
        ge=0,
        description="Upper bound of the exponential delay",
    )
    backoff_jitter_seconds: float = Field(
        default=DEFAULT_BACKOFF_JITTER_SECONDS,
        ge=0,
        description="Maximum random delay added to each backoff",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL uses an http(s) scheme and has no trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must use http:// or https:// scheme")
        return v.rstrip("/")

    @field_validator("api_path", "api_version")
    @classmethod
    def validate_path_segment(cls, v: str) -> str:
        """Normalize path segments to a single leading slash."""
        v = v.strip("/")
        return f"/{v}" if v else ""


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
