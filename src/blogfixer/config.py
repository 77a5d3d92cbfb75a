"""Configuration loading for Blogfixer."""

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shopify versions its Admin API by release quarter, e.g. 2024-01
API_VERSION_REGEX = re.compile(r"^\d{4}-(01|04|07|10)$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="BLOGFIXER_")

    # Shopify settings
    shopify_api_version: str = Field(
        default="2024-01", description="Shopify Admin REST API version"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for Shopify requests"
    )
    write_rate_per_second: float = Field(
        default=2.0, description="Maximum article updates per second (0 disables)"
    )

    # Processing settings
    default_limit: int = Field(
        default=10, ge=1, description="Articles processed when the request sets no limit"
    )
    articles_page_size: int = Field(
        default=250, ge=1, le=250, description="Articles requested per blog"
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Emit JSON log lines instead of console output")

    @field_validator("shopify_api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate the API version looks like a Shopify release."""
        v = v.strip()
        if not API_VERSION_REGEX.match(v):
            raise ValueError(
                f"BLOGFIXER_SHOPIFY_API_VERSION '{v}' is not a valid Shopify API version. "
                "Use the YYYY-MM form of a quarterly release, e.g. 2024-01."
            )
        return v

    @field_validator("write_rate_per_second")
    @classmethod
    def validate_write_rate(cls, v: float) -> float:
        """Validate the write rate is not negative."""
        if v < 0:
            raise ValueError(
                "BLOGFIXER_WRITE_RATE_PER_SECOND must be 0 (unlimited) or a positive number."
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"BLOGFIXER_LOG_LEVEL '{v}' is not a valid logging level.")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
