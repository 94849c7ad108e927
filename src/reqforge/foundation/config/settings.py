"""Environment-based configuration using pydantic-settings.

Example:
    >>> from reqforge.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # REQFORGE_LOG_LEVEL=DEBUG
    # REQFORGE_RESOURCE_API_DOMAIN=https://api.example.com
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REQFORGE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v


class ResourceSettings(BaseSettings):
    """Defaults applied while compiling resources."""

    model_config = SettingsConfigDict(
        env_prefix="REQFORGE_RESOURCE_",
        extra="ignore",
    )

    api_domain: str | None = Field(
        default=None,
        description="Domain prefixed to relative resource URLs when no api_domain param is given",
    )

    @field_validator("api_domain", mode="before")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        return (v.strip() or None) if isinstance(v, str) else v


class ReqforgeSettings(BaseSettings):
    """Root settings for reqforge.

    Example environment variables:
        REQFORGE_DEBUG=true
        REQFORGE_LOG_LEVEL=DEBUG
        REQFORGE_LOG_FORMAT=json
        REQFORGE_RESOURCE_API_DOMAIN=https://api.example.com
    """

    model_config = SettingsConfigDict(
        env_prefix="REQFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    resource: ResourceSettings = Field(default_factory=ResourceSettings)


@lru_cache(maxsize=1)
def get_settings() -> ReqforgeSettings:
    """Get the global settings instance (cached)."""
    return ReqforgeSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
