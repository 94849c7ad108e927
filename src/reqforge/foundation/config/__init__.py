"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    ReqforgeSettings,
    ResourceSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "ReqforgeSettings",
    "ResourceSettings",
    "clear_settings_cache",
    "get_settings",
]
