"""Foundation - Core building blocks for reqforge.

Contains: error handling, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "ResourceError", "ResourceException",
    "MissingRequiredParameters", "MissingCredentials",
    "Result", "Ok", "Err", "ErrorContext", "ErrorTrace", "trace",
    # Config
    "ReqforgeSettings", "LoggingSettings", "ResourceSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "ResourceError", "ResourceException",
                "MissingRequiredParameters", "MissingCredentials",
                "Result", "Ok", "Err", "ErrorContext", "ErrorTrace", "trace"):
        from . import errors
        return getattr(errors, name)

    if name in ("ReqforgeSettings", "LoggingSettings", "ResourceSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
