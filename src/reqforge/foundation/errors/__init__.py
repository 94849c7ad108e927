"""Unified error handling for reqforge.

- ErrorCode: Error codes for build failures
- ResourceError/ResourceException: Structured errors and exceptions
- MissingRequiredParameters/MissingCredentials: The two pipeline failures
- Result/Ok/Err: Monadic error handling for non-raising builds
- ErrorTrace/ErrorContext: Error context stacking
"""

from .errors import (
    ErrorCode,
    MissingCredentials,
    MissingRequiredParameters,
    ResourceError,
    ResourceException,
)
from .result import Err, Ok, Result
from .types import ErrorContext, ErrorTrace, JsonDict, JsonValue, trace

__all__ = [
    # Core errors
    "ErrorCode", "ResourceError", "ResourceException",
    "MissingRequiredParameters", "MissingCredentials",
    # Result monad
    "Result", "Ok", "Err",
    # Error context
    "ErrorContext", "ErrorTrace", "trace",
    # Type aliases
    "JsonDict", "JsonValue",
]
