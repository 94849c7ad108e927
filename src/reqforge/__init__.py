"""reqforge - Declarative HTTP resources compiled into request specs.

Describe an endpoint once (verb, URL template, allowed and required
parameters, auth and redirect policy) and compile it with runtime
parameters into a RequestSpec a transport layer can execute.

Quick Start:
    >>> from reqforge import ResourceDefinition, BasicCredentials
    >>>
    >>> update_user = (
    ...     ResourceDefinition(name="Update User", verb="put", url="https://api.example.com/users/{id}")
    ...     .set_requires("id")
    ...     .set_with(["email", "name"])
    ...     .set_authenticates(True)
    ... )
    >>> spec = update_user.compiler().build(
    ...     {"id": 7, "email": "a@example.com", "admin": True},
    ...     credentials=BasicCredentials(username="alice", password="s3cret"),
    ... )
    >>> spec.url
    'https://api.example.com/users/7'
    >>> spec.options.body
    {'id': 7, 'email': 'a@example.com'}

Non-raising builds:
    >>> result = update_user.compiler().try_build({})
    >>> result.is_err()
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    ErrorTrace,
    MissingCredentials,
    MissingRequiredParameters,
    Ok,
    ResourceError,
    ResourceException,
    Result,
)

# Config
from .foundation.config import ReqforgeSettings, clear_settings_cache, get_settings

# Logging
from .observability import configure_logging, get_logger

# Resources
from .resource import (
    ALL_METHODS,
    BasicCredentials,
    HttpMethod,
    OAuthToken,
    RequestOptions,
    RequestSpec,
    ResourceCompiler,
    ResourceDefinition,
)

__all__ = [
    # Version
    "__version__",
    # Resources
    "ResourceDefinition",
    "ResourceCompiler",
    "RequestSpec",
    "RequestOptions",
    "HttpMethod",
    "ALL_METHODS",
    "OAuthToken",
    "BasicCredentials",
    # Errors
    "ErrorCode",
    "ResourceError",
    "ResourceException",
    "MissingRequiredParameters",
    "MissingCredentials",
    "Result",
    "Ok",
    "Err",
    "ErrorTrace",
    # Config
    "ReqforgeSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
]
