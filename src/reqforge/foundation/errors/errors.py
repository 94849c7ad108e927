"""Standardized errors for resource compilation.

Provides error codes, a structured error model and the exceptions raised
while building a request. Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Machine-readable error codes for build failures."""
    MISSING_PARAMETERS = "MISSING_PARAMETERS"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    UNKNOWN = "UNKNOWN"


class ResourceError(BaseModel):
    """Structured error for a resource that could not be compiled.

    Attributes:
        resource: Name of the resource being built
        message: Human-readable error message
        code: Machine-readable error code
        details: Optional extra information
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Resource Error",
            "examples": [{
                "resource": "get_user",
                "message": "This resource is missing required parameters: ['id']",
                "code": "MISSING_PARAMETERS",
            }],
        },
    )

    resource: str = Field(default="", description="Name of the resource that failed")
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")
    details: str | None = Field(default=None, repr=False)

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_auth_error(self) -> bool:
        return self.code is ErrorCode.MISSING_CREDENTIALS

    def render(self) -> str:
        """Format error for display."""
        label = f" ({self.resource})" if self.resource else ""
        parts = [f"Resource Error{label} [{self.code}]: {self.message}"]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        return "".join(parts)

    __str__ = render


class ResourceException(Exception):
    """Exception wrapping a ResourceError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: ResourceError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(cls, resource: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> Self:
        return cls(ResourceError(resource=resource, message=message, code=code))


class MissingRequiredParameters(ResourceException):
    """Raised when required parameters are absent after merging defaults."""

    __slots__ = ("missing",)

    def __init__(self, missing: Iterable[str], resource: str = "") -> None:
        self.missing: tuple[str, ...] = tuple(sorted(missing))
        super().__init__(ResourceError(
            resource=resource,
            message=f"This resource is missing required parameters: {list(self.missing)!r}",
            code=ErrorCode.MISSING_PARAMETERS,
        ))


class MissingCredentials(ResourceException):
    """Raised when an authenticating resource is built without credentials."""

    def __init__(self, resource: str = "") -> None:
        super().__init__(ResourceError(
            resource=resource,
            message="This resource requires authentication and no credentials were given.",
            code=ErrorCode.MISSING_CREDENTIALS,
        ))
