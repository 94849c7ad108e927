"""Type aliases and error context tracking for the non-raising build API."""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

_EMPTY_META: JsonDict = {}


class ErrorContext(BaseModel):
    """Context for an error at a call site (operation plus metadata)."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid", revalidate_instances="never")

    operation: Annotated[str, Field(min_length=1)]
    metadata: JsonDict = Field(default_factory=dict, repr=False)

    def __str__(self) -> str:
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{meta}"

    def __hash__(self) -> int:
        return hash((self.operation, tuple(sorted((k, repr(v)) for k, v in self.metadata.items()))))


_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


class ErrorTrace(BaseModel):
    """Stack of error contexts. Immutable; every with_* returns a new trace."""

    model_config = ConfigDict(
        frozen=True, str_strip_whitespace=True, validate_default=True, extra="forbid",
        revalidate_instances="never",
    )

    message: Annotated[str, Field(min_length=1)]
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    error_code: str | None = None
    recoverable: bool = False
    details: str | None = Field(default=None, repr=False)

    @field_serializer("contexts")
    def _serialize_contexts(self, v: tuple[ErrorContext, ...]) -> list[JsonDict]:
        return [ctx.model_dump() for ctx in v]

    @computed_field
    @property
    def root_operation(self) -> str | None:
        """First operation in the trace (origin)."""
        return self.contexts[0].operation if self.contexts else None

    def __hash__(self) -> int:
        return hash((self.message, self.error_code, self.recoverable))

    def with_operation(self, operation: str, **metadata: JsonValue) -> ErrorTrace:
        """Add context with operation info."""
        ctx = ErrorContext.model_construct(operation=operation, metadata=metadata or _EMPTY_META)
        return self.model_copy(update={"contexts": (*self.contexts, ctx)})

    def with_code(self, code: str) -> ErrorTrace:
        return self.model_copy(update={"error_code": code})

    def format(self) -> str:
        """Format trace as human-readable string."""
        parts = [self.message]
        if self.error_code:
            parts.append(f" [{self.error_code}]")
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        return "".join(parts)

    __str__ = format


def trace(message: str, *, code: str | None = None, details: str | None = None) -> ErrorTrace:
    """Create ErrorTrace concisely (bypasses validation)."""
    return ErrorTrace.model_construct(
        message=message, contexts=_EMPTY_CONTEXTS, error_code=code, recoverable=False, details=details,
    )
