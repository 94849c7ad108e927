"""Declarative description of a single HTTP resource.

A ResourceDefinition is immutable. Setters return a new, re-validated
definition, so a definition can be shared freely between compilers and
threads.

Example:
    >>> get_user = (
    ...     ResourceDefinition(name="Get User", url="/users/{id}")
    ...     .set_requires(["id"])
    ...     .set_with(["fields"])
    ...     .set_authenticates(True)
    ... )
    >>> get_user.name
    'get_user'
    >>> sorted(get_user.with_params)
    ['fields', 'id']
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from reqforge.observability import get_logger

from .methods import DEFAULT_METHOD, HttpMethod, is_recognized, normalize_verb

if TYPE_CHECKING:
    from reqforge.foundation.config import ReqforgeSettings

    from .compiler import ResourceCompiler

_WHITESPACE = re.compile(r"\s")


def normalize_name(raw: object) -> str:
    """Lowercase, trim, and replace each remaining whitespace character with an underscore."""
    return _WHITESPACE.sub("_", str(raw).lower().strip())


def to_symbols(params: object) -> frozenset[str]:
    """Flatten a single value or (nested) sequence of values into a set of keys."""
    if params is None:
        return frozenset()
    if isinstance(params, (str, bytes)) or not isinstance(params, Iterable):
        return frozenset({params.decode() if isinstance(params, bytes) else str(params)})
    return frozenset().union(*(to_symbols(p) for p in params))


class ResourceDefinition(BaseModel):
    """An HTTP verb, URL template, parameter rules and auth/redirect policy.

    Attributes:
        name: Normalized identifier (lowercase, whitespace replaced with underscores)
        verb: HTTP method; unrecognized values fall back to GET
        url: URL template, possibly relative, possibly holding {placeholders}
        with_params: Allowed parameter keys. None = never configured. Only a
            non-empty set filters parameters.
        requires: Mandatory parameter keys, always contained in with_params
        authenticates: Whether a credential must be attached
        follows: Whether redirects should be followed
        headers: Extra request headers
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={
            "title": "Resource Definition",
            "examples": [{
                "name": "get_user",
                "verb": "GET",
                "url": "https://api.example.com/users/{id}",
                "requires": ["id"],
            }],
        },
    )

    name: str
    verb: HttpMethod = DEFAULT_METHOD
    url: str = ""
    with_params: frozenset[str] | None = Field(default=None, description="Allowed parameter keys")
    requires: frozenset[str] | None = Field(default=None, description="Required parameter keys")
    authenticates: bool = False
    follows: bool = True
    headers: dict[str, str] | None = Field(default=None, repr=False)

    @model_validator(mode="before")
    @classmethod
    def _merge_requirements(cls, data: Any) -> Any:
        """Required keys are always allowed: union requires into with_params."""
        if not isinstance(data, Mapping) or data.get("requires") is None:
            return data
        requires = to_symbols(data["requires"])
        allowed = data.get("with_params")
        return {
            **data,
            "requires": requires,
            "with_params": requires if allowed is None else to_symbols(allowed) | requires,
        }

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, v: object) -> str:
        return normalize_name(v)

    @field_validator("verb", mode="before")
    @classmethod
    def _normalize_verb(cls, v: object) -> str:
        if not is_recognized(v):
            get_logger("reqforge.resource").debug("unrecognized verb, using default", verb=str(v), default=DEFAULT_METHOD)
        return normalize_verb(v)

    @field_validator("with_params", "requires", mode="before")
    @classmethod
    def _flatten_params(cls, v: object) -> frozenset[str] | None:
        return None if v is None else to_symbols(v)

    @field_validator("authenticates", "follows", mode="before")
    @classmethod
    def _coerce_bool(cls, v: object) -> bool:
        return bool(v)

    @field_validator("url", mode="before")
    @classmethod
    def _url_to_str(cls, v: object) -> str:
        return "" if v is None else str(v)

    # ─── Setters (copy-on-write) ─────────────────────────────────────────

    def _replace(self, **changes: Any) -> Self:
        return type(self).model_validate({**self.model_dump(), **changes})

    def set_name(self, raw: object) -> Self:
        return self._replace(name=raw)

    def set_verb(self, raw: object) -> Self:
        """Set the HTTP method. Unrecognized verbs silently become GET."""
        return self._replace(verb=raw)

    def set_url(self, url: object) -> Self:
        return self._replace(url=url)

    def set_with(self, params: object) -> Self:
        """Set allowed params; existing required params stay allowed."""
        return self._replace(with_params=to_symbols(params))

    def set_requires(self, params: object) -> Self:
        """Set required params; they are unioned into the allowed params."""
        return self._replace(requires=to_symbols(params))

    def set_authenticates(self, value: object) -> Self:
        return self._replace(authenticates=value)

    def set_follows(self, value: object) -> Self:
        return self._replace(follows=value)

    def set_headers(self, headers: Mapping[str, str] | None) -> Self:
        return self._replace(headers=headers)

    # ─── Accessors ───────────────────────────────────────────────────────

    @property
    def parsed_url(self) -> httpx.URL | str:
        """The stored URL parsed as a structured URL, or the raw string if it won't parse."""
        try:
            return httpx.URL(self.url)
        except httpx.InvalidURL:
            return self.url

    @property
    def requires_authentication(self) -> bool:
        return self.authenticates

    @property
    def follows_redirects(self) -> bool:
        return self.follows

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Mapping of the resource name to its configuration."""
        return {self.name: {
            "verb": self.verb,
            "with": sorted(self.with_params) if self.with_params is not None else None,
            "requires": sorted(self.requires) if self.requires is not None else None,
            "follows": self.follows,
            "authenticates": self.authenticates,
            "url": self.parsed_url,
            "headers": self.headers,
        }}

    def compiler(self, *, settings: ReqforgeSettings | None = None) -> ResourceCompiler:
        """Compiler bound to this definition."""
        from .compiler import ResourceCompiler
        return ResourceCompiler(self, settings=settings)

    def __hash__(self) -> int:
        return hash((self.name, self.verb, self.url, self.with_params, self.requires,
                     self.authenticates, self.follows, tuple(sorted((self.headers or {}).items()))))
