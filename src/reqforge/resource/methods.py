"""HTTP verbs a resource can be fetched with."""

from __future__ import annotations

from typing import Final, Literal, cast

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
ALL_METHODS: frozenset[HttpMethod] = frozenset(["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])
DEFAULT_METHOD: Final[HttpMethod] = "GET"

# Verbs whose parameters travel in the request body rather than the query string
BODY_METHODS: frozenset[HttpMethod] = frozenset(["POST", "PUT"])


def normalize_verb(raw: object) -> HttpMethod:
    """Normalize a verb token, falling back to GET for anything unrecognized.

    >>> normalize_verb(" post ")
    'POST'
    >>> normalize_verb("fetch")
    'GET'
    """
    verb = raw.strip().upper() if isinstance(raw, str) else None
    return cast(HttpMethod, verb) if verb in ALL_METHODS else DEFAULT_METHOD


def is_recognized(raw: object) -> bool:
    return isinstance(raw, str) and raw.strip().upper() in ALL_METHODS


def sends_body(verb: HttpMethod) -> bool:
    """Whether parameters for this verb are routed into the request body."""
    return verb in BODY_METHODS
