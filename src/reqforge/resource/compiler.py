"""Compile a ResourceDefinition plus runtime parameters into a RequestSpec.

The pipeline runs in a fixed order:

    merge → prefix domain → expand template → check required →
    filter allowed → route body/query → attach credentials →
    redirect/header options → assemble URL

Only two steps can fail: the required-parameter check raises
MissingRequiredParameters and credential attachment raises
MissingCredentials. Every other step is total.

Example:
    >>> get_user = ResourceDefinition(name="get user", url="/users/{id}", requires=["id"])
    >>> spec = ResourceCompiler(get_user).build({"id": 5, "api_domain": "https://api.example.com"})
    >>> spec.url
    'https://api.example.com/users/5?id=5'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
import uritemplate

from reqforge.foundation.errors import (
    Err,
    ErrorTrace,
    MissingCredentials,
    MissingRequiredParameters,
    Ok,
    ResourceException,
    Result,
    trace,
)
from reqforge.observability import get_logger

from .auth import BasicCredentials, OAuthToken, coerce_credentials
from .methods import HttpMethod, sends_body
from .request import RequestOptions, RequestSpec

if TYPE_CHECKING:
    from reqforge.foundation.config import ReqforgeSettings

    from .definition import ResourceDefinition

API_DOMAIN_PARAM = "api_domain"

_SCALARS = (str, int, float, bool)
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


# ─────────────────────────────────────────────────────────────────────────────
# Pipeline steps
# ─────────────────────────────────────────────────────────────────────────────


def merge_parameters(params: Mapping[Any, Any] | None, defaults: Mapping[Any, Any] | None = None) -> dict[str, Any]:
    """Effective parameters: defaults overlaid with caller params (caller wins)."""
    merged = {str(k): v for k, v in (defaults or {}).items()}
    merged.update((str(k), v) for k, v in (params or {}).items())
    return merged


def prefix_domain(url: str, params: Mapping[str, Any], fallback: str | None = None) -> str:
    """Prepend the API domain to a URL that has no "http" in it."""
    domain = params.get(API_DOMAIN_PARAM) or fallback
    return f"{domain}{url}" if domain and "http" not in url else url


def _template_scalar(value: Any) -> str:
    # Same rendering httpx uses for query values
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _template_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_template_scalar(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): _template_scalar(v) for k, v in value.items()}
    return _template_scalar(value)


def expand_url(url: str, params: Mapping[str, Any]) -> str:
    """Expand RFC 6570 placeholders against params. Unbound placeholders expand to nothing."""
    if "{" not in url:
        return url
    return uritemplate.expand(url, {k: _template_value(v) for k, v in params.items() if v is not None})


def find_missing_requirements(requires: frozenset[str] | None, params: Mapping[str, Any], resource: str = "") -> None:
    """Raise MissingRequiredParameters if any required key is absent."""
    if requires and (missing := requires - set(params)):
        raise MissingRequiredParameters(missing, resource=resource)


def remove_unnecessary_params(allowed: frozenset[str] | None, params: Mapping[str, Any]) -> dict[str, Any]:
    """Drop params outside the allowed set. An unset or empty set keeps everything."""
    if not allowed:
        return dict(params)
    return {k: v for k, v in params.items() if k in allowed}


def route_parameters(verb: HttpMethod, params: Mapping[str, Any]) -> dict[str, Any]:
    """POST/PUT params become the body, everything else the query. Empty params produce neither."""
    if not params:
        return {}
    return {"body" if sends_body(verb) else "query": dict(params)}


def attach_credentials(authenticates: bool, credentials: object, resource: str = "") -> dict[str, Any]:
    """Credential option for an authenticating resource."""
    if not authenticates:
        return {}
    if not credentials:
        raise MissingCredentials(resource=resource)
    match coerce_credentials(credentials):
        case OAuthToken() as token:
            return {"oauth": token}
        case BasicCredentials() as basic:
            return {"basic_auth": basic}


def _query_value(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, (list, tuple)):
        return [v if v is None or isinstance(v, _SCALARS) else str(v) for v in value]
    return str(value)


def assemble_url(url: str, query: Mapping[str, Any] | None = None) -> str:
    """Attach the query to the URL and normalize it.

    Scheme and host are lower-cased, dot segments resolved and default ports
    dropped. A URL that does not parse is returned as-is with the query appended.
    """
    params = httpx.QueryParams({k: _query_value(v) for k, v in (query or {}).items()})
    # httpx only drops a default port once the scheme is already lower-case
    url = _SCHEME.sub(lambda m: m.group(0).lower(), url, count=1)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        if not params:
            return url
        return f"{url}{'&' if '?' in url else '?'}{params}"
    return str(parsed.copy_merge_params(params) if params else parsed)


# ─────────────────────────────────────────────────────────────────────────────
# Compiler
# ─────────────────────────────────────────────────────────────────────────────


class ResourceCompiler:
    """Builds RequestSpecs for one resource definition.

    Building never mutates the definition: the expanded URL only lives in the
    returned RequestSpec, so a compiler may be shared between threads.
    """

    __slots__ = ("definition", "_settings")

    def __init__(self, definition: ResourceDefinition, *, settings: ReqforgeSettings | None = None) -> None:
        self.definition = definition
        self._settings = settings

    @property
    def settings(self) -> ReqforgeSettings:
        if self._settings is None:
            from reqforge.foundation.config import get_settings
            return get_settings()
        return self._settings

    def build(
        self,
        params: Mapping[Any, Any] | None = None,
        defaults: Mapping[Any, Any] | None = None,
        credentials: object = None,
    ) -> RequestSpec:
        """Compile runtime params into a request.

        Args:
            params: Caller-supplied parameters
            defaults: Default parameter values; caller params win on collision
            credentials: OAuthToken, BasicCredentials, or a value coercible to one

        Raises:
            MissingRequiredParameters: a required key is absent after merging
            MissingCredentials: the resource authenticates and no credentials were given
        """
        d = self.definition
        log = get_logger("reqforge.compiler").bind_resource(d.name, d.verb)
        try:
            spec = self._compile(params, defaults, credentials)
        except ResourceException as e:
            log.warning("resource build failed", code=str(e.code), error=str(e))
            raise
        log.debug("resource built", url=spec.url)
        return spec

    def try_build(
        self,
        params: Mapping[Any, Any] | None = None,
        defaults: Mapping[Any, Any] | None = None,
        credentials: object = None,
    ) -> Result[RequestSpec, ErrorTrace]:
        """Like build(), but returns Err(ErrorTrace) instead of raising."""
        try:
            return Ok(self.build(params, defaults, credentials))
        except ResourceException as e:
            meta = {"missing": list(e.missing)} if isinstance(e, MissingRequiredParameters) else {}
            return Err(trace(str(e), code=str(e.code)).with_operation(f"resource:{self.definition.name}", **meta))

    def _compile(
        self,
        params: Mapping[Any, Any] | None,
        defaults: Mapping[Any, Any] | None,
        credentials: object,
    ) -> RequestSpec:
        d = self.definition
        effective = merge_parameters(params, defaults)

        url = prefix_domain(d.url, effective, self.settings.resource.api_domain)
        url = expand_url(url, effective)

        find_missing_requirements(d.requires, effective, d.name)
        effective = remove_unnecessary_params(d.with_params, effective)

        options: dict[str, Any] = route_parameters(d.verb, effective)
        options.update(attach_credentials(d.authenticates, credentials, d.name))
        if not d.follows:
            options["no_follow"] = True
        if d.headers:
            options["headers"] = d.headers

        return RequestSpec(
            url=assemble_url(url, options.get("query")),
            verb=d.verb,
            options=RequestOptions(**options),
        )
