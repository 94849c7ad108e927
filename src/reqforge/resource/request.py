"""Compiled request specifications, ready for a transport layer to execute."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .auth import BasicCredentials, OAuthToken
from .methods import HttpMethod


class RequestOptions(BaseModel):
    """Options accompanying a compiled request. Unset options stay None.

    Attributes:
        query: Parameters serialized into the URL (non-body verbs)
        body: Parameters sent as the request body (POST/PUT)
        headers: Extra request headers
        no_follow: True when redirects must not be followed
        oauth: OAuth token to sign the request with
        basic_auth: Basic credentials to send
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    query: dict[str, Any] | None = Field(default=None, repr=False)
    body: dict[str, Any] | None = Field(default=None, repr=False)
    headers: dict[str, str] | None = Field(default=None, repr=False)
    no_follow: bool | None = None
    oauth: OAuthToken | None = None
    basic_auth: BasicCredentials | None = None

    def to_dict(self) -> dict[str, Any]:
        """Only the options that were set."""
        return {k: v for k, v in self if v is not None}


class RequestSpec(BaseModel):
    """Method, URL and options of one outgoing request."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    url: str
    verb: HttpMethod
    options: RequestOptions = Field(default_factory=RequestOptions)

    @property
    def method(self) -> HttpMethod:
        return self.verb

    def __str__(self) -> str:
        return f"{self.verb} {self.url}"
