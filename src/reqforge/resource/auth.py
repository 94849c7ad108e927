"""Credentials a resource can be authenticated with.

Two explicit variants form a tagged union on ``auth_type``:

- OAuthToken: an already-obtained OAuth access token, attached as ``oauth``
- BasicCredentials: everything else, attached as ``basic_auth``. Either a
  username/password pair or an opaque value handed through untouched.

Token acquisition is out of scope; callers hand in the token they hold.

Example:
    >>> coerce_credentials({"access_token": "abc123"}).auth_type
    'oauth'
    >>> coerce_credentials(("alice", "s3cret")).username
    'alice'
    >>> coerce_credentials("alice:s3cret").raw
    'alice:s3cret'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer

# Mapping keys that mark a credential as an OAuth access token
TOKEN_KEYS: tuple[str, ...] = ("token", "access_token")


class OAuthToken(BaseModel):
    """OAuth access token (and optional token secret for OAuth 1.0a)."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    auth_type: Literal["oauth"] = "oauth"
    token: SecretStr = Field(..., description="Access token value")
    secret: SecretStr | None = Field(default=None, description="Token secret (OAuth 1.0a)")

    @field_serializer("token", "secret", when_used="json")
    def _mask_token(self, v: SecretStr | None) -> str | None:
        """Mask token in JSON serialization."""
        if v is None:
            return None
        secret = v.get_secret_value()
        return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "***"

    def __hash__(self) -> int:
        return hash((self.auth_type, self.token.get_secret_value()))


class BasicCredentials(BaseModel):
    """HTTP Basic authentication, or any non-OAuth credential passed through as ``raw``."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    auth_type: Literal["basic"] = "basic"
    username: str | None = None
    password: SecretStr | None = None
    raw: Any = Field(default=None, repr=False, description="Opaque credential value")

    @classmethod
    def wrap(cls, value: object) -> Self:
        """Carry an opaque credential value the transport knows how to use."""
        return cls(raw=value)

    @property
    def is_opaque(self) -> bool:
        return self.username is None

    @field_serializer("password", "raw", when_used="json")
    def _mask_secret(self, v: object) -> str | None:
        return None if v is None else "***"

    def as_tuple(self) -> tuple[str, str] | None:
        """(username, password) pair, the shape most HTTP clients accept."""
        if self.username is None:
            return None
        return self.username, self.password.get_secret_value() if self.password else ""

    def __hash__(self) -> int:
        return hash((self.auth_type, self.username))


Credentials = Annotated[OAuthToken | BasicCredentials, Field(discriminator="auth_type")]


def _token_of(value: Mapping[Any, Any]) -> object:
    return next((value[k] for k in TOKEN_KEYS if value.get(k)), None)


def coerce_credentials(value: object) -> Credentials:
    """Classify a credential value into one of the two variants. Never fails.

    Models pass through. A mapping holding a token (and no other auth_type)
    is an OAuth token; a mapping with a username or a 2-item pair is Basic;
    anything else is wrapped as an opaque Basic credential.
    """
    match value:
        case OAuthToken() | BasicCredentials():
            return value
        case Mapping() if (token := _token_of(value)) and value.get("auth_type", "oauth") == "oauth":
            secret = value.get("secret") or value.get("token_secret")
            return OAuthToken(token=str(token), secret=str(secret) if secret else None)
        case Mapping() if "username" in value:
            password = value.get("password")
            return BasicCredentials(username=str(value["username"]),
                                    password=None if password is None else str(password))
        case (username, password):
            return BasicCredentials(username=str(username), password=str(password))
        case _:
            return BasicCredentials.wrap(value)
