"""Tests for credential classification."""

from __future__ import annotations

import pytest

from reqforge.resource import BasicCredentials, OAuthToken, coerce_credentials


def test_models_pass_through() -> None:
    token = OAuthToken(token="abc")
    basic = BasicCredentials(username="alice", password="pw")
    assert coerce_credentials(token) is token
    assert coerce_credentials(basic) is basic


def test_mapping_with_token_is_oauth() -> None:
    creds = coerce_credentials({"token": "abc", "secret": "shh"})
    assert isinstance(creds, OAuthToken)
    assert creds.token.get_secret_value() == "abc"
    assert creds.secret is not None and creds.secret.get_secret_value() == "shh"


def test_mapping_without_token_is_basic() -> None:
    creds = coerce_credentials({"username": "alice", "password": "pw"})
    assert isinstance(creds, BasicCredentials)
    assert creds.as_tuple() == ("alice", "pw")


def test_explicit_auth_type_wins() -> None:
    creds = coerce_credentials({"auth_type": "oauth", "token": "t"})
    assert isinstance(creds, OAuthToken)


def test_pair_is_basic() -> None:
    creds = coerce_credentials(("alice", "pw"))
    assert isinstance(creds, BasicCredentials)
    assert creds.username == "alice"
    assert coerce_credentials(["bob", "pw"]).username == "bob"  # type: ignore[union-attr]


@pytest.mark.parametrize("value", [
    "user:pass",
    {"auth_type": "kerberos"},
    ("only-one",),
    42,
])
def test_opaque_credentials_wrapped_as_basic(value: object) -> None:
    creds = coerce_credentials(value)
    assert isinstance(creds, BasicCredentials)
    assert creds.is_opaque
    assert creds.raw == value
    assert creds.as_tuple() is None


def test_access_token_mapping_is_oauth() -> None:
    creds = coerce_credentials({"access_token": "abc", "token_secret": "shh"})
    assert isinstance(creds, OAuthToken)
    assert creds.token.get_secret_value() == "abc"
    assert creds.secret is not None and creds.secret.get_secret_value() == "shh"


def test_token_with_other_auth_type_is_not_oauth() -> None:
    creds = coerce_credentials({"auth_type": "basic", "token": "t"})
    assert isinstance(creds, BasicCredentials)
    assert creds.is_opaque


def test_empty_username_kept() -> None:
    creds = coerce_credentials({"username": ""})
    assert isinstance(creds, BasicCredentials)
    assert creds.as_tuple() == ("", "")


def test_secrets_masked_in_json() -> None:
    token = OAuthToken(token="abcdefghijkl")
    basic = BasicCredentials(username="alice", password="pw")
    assert token.model_dump(mode="json")["token"] == "abcd...ijkl"
    assert basic.model_dump(mode="json")["password"] == "***"
    assert BasicCredentials.wrap("user:pass").model_dump(mode="json")["raw"] == "***"
    assert "pw" not in repr(basic)
    assert "user:pass" not in repr(BasicCredentials.wrap("user:pass"))
