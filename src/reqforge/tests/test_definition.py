"""Tests for ResourceDefinition normalization and setter merge rules.

Validates:
- Name and verb normalization
- with/requires union laws in every setter order
- Boolean coercion
- Copy-on-write setters
- URL parsing fallback
"""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from reqforge.resource import ALL_METHODS, ResourceDefinition, normalize_name, normalize_verb, to_symbols


def make(**kw: object) -> ResourceDefinition:
    return ResourceDefinition(name=kw.pop("name", "resource"), **kw)  # type: ignore[arg-type]


# ═════════════════════════════════════════════════════════════════════════════
# Normalization
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(("raw", "expected"), [
    ("Get User", "get_user"),
    ("  Get   User  ", "get___user"),
    ("LIST\tITEMS", "list_items"),
    ("plain", "plain"),
    (42, "42"),
])
def test_name_normalization(raw: object, expected: str) -> None:
    assert normalize_name(raw) == expected
    assert make(name=raw).name == expected


@pytest.mark.parametrize("raw", ["get", " Post ", "PUT", "delete", "Patch", "head", "options"])
def test_recognized_verbs_are_uppercased(raw: str) -> None:
    assert make(verb=raw).verb == raw.strip().upper()


@pytest.mark.parametrize("raw", ["fetch", "", "  ", None, 3, "GETT", ["GET"]])
def test_unrecognized_verbs_fall_back_to_get(raw: object) -> None:
    """Any verb outside the recognized set becomes GET without failing."""
    assert normalize_verb(raw) == "GET"
    assert make(verb=raw).verb == "GET"
    assert make().set_verb(raw).verb == "GET"


def test_unrecognized_verb_is_logged(captured_logs) -> None:
    make(verb="fetch")
    assert "unrecognized verb, using default" in captured_logs.events()


def test_default_verb_is_get() -> None:
    assert make().verb == "GET"
    assert "GET" in ALL_METHODS


def test_to_symbols_flattens() -> None:
    assert to_symbols("id") == frozenset({"id"})
    assert to_symbols(["id", ["q", ("page",)]]) == frozenset({"id", "q", "page"})
    assert to_symbols(None) == frozenset()
    assert to_symbols(7) == frozenset({"7"})


# ═════════════════════════════════════════════════════════════════════════════
# with / requires merge laws
# ═════════════════════════════════════════════════════════════════════════════


def test_requires_alone_sets_with() -> None:
    d = make().set_requires(["id"])
    assert d.requires == frozenset({"id"})
    assert d.with_params == frozenset({"id"})


def test_requires_accepts_single_value() -> None:
    d = make().set_requires("id")
    assert d.requires == frozenset({"id"})
    assert d.with_params == frozenset({"id"})


def test_with_after_requires_keeps_requires() -> None:
    d = make().set_requires(["id", "token"]).set_with(["q"])
    assert d.with_params == frozenset({"id", "token", "q"})
    assert d.requires == frozenset({"id", "token"})


def test_requires_after_with_keeps_with() -> None:
    d = make().set_with(["q", "page"]).set_requires(["id"])
    assert d.with_params == frozenset({"q", "page", "id"})
    assert d.requires == frozenset({"id"})


@pytest.mark.parametrize("requires", [[], ["a"], ["a", "b"], ["a", ["b", "c"]], "z"])
@pytest.mark.parametrize("allowed", [None, [], ["a"], ["x", "y"]])
def test_with_is_superset_of_requires_in_any_order(requires: object, allowed: object) -> None:
    first = make().set_requires(requires)
    second = make()
    if allowed is not None:
        first = first.set_with(allowed)
        second = second.set_with(allowed)
    second = second.set_requires(requires)

    for d in (first, second):
        assert d.requires is not None
        assert d.with_params is not None
        assert d.requires <= d.with_params
        if allowed is not None:
            assert to_symbols(allowed) <= d.with_params


def test_constructor_applies_merge_rules() -> None:
    d = make(with_params=["q"], requires=["id"])
    assert d.with_params == frozenset({"q", "id"})
    assert make(requires=("id",)).with_params == frozenset({"id"})


def test_with_three_states() -> None:
    assert make().with_params is None
    assert make().set_with([]).with_params == frozenset()
    assert make().set_with(["q"]).with_params == frozenset({"q"})


def test_replacing_requires_keeps_previous_allowed() -> None:
    d = make().set_requires(["a"]).set_requires(["b"])
    assert d.requires == frozenset({"b"})
    assert d.with_params == frozenset({"a", "b"})


# ═════════════════════════════════════════════════════════════════════════════
# Booleans, headers, immutability
# ═════════════════════════════════════════════════════════════════════════════


def test_boolean_defaults() -> None:
    d = make()
    assert d.authenticates is False
    assert d.follows is True


@pytest.mark.parametrize(("raw", "expected"), [
    (True, True), (1, True), ("yes", True), ([0], True),
    (False, False), (0, False), ("", False), (None, False), ([], False),
])
def test_boolean_coercion(raw: object, expected: bool) -> None:
    d = make().set_authenticates(raw).set_follows(raw)
    assert d.authenticates is expected
    assert d.follows is expected
    assert d.requires_authentication is expected
    assert d.follows_redirects is expected


def test_setters_return_new_definitions() -> None:
    original = make(url="/users")
    changed = original.set_verb("post").set_with("q").set_follows(False)

    assert original.verb == "GET"
    assert original.with_params is None
    assert original.follows is True
    assert changed is not original
    assert changed.verb == "POST"


def test_definitions_are_frozen() -> None:
    with pytest.raises(ValidationError):
        make().verb = "POST"  # type: ignore[misc]


def test_invalid_headers_rejected_at_configuration() -> None:
    with pytest.raises(ValidationError):
        make().set_headers(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_headers_setter() -> None:
    d = make().set_headers({"Accept": "application/json"})
    assert d.headers == {"Accept": "application/json"}
    assert d.set_headers(None).headers is None


# ═════════════════════════════════════════════════════════════════════════════
# URL accessor & representation
# ═════════════════════════════════════════════════════════════════════════════


def test_parsed_url_returns_structured_url() -> None:
    parsed = make(url="https://api.example.com/users").parsed_url
    assert isinstance(parsed, httpx.URL)
    assert parsed.host == "api.example.com"


def test_parsed_url_falls_back_to_raw_string() -> None:
    raw = "https://exa mple.com:notaport/"
    assert make(url=raw).parsed_url == raw


def test_to_dict() -> None:
    d = make(name="Get User", url="https://api.example.com/u").set_requires("id").set_headers({"X": "1"})
    data = d.to_dict()
    assert list(data) == ["get_user"]
    entry = data["get_user"]
    assert entry["verb"] == "GET"
    assert entry["with"] == ["id"]
    assert entry["requires"] == ["id"]
    assert entry["follows"] is True
    assert entry["authenticates"] is False
    assert str(entry["url"]) == "https://api.example.com/u"
    assert entry["headers"] == {"X": "1"}


def test_definitions_are_hashable() -> None:
    a = make(url="/x", headers={"A": "1"})
    b = make(url="/x", headers={"A": "1"})
    assert hash(a) == hash(b)
    assert a == b
