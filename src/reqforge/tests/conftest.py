"""Shared fixtures for reqforge tests."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

from reqforge.foundation.config import clear_settings_cache
from reqforge.observability import LogEntry, configure_logging
from reqforge.observability import logging as rf_logging


@dataclass(slots=True)
class CapturingRenderer:
    """Collects log entries in memory."""

    entries: list[LogEntry] = field(default_factory=list)

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def events(self) -> list[str]:
        return [e.event for e in self.entries]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from REQFORGE_* env vars, cached settings and log output."""
    for var in ("REQFORGE_RESOURCE_API_DOMAIN", "REQFORGE_LOG_LEVEL", "REQFORGE_LOG_FORMAT", "REQFORGE_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    configure_logging(format="none", level="INFO")
    yield
    clear_settings_cache()
    configure_logging(format="none", level="INFO")


@pytest.fixture
def captured_logs() -> CapturingRenderer:
    """Route all log output at DEBUG level into memory."""
    configure_logging(format="none", level="DEBUG")
    renderer = CapturingRenderer()
    rf_logging._renderer.set(renderer)
    return renderer
