"""Shared test fixtures for the boundcache test suite."""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Manually advanced clock. Frozen unless ``advance`` is called."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class RecordingSink:
    """Diagnostic sink that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict]] = []

    def debug(self, event, **kw):
        self.events.append(("debug", event, kw))

    def info(self, event, **kw):
        self.events.append(("info", event, kw))

    def error(self, event, **kw):
        self.events.append(("error", event, kw))

    def names(self, level: str | None = None) -> list[str]:
        return [name for lvl, name, _ in self.events if level is None or lvl == level]


@pytest.fixture
def clock():
    """Frozen clock: every entry shares one timestamp unless advanced."""
    return FakeClock()


@pytest.fixture
def ticking_clock():
    """Clock that moves forward one second on every read."""
    fake = FakeClock()

    def tick() -> datetime:
        return fake.advance(1)

    return tick


@pytest.fixture
def sink():
    return RecordingSink()
