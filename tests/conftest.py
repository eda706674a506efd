"""Shared fixtures for the byhand test suite."""

from __future__ import annotations

import datetime as dt
from typing import Sequence

import pytest

from byhand.core.types import EventKind, KeystrokeEvent


class FakeClock:
    """Deterministic wall clock advanced explicitly by tests."""

    def __init__(self, start: dt.datetime) -> None:
        self.now = start

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += dt.timedelta(milliseconds=ms)


def key_events(times: Sequence[int], key: str = "KeyA") -> list[KeystrokeEvent]:
    """Build ``key`` events at the given offsets."""
    return [KeystrokeEvent(t=t, kind=EventKind.Key, key=key, pos=i) for i, t in enumerate(times)]


@pytest.fixture()
def session_start() -> dt.datetime:
    return dt.datetime(2026, 3, 2, 9, 0, tzinfo=dt.timezone.utc)


@pytest.fixture()
def clock(session_start: dt.datetime) -> FakeClock:
    return FakeClock(session_start)


@pytest.fixture()
def paused_key_events() -> list[KeystrokeEvent]:
    """Five keys with one long thinking pause before the fourth."""
    return key_events([0, 100, 200, 3500, 3600])
