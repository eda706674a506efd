"""Tests for core data contracts: event variants, wire aliases, snapshot invariants."""

from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from byhand.core.types import (
    EventKind,
    KeystrokeEvent,
    SessionSnapshot,
    WritingMetrics,
)


class TestKeystrokeEvent:
    def test_parses_wire_format(self) -> None:
        ev = KeystrokeEvent.model_validate({"t": 120, "type": "key", "key": "KeyA", "pos": 3})
        assert ev.kind is EventKind.Key
        assert ev.key == "KeyA"
        assert ev.length is None

    def test_dumps_wire_format(self) -> None:
        ev = KeystrokeEvent(t=5, kind=EventKind.PasteInternal, pos=2, length=7)
        dumped = ev.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"t": 5, "type": "paste_internal", "pos": 2, "len": 7}

    def test_rejects_negative_t(self) -> None:
        with pytest.raises(ValidationError):
            KeystrokeEvent(t=-1, kind=EventKind.Key, key="KeyA")

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            KeystrokeEvent.model_validate({"t": 0, "type": "paste_external", "pos": 0})

    def test_internal_paste_requires_len(self) -> None:
        with pytest.raises(ValidationError, match="len"):
            KeystrokeEvent(t=0, kind=EventKind.PasteInternal)

    @pytest.mark.parametrize("kind", [EventKind.Key, EventKind.Delete, EventKind.PasteBlocked])
    def test_len_only_on_internal_paste(self, kind: EventKind) -> None:
        with pytest.raises(ValidationError):
            KeystrokeEvent(t=0, kind=kind, key="KeyA", length=3)

    @pytest.mark.parametrize("kind", [EventKind.Key, EventKind.Delete])
    def test_key_and_delete_require_key(self, kind: EventKind) -> None:
        with pytest.raises(ValidationError):
            KeystrokeEvent(t=0, kind=kind)

    def test_events_are_frozen(self) -> None:
        ev = KeystrokeEvent(t=0, kind=EventKind.Key, key="KeyA")
        with pytest.raises(ValidationError):
            ev.t = 10  # type: ignore[misc]


class TestWritingMetrics:
    def test_defaults_are_zero(self) -> None:
        m = WritingMetrics()
        assert m.avg_keystroke_interval == 0
        assert m.keystroke_variance == 0.0
        assert m.longest_burst == 0

    def test_camel_case_aliases(self) -> None:
        m = WritingMetrics(avg_keystroke_interval=900, deletion_rate=0.25)
        dumped = m.model_dump(by_alias=True)
        assert dumped["avgKeystrokeInterval"] == 900
        assert dumped["deletionRate"] == 0.25
        assert WritingMetrics.model_validate(dumped) == m

    def test_deletion_rate_bounded(self) -> None:
        with pytest.raises(ValidationError):
            WritingMetrics(deletion_rate=1.5)


class TestSessionSnapshot:
    def _data(self, **overrides) -> dict:
        start = dt.datetime(2026, 3, 2, 9, 0, tzinfo=dt.timezone.utc)
        base = {
            "id": "s1",
            "started_at": start,
            "ended_at": start + dt.timedelta(seconds=3, milliseconds=700),
            "events": [],
            "content": "one two",
            "word_count": 2,
            "metrics": WritingMetrics(),
            "integrity_score": 85,
        }
        base.update(overrides)
        return base

    def test_writing_time_ms(self) -> None:
        snap = SessionSnapshot(**self._data())
        assert snap.writing_time_ms == 3700

    def test_rejects_end_before_start(self) -> None:
        data = self._data()
        data["ended_at"] = data["started_at"] - dt.timedelta(seconds=1)
        with pytest.raises(ValidationError, match="must not precede"):
            SessionSnapshot(**data)

    def test_rejects_out_of_order_events(self) -> None:
        events = [
            KeystrokeEvent(t=200, kind=EventKind.Key, key="KeyA"),
            KeystrokeEvent(t=100, kind=EventKind.Key, key="KeyB"),
        ]
        with pytest.raises(ValidationError, match="out of order"):
            SessionSnapshot(**self._data(events=events))

    def test_rejects_score_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            SessionSnapshot(**self._data(integrity_score=101))

    def test_json_round_trip_uses_camel_case(self) -> None:
        snap = SessionSnapshot(**self._data())
        payload = snap.model_dump_json(by_alias=True)
        assert '"startedAt"' in payload
        assert '"wordCount"' in payload
        assert SessionSnapshot.model_validate_json(payload) == snap
