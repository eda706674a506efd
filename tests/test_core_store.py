"""Tests for JSON I/O primitives.

Covers: round-trip read/write by alias, auto-creation of parent
directories, atomic replacement, and validation on read.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from byhand.core.store import read_json, read_model_json, write_model_json
from byhand.core.types import EventKind, KeystrokeEvent, WritingMetrics


class TestModelJsonRoundTrip:
    def test_write_then_read_preserves_model(self, tmp_path: Path) -> None:
        metrics = WritingMetrics(avg_keystroke_interval=210, pause_count=3, longest_burst=9)
        out = write_model_json(metrics, tmp_path / "metrics.json")
        assert read_model_json(out, WritingMetrics) == metrics

    def test_written_by_alias_without_nulls(self, tmp_path: Path) -> None:
        ev = KeystrokeEvent(t=40, kind=EventKind.PasteBlocked, pos=2)
        out = write_model_json(ev, tmp_path / "event.json")
        assert read_json(out) == {"t": 40, "type": "paste_blocked", "pos": 2}

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        nested = tmp_path / "deep" / "nested" / "metrics.json"
        write_model_json(WritingMetrics(), nested)
        assert nested.exists()

    def test_returns_written_path(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        assert write_model_json(WritingMetrics(), target) == target

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        write_model_json(WritingMetrics(pause_count=1), target)
        write_model_json(WritingMetrics(pause_count=2), target)
        assert read_model_json(target, WritingMetrics).pause_count == 2
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


class TestReadValidation:
    def test_invalid_payload_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"deletionRate": 4.0}))
        with pytest.raises(ValidationError):
            read_model_json(path, WritingMetrics)

    def test_read_nonexistent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_model_json(tmp_path / "does_not_exist.json", WritingMetrics)
