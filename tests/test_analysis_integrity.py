"""Tests for the integrity scorer.

Covers: each penalty rule and its boundary, exclusive speed tiers,
blocked-paste cap, clamping, degenerate sessions, and score bands.
"""

from __future__ import annotations

import pytest

from byhand.analysis.integrity import (
    Rule,
    ScoreBand,
    explain_integrity,
    score_band,
    score_integrity,
    words_per_minute,
)
from byhand.core.types import WritingMetrics

_MINUTE = 60_000
_HOUR = 3_600_000


def _metrics(**overrides) -> WritingMetrics:
    """Fingerprint that triggers no rule on its own."""
    base = {
        "avg_keystroke_interval": 180,
        "keystroke_variance": 0.5,
        "pause_count": 2,
        "deletion_rate": 0.05,
        "blocked_pastes": 0,
        "longest_burst": 12,
    }
    base.update(overrides)
    return WritingMetrics(**base)


class TestCleanSession:
    def test_worked_example_scores_full(self, paused_key_events) -> None:
        from byhand.analysis.metrics import reduce_events

        metrics = reduce_events(paused_key_events)
        assert score_integrity(metrics, 5, 3700) == 100

    def test_no_penalties(self) -> None:
        assert explain_integrity(_metrics(), 40, 10 * _MINUTE) == []


class TestBlockedPastes:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, 100), (1, 90), (2, 80), (3, 70), (4, 70), (10, 70)],
    )
    def test_penalty_is_capped(self, count: int, expected: int) -> None:
        assert score_integrity(_metrics(blocked_pastes=count), 40, 10 * _MINUTE) == expected

    def test_monotonic_in_count(self) -> None:
        scores = [
            score_integrity(_metrics(blocked_pastes=n), 40, 10 * _MINUTE) for n in range(8)
        ]
        assert scores == sorted(scores, reverse=True)


class TestSpeed:
    @pytest.mark.parametrize(
        ("words", "expected"),
        [(150, 100), (151, 80), (200, 80), (201, 60), (400, 60)],
    )
    def test_tiers(self, words: int, expected: int) -> None:
        assert score_integrity(_metrics(), words, _MINUTE) == expected

    def test_tiers_are_exclusive(self) -> None:
        rules = [p.rule for p in explain_integrity(_metrics(), 300, _MINUTE)]
        assert Rule.ImplausibleSpeed in rules
        assert Rule.SuspiciousSpeed not in rules

    def test_words_per_minute(self) -> None:
        assert words_per_minute(30, 30_000) == pytest.approx(60.0)
        assert words_per_minute(30, 0) == 0.0


class TestRhythmPausesCorrections:
    def test_mechanical_rhythm(self) -> None:
        assert score_integrity(_metrics(keystroke_variance=0.09), 40, 10 * _MINUTE) == 85
        assert score_integrity(_metrics(keystroke_variance=0.1), 40, 10 * _MINUTE) == 100

    def test_no_pauses_only_for_long_documents(self) -> None:
        assert score_integrity(_metrics(pause_count=0), 101, _HOUR) == 90
        assert score_integrity(_metrics(pause_count=0), 100, _HOUR) == 100

    def test_no_corrections_only_above_fifty_words(self) -> None:
        assert score_integrity(_metrics(deletion_rate=0.0), 51, _HOUR) == 95
        assert score_integrity(_metrics(deletion_rate=0.0), 50, _HOUR) == 100

    def test_excessive_corrections(self) -> None:
        assert score_integrity(_metrics(deletion_rate=0.31), 40, _HOUR) == 90
        assert score_integrity(_metrics(deletion_rate=0.3), 40, _HOUR) == 100

    def test_penalties_reported_in_rule_order(self) -> None:
        m = _metrics(blocked_pastes=1, keystroke_variance=0.0, pause_count=0, deletion_rate=0.0)
        rules = [p.rule for p in explain_integrity(m, 300, _MINUTE)]
        assert rules == [
            Rule.BlockedPastes,
            Rule.ImplausibleSpeed,
            Rule.MechanicalRhythm,
            Rule.NoPauses,
            Rule.NoCorrections,
        ]


class TestClampingAndDegenerateInput:
    def test_floor_at_zero(self) -> None:
        m = _metrics(blocked_pastes=10, keystroke_variance=0.0, pause_count=0, deletion_rate=0.0)
        assert score_integrity(m, 1000, _MINUTE) == 0

    @pytest.mark.parametrize(("words", "ms"), [(0, 0), (0, 5000), (25, 0)])
    def test_never_raises(self, words: int, ms: int) -> None:
        score = score_integrity(WritingMetrics(), words, ms)
        assert 0 <= score <= 100

    def test_empty_session(self) -> None:
        # zero variation still reads as mechanical rhythm
        assert score_integrity(WritingMetrics(), 0, 0) == 85


class TestScoreBand:
    @pytest.mark.parametrize(
        ("score", "band"),
        [
            (100, ScoreBand.Excellent),
            (90, ScoreBand.Excellent),
            (89, ScoreBand.Good),
            (70, ScoreBand.Good),
            (69, ScoreBand.Moderate),
            (50, ScoreBand.Moderate),
            (49, ScoreBand.Low),
            (0, ScoreBand.Low),
        ],
    )
    def test_bands(self, score: int, band: ScoreBand) -> None:
        assert score_band(score) is band
