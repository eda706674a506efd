"""Integrity scorer: fingerprint + session metadata -> score in [0, 100].

Additive penalty model applied to a starting score of 100:

1. Blocked pastes -- 10 each, capped at 30.
2. Typing speed -- above 200 wpm costs 40; above 150 wpm costs 20.
   The tiers are mutually exclusive; only the more severe one applies.
3. Mechanical rhythm -- keystroke variation below 0.1 costs 15.
4. No pauses over a long document (>100 words) -- 10.
5. Corrections -- no deletions over >50 words costs 5; otherwise a
   deletion rate above 0.3 costs 10.

The thresholds and magnitudes are fixed: previously issued certificates
carry scores computed with exactly these values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from byhand.core.defaults import (
    BAND_EXCELLENT,
    BAND_GOOD,
    BAND_MODERATE,
    BLOCKED_PASTE_PENALTY,
    BLOCKED_PASTE_PENALTY_CAP,
    EXCESSIVE_DELETION_PENALTY,
    EXCESSIVE_DELETION_RATE,
    LOW_VARIANCE_PENALTY,
    LOW_VARIANCE_THRESHOLD,
    MAX_SCORE,
    MIN_SCORE,
    NO_DELETION_MIN_WORDS,
    NO_DELETION_PENALTY,
    NO_PAUSE_MIN_WORDS,
    NO_PAUSE_PENALTY,
    WPM_IMPLAUSIBLE,
    WPM_IMPLAUSIBLE_PENALTY,
    WPM_SUSPICIOUS,
    WPM_SUSPICIOUS_PENALTY,
)
from byhand.core.types import WritingMetrics


class Rule(StrEnum):
    """Identifiers of the penalty rules, in evaluation order."""

    BlockedPastes = "blocked_pastes"
    ImplausibleSpeed = "implausible_speed"
    SuspiciousSpeed = "suspicious_speed"
    MechanicalRhythm = "mechanical_rhythm"
    NoPauses = "no_pauses"
    NoCorrections = "no_corrections"
    ExcessiveCorrections = "excessive_corrections"


@dataclass(frozen=True)
class Penalty:
    """One triggered rule and the points it subtracts."""

    rule: Rule
    points: int
    detail: str


class ScoreBand(StrEnum):
    """Display band for an integrity score."""

    Excellent = "Excellent"
    Good = "Good"
    Moderate = "Moderate"
    Low = "Low"


def words_per_minute(word_count: int, writing_time_ms: float) -> float:
    """Typing speed in words per minute; 0 when no time has elapsed."""
    if writing_time_ms <= 0:
        return 0.0
    return word_count / writing_time_ms * 60_000


def explain_integrity(
    metrics: WritingMetrics,
    word_count: int,
    writing_time_ms: float,
) -> list[Penalty]:
    """List every penalty rule that fires for this session, in rule order.

    Args:
        metrics: Fingerprint from :func:`~byhand.analysis.metrics.reduce_events`.
        word_count: Final word count of the document.
        writing_time_ms: Session duration in milliseconds.

    Returns:
        Triggered penalties; empty for a clean session.
    """
    penalties: list[Penalty] = []

    if metrics.blocked_pastes > 0:
        points = min(BLOCKED_PASTE_PENALTY_CAP, metrics.blocked_pastes * BLOCKED_PASTE_PENALTY)
        penalties.append(
            Penalty(Rule.BlockedPastes, points, f"{metrics.blocked_pastes} paste attempt(s) blocked")
        )

    wpm = words_per_minute(word_count, writing_time_ms)
    if wpm > WPM_IMPLAUSIBLE:
        penalties.append(
            Penalty(Rule.ImplausibleSpeed, WPM_IMPLAUSIBLE_PENALTY, f"{wpm:.0f} wpm exceeds {WPM_IMPLAUSIBLE:.0f}")
        )
    elif wpm > WPM_SUSPICIOUS:
        penalties.append(
            Penalty(Rule.SuspiciousSpeed, WPM_SUSPICIOUS_PENALTY, f"{wpm:.0f} wpm exceeds {WPM_SUSPICIOUS:.0f}")
        )

    if metrics.keystroke_variance < LOW_VARIANCE_THRESHOLD:
        penalties.append(
            Penalty(
                Rule.MechanicalRhythm,
                LOW_VARIANCE_PENALTY,
                f"keystroke variation {metrics.keystroke_variance} below {LOW_VARIANCE_THRESHOLD}",
            )
        )

    if metrics.pause_count == 0 and word_count > NO_PAUSE_MIN_WORDS:
        penalties.append(
            Penalty(Rule.NoPauses, NO_PAUSE_PENALTY, f"no pauses across {word_count} words")
        )

    if metrics.deletion_rate == 0 and word_count > NO_DELETION_MIN_WORDS:
        penalties.append(
            Penalty(Rule.NoCorrections, NO_DELETION_PENALTY, f"no corrections across {word_count} words")
        )
    elif metrics.deletion_rate > EXCESSIVE_DELETION_RATE:
        penalties.append(
            Penalty(
                Rule.ExcessiveCorrections,
                EXCESSIVE_DELETION_PENALTY,
                f"deletion rate {metrics.deletion_rate} above {EXCESSIVE_DELETION_RATE}",
            )
        )

    return penalties


def score_integrity(
    metrics: WritingMetrics,
    word_count: int,
    writing_time_ms: float,
) -> int:
    """Compute the integrity score, clamped to ``[0, 100]``.

    Total over degenerate input: zero words or zero elapsed time never raise.
    """
    total = sum(p.points for p in explain_integrity(metrics, word_count, writing_time_ms))
    return max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - total))


def score_band(score: int) -> ScoreBand:
    """Map a score to its display band."""
    if score >= BAND_EXCELLENT:
        return ScoreBand.Excellent
    if score >= BAND_GOOD:
        return ScoreBand.Good
    if score >= BAND_MODERATE:
        return ScoreBand.Moderate
    return ScoreBand.Low
