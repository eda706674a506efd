"""Metrics reducer: event log -> :class:`~byhand.core.types.WritingMetrics`.

Only ``key`` events contribute to the interval series.  Deletions count
toward the deletion rate but never split an interval or reset a burst;
paste events only feed the blocked-paste count.

All derived quantities are computed from unrounded values; rounding is
applied to the output fields only.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from byhand.core.defaults import BURST_THRESHOLD_MS, PAUSE_THRESHOLD_MS
from byhand.core.types import EventKind, KeystrokeEvent, WritingMetrics


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for non-negative values (matches issued certificates)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def key_intervals(events: Sequence[KeystrokeEvent]) -> np.ndarray:
    """Consecutive ``t`` gaps between ``key`` events, in log order.

    Returns an empty float array when there are fewer than two keys.
    """
    times = np.array([e.t for e in events if e.kind is EventKind.Key], dtype=np.float64)
    if len(times) < 2:
        return np.empty(0, dtype=np.float64)
    return np.diff(times)


def longest_burst(
    intervals: np.ndarray | Sequence[float],
    burst_threshold_ms: float = BURST_THRESHOLD_MS,
) -> int:
    """Length, in keystrokes, of the longest run of sub-threshold intervals.

    The running counter is seeded at 1 (the keystroke that opens a run),
    grows while consecutive intervals stay strictly under the threshold,
    and resets to 1 otherwise.  A log with no qualifying interval has a
    longest burst of 0.
    """
    longest = 0
    current = 1
    for gap in intervals:
        if gap < burst_threshold_ms:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def reduce_events(
    events: Sequence[KeystrokeEvent],
    *,
    pause_threshold_ms: float = PAUSE_THRESHOLD_MS,
    burst_threshold_ms: float = BURST_THRESHOLD_MS,
) -> WritingMetrics:
    """Reduce an event log to its statistical fingerprint.

    Total over any well-formed log; the empty log yields all zeros.

    Args:
        events: Event log ordered by ``t``.
        pause_threshold_ms: Intervals strictly above this count as pauses.
        burst_threshold_ms: Intervals strictly below this extend a burst.

    Returns:
        The populated :class:`WritingMetrics`.
    """
    n_keys = sum(1 for e in events if e.kind is EventKind.Key)
    n_deletes = sum(1 for e in events if e.kind is EventKind.Delete)
    n_blocked = sum(1 for e in events if e.kind is EventKind.PasteBlocked)

    intervals = key_intervals(events)

    if len(intervals) > 0:
        mean = float(np.mean(intervals))
        std = float(np.std(intervals))
        variation = std / (mean or 1.0)
        pauses = int(np.sum(intervals > pause_threshold_ms))
    else:
        mean = 0.0
        variation = 0.0
        pauses = 0

    total = n_keys + n_deletes
    deletion_rate = n_deletes / total if total > 0 else 0.0

    return WritingMetrics(
        avg_keystroke_interval=int(_round_half_up(mean)),
        keystroke_variance=_round_half_up(variation, 2),
        pause_count=pauses,
        deletion_rate=_round_half_up(deletion_rate, 2),
        blocked_pastes=n_blocked,
        longest_burst=longest_burst(intervals, burst_threshold_ms),
    )
