"""Playback reconstructor: replay a finalized event log as text frames.

``key`` events append their mapped character, ``delete`` events drop the
last character, paste events are skipped.  The reconstruction is
approximate (shift state, caret moves and internal pastes are not
replayed), so the last frame is always the stored final content.

Iterating a :class:`Playback` is lazy and restartable: every ``iter()``
starts a fresh replay from the empty buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Sequence

from byhand.capture.keys import key_to_char
from byhand.core.defaults import (
    PLAYBACK_MAX_GAP_MS,
    PLAYBACK_MIN_DELAY_MS,
    PLAYBACK_SPEEDUP,
)
from byhand.core.types import EventKind, KeystrokeEvent


@dataclass(frozen=True)
class PlaybackFrame:
    """One display state.

    Attributes:
        text: Reconstructed buffer after the event.
        progress: Percent of replayable events consumed (100 on the last frame).
        delay_ms: Suggested wait before showing the next frame.
    """

    text: str
    progress: int
    delay_ms: float


def playback_delay(
    gap_ms: float,
    *,
    max_gap_ms: float = PLAYBACK_MAX_GAP_MS,
    speedup: float = PLAYBACK_SPEEDUP,
    min_delay_ms: float = PLAYBACK_MIN_DELAY_MS,
) -> float:
    """Compress a real inter-event gap into a watchable display delay."""
    return max(min(gap_ms, max_gap_ms) / speedup, min_delay_ms)


class Playback:
    """Restartable frame sequence over *events* ending at *content*."""

    def __init__(self, events: Sequence[KeystrokeEvent], content: str) -> None:
        self._events = tuple(e for e in events if e.kind in (EventKind.Key, EventKind.Delete))
        self._content = content

    def __len__(self) -> int:
        """Number of frames: one per replayable event plus the final frame."""
        return len(self._events) + 1

    def __iter__(self) -> Iterator[PlaybackFrame]:
        text = ""
        total = len(self._events)
        for i, event in enumerate(self._events):
            if event.kind is EventKind.Delete:
                text = text[:-1]
            else:
                text += key_to_char(event.key)

            nxt = self._events[i + 1] if i + 1 < total else None
            delay = playback_delay(nxt.t - event.t if nxt is not None else 0)
            yield PlaybackFrame(text=text, progress=(i * 100) // total, delay_ms=delay)

        yield PlaybackFrame(text=self._content, progress=100, delay_ms=0.0)

    def final_text(self) -> str:
        """Text of the last frame (always the stored content)."""
        return self._content
