"""Session recorder: owns one writing session's event log and buffers.

Single-writer model: one recorder per editing surface, fed synchronously
in input order.  The recorder exclusively owns the internal clipboard
slot and passes it explicitly to :func:`~byhand.capture.classifier.classify`
on every signal, so nothing leaks between sessions.

Lifecycle::

    recorder = SessionRecorder.start(title="Essay")
    recorder.handle(KeyDown(key="KeyH", column=1))
    recorder.on_content_change("h")
    ...
    snapshot = recorder.finalize()   # exactly once

Every mutator raises :class:`~byhand.core.errors.AlreadyFinalized` once
the session has been finalized.  The minimum-word gate
(:attr:`SessionRecorder.ready_to_submit`) is advisory: callers check it
before finalizing, the recorder never refuses.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime

from byhand.analysis.integrity import score_integrity
from byhand.analysis.metrics import reduce_events
from byhand.analysis.text import count_words
from byhand.capture.classifier import Classification, classify
from byhand.core.defaults import DEFAULT_MIN_WORDS
from byhand.core.errors import AlreadyFinalized
from byhand.core.logging import install_sanitizing_filter
from byhand.core.time import Clock, offset_ms, utc_now
from byhand.core.types import KeystrokeEvent, SessionSnapshot

logger = logging.getLogger(__name__)
install_sanitizing_filter(logger)


class SessionRecorder:
    """Mutable state of one open writing session.

    Use :meth:`start` rather than the constructor in application code.
    """

    def __init__(
        self,
        session_id: str,
        started_at: datetime,
        *,
        title: str = "",
        clock: Clock = utc_now,
        min_words: int = DEFAULT_MIN_WORDS,
    ) -> None:
        self._id = session_id
        self._started_at = started_at
        self._title = title
        self._clock = clock
        self._min_words = min_words

        self._events: list[KeystrokeEvent] = []
        self._content = ""
        self._word_count = 0
        self._blocked_pastes = 0
        self._clipboard = ""
        self._snapshot: SessionSnapshot | None = None
        self._lock = threading.Lock()

    @classmethod
    def start(
        cls,
        *,
        title: str = "",
        clock: Clock = utc_now,
        min_words: int = DEFAULT_MIN_WORDS,
    ) -> SessionRecorder:
        """Open a new session with a fresh identifier and ``started_at = now``."""
        recorder = cls(str(uuid.uuid4()), clock(), title=title, clock=clock, min_words=min_words)
        logger.info("Session %s started", recorder.id)
        return recorder

    # -- read-only state -------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def title(self) -> str:
        return self._title

    @property
    def content(self) -> str:
        return self._content

    @property
    def word_count(self) -> int:
        return self._word_count

    @property
    def blocked_pastes(self) -> int:
        return self._blocked_pastes

    @property
    def events(self) -> tuple[KeystrokeEvent, ...]:
        return tuple(self._events)

    @property
    def is_recording(self) -> bool:
        return self._snapshot is None

    @property
    def snapshot(self) -> SessionSnapshot | None:
        """The finalized snapshot, or ``None`` while the session is open."""
        return self._snapshot

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds since start; frozen at the final duration once finalized.

        Intended for a periodic display tick; recording never depends on it.
        """
        if self._snapshot is not None:
            return self._snapshot.writing_time_ms
        return offset_ms(self._clock(), self._started_at)

    @property
    def ready_to_submit(self) -> bool:
        """Whether the caller-side minimum-word gate is satisfied."""
        return self._word_count >= self._min_words

    @property
    def words_remaining(self) -> int:
        return max(0, self._min_words - self._word_count)

    # -- mutators --------------------------------------------------------------

    def _ensure_open(self, operation: str) -> None:
        if self._snapshot is not None:
            raise AlreadyFinalized(self._id, operation)

    def set_title(self, title: str) -> None:
        with self._lock:
            self._ensure_open("set_title")
            self._title = title

    def on_content_change(self, text: str) -> None:
        """Mirror the editor buffer and recompute the word count."""
        with self._lock:
            self._ensure_open("on_content_change")
            self._set_content(text)

    def record_event(self, event: KeystrokeEvent) -> None:
        """Append *event* to the log.

        An event stamped earlier than the last logged one (clock skew) is
        re-stamped to the last ``t`` so the log stays non-decreasing.
        """
        with self._lock:
            self._ensure_open("record_event")
            self._append(event)

    def handle(self, signal: object) -> Classification:
        """Classify one raw input signal and apply its outcome.

        Returns:
            The classification, so the editing surface knows whether its
            native handling (``allow_native``) may proceed.
        """
        with self._lock:
            self._ensure_open("handle")
            t = offset_ms(self._clock(), self._started_at)
            result = classify(signal, clipboard=self._clipboard, content=self._content, t=t)

            if result.clipboard != self._clipboard:
                logger.debug("Session %s clipboard=%r", self._id, result.clipboard)
            self._clipboard = result.clipboard
            if result.edit is not None:
                self._set_content(result.edit.apply(self._content))
            if result.blocked:
                self._blocked_pastes += 1
                logger.info("Session %s blocked paste #%d", self._id, self._blocked_pastes)
            if result.event is not None:
                self._append(result.event)
            return result

    def finalize(self) -> SessionSnapshot:
        """Close the session and compute its fingerprint and score.

        Atomic: exactly one caller observes the open -> finalized transition.

        Raises:
            AlreadyFinalized: If the session was finalized before.
        """
        with self._lock:
            self._ensure_open("finalize")
            ended_at = max(self._clock(), self._started_at)
            writing_time_ms = offset_ms(ended_at, self._started_at)
            metrics = reduce_events(self._events)
            score = score_integrity(metrics, self._word_count, writing_time_ms)

            snapshot = SessionSnapshot(
                id=self._id,
                title=self._title,
                started_at=self._started_at,
                ended_at=ended_at,
                events=tuple(self._events),
                content=self._content,
                word_count=self._word_count,
                blocked_pastes=self._blocked_pastes,
                metrics=metrics,
                integrity_score=score,
            )
            self._snapshot = snapshot

        logger.info(
            "Session %s finalized: %d events, %d words, %d ms, score=%d",
            self._id, len(self._events), self._word_count, writing_time_ms, score,
        )
        if self._word_count < self._min_words:
            logger.warning(
                "Session %s finalized below the %d-word minimum (%d words)",
                self._id, self._min_words, self._word_count,
            )
        return snapshot

    # -- internals (caller holds the lock) -------------------------------------

    def _set_content(self, text: str) -> None:
        self._content = text
        self._word_count = count_words(text)

    def _append(self, event: KeystrokeEvent) -> None:
        if self._events and event.t < self._events[-1].t:
            logger.warning(
                "Session %s: event at t=%d precedes last t=%d, re-stamping",
                self._id, event.t, self._events[-1].t,
            )
            event = event.model_copy(update={"t": self._events[-1].t})
        self._events.append(event)
        logger.debug("Session %s recorded %s at t=%d", self._id, event.kind, event.t)
