"""Drive a recorder from a timed script of input signals and buffer updates.

An editor bridge (or a test) serializes what happened during a session as
a list of steps, each stamped with its offset from session start::

    [
      {"at": 0,   "input": {"signal": "keydown", "key": "KeyH", "column": 1}},
      {"at": 0,   "content": "h"},
      {"at": 140, "input": {"signal": "keydown", "key": "KeyI", "column": 2}},
      {"at": 140, "content": "hi"}
    ]

:func:`run_script` replays the steps through a fresh
:class:`~byhand.capture.recorder.SessionRecorder` under a synthetic clock
and returns the finalized snapshot.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from byhand.capture.recorder import SessionRecorder
from byhand.capture.signals import InputSignal
from byhand.core.defaults import DEFAULT_MIN_WORDS
from byhand.core.time import utc_now
from byhand.core.types import SessionSnapshot


class ScriptStep(BaseModel, frozen=True):
    """One timed step: an input signal, a buffer update, or both."""

    at: int = Field(ge=0, description="Milliseconds since session start.")
    input: InputSignal | None = None
    content: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> ScriptStep:
        if self.input is None and self.content is None:
            raise ValueError("script step needs 'input' or 'content'")
        return self


SCRIPT_ADAPTER: TypeAdapter[list[ScriptStep]] = TypeAdapter(list[ScriptStep])


class _ScriptClock:
    """Clock that reads the offset of the step being replayed."""

    def __init__(self, origin: datetime) -> None:
        self.origin = origin
        self.offset_ms = 0

    def __call__(self) -> datetime:
        return self.origin + timedelta(milliseconds=self.offset_ms)


def run_script(
    steps: Sequence[ScriptStep],
    *,
    title: str = "",
    started_at: datetime | None = None,
    ended_at_ms: int | None = None,
    min_words: int = DEFAULT_MIN_WORDS,
) -> SessionSnapshot:
    """Replay *steps* in order and finalize the session.

    Args:
        steps: Steps ordered by ``at`` (out-of-order steps are re-stamped
            by the recorder to keep the log non-decreasing).
        title: Session title.
        started_at: Wall-clock origin; defaults to now (UTC).
        ended_at_ms: Finalize offset; defaults to the last step's ``at``.
        min_words: Minimum-word gate passed to the recorder.

    Returns:
        The finalized snapshot.
    """
    clock = _ScriptClock(started_at or utc_now())
    recorder = SessionRecorder.start(title=title, clock=clock, min_words=min_words)

    for step in steps:
        clock.offset_ms = step.at
        if step.input is not None:
            recorder.handle(step.input)
        if step.content is not None:
            recorder.on_content_change(step.content)

    last = steps[-1].at if steps else 0
    clock.offset_ms = max(last, ended_at_ms if ended_at_ms is not None else last)
    return recorder.finalize()
