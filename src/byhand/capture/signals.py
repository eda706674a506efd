"""Raw input signals emitted by an editing surface.

Signals are a closed tagged union keyed by ``signal``.  The recorder
consumes them one at a time, synchronously, in arrival order::

    recorder.handle(KeyDown(key="KeyH", column=1))
    recorder.handle(Paste(column=4))

A JSON list of signals (as produced by an editor bridge) validates via
:data:`SIGNAL_LIST_ADAPTER`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator


class Selection(BaseModel, frozen=True):
    """Half-open character range ``[start, end)`` into the content buffer."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> Selection:
        if self.end < self.start:
            raise ValueError(f"selection end ({self.end}) precedes start ({self.start})")
        return self

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


class KeyDown(BaseModel, frozen=True):
    """A key was pressed.  ``ctrl``/``meta`` chords may be clipboard shortcuts."""

    signal: Literal["keydown"] = "keydown"
    key: str = Field(description="Physical key code, e.g. 'KeyA', 'Backspace'.")
    column: int = Field(default=0, ge=0, description="Cursor column.")
    ctrl: bool = False
    meta: bool = False
    selection: Selection | None = Field(
        default=None, description="Active selection; None means caret at end of content."
    )

    @property
    def chord(self) -> bool:
        return self.ctrl or self.meta


class KeyUp(BaseModel, frozen=True):
    """A key was released.  Never recorded."""

    signal: Literal["keyup"] = "keyup"
    key: str
    column: int = Field(default=0, ge=0)


class Paste(BaseModel, frozen=True):
    """A paste attempt from a context menu or clipboard event."""

    signal: Literal["paste"] = "paste"
    column: int = Field(default=0, ge=0)
    selection: Selection | None = None


class Drop(BaseModel, frozen=True):
    """Content dragged and dropped onto the editor."""

    signal: Literal["drop"] = "drop"
    column: int = Field(default=0, ge=0)


class Copy(BaseModel, frozen=True):
    """Copy of the current selection."""

    signal: Literal["copy"] = "copy"
    selection: Selection | None = None


class Cut(BaseModel, frozen=True):
    """Cut of the current selection."""

    signal: Literal["cut"] = "cut"
    selection: Selection | None = None


InputSignal = Annotated[
    Union[KeyDown, KeyUp, Paste, Drop, Copy, Cut],
    Field(discriminator="signal"),
]

SIGNAL_LIST_ADAPTER: TypeAdapter[list[InputSignal]] = TypeAdapter(list[InputSignal])
