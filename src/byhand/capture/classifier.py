"""Event classifier: raw input signal -> optional keystroke event.

Rules are applied in strict priority order:

1. Drop -- always an external paste: blocked, counted, clipboard ignored.
2. Paste (signal or Ctrl/Cmd+V) -- re-inserts the internal clipboard when
   it holds text captured by this session's own copy/cut; otherwise
   blocked and counted.
3. Copy / cut (signal or Ctrl/Cmd+C / X) -- overwrite the internal
   clipboard with the current selection; native action proceeds; no event.
4. Modifier key-down -- nothing.
5. Backspace / Delete -- ``delete`` event.
6. Printable key-down -- ``key`` event.
7. Anything else (key-up, navigation keys, unknown signals) -- ignored.

:func:`classify` is pure: the caller owns the clipboard slot and the
content buffer and applies the returned :class:`Classification`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from byhand.capture.keys import (
    COPY_SHORTCUT_KEY,
    CUT_SHORTCUT_KEY,
    PASTE_SHORTCUT_KEY,
    is_deletion,
    is_modifier,
    is_printable,
)
from byhand.capture.signals import Copy, Cut, Drop, KeyDown, Paste, Selection
from byhand.core.types import EventKind, KeystrokeEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edit:
    """Replace ``content[start:end]`` with *text*."""

    start: int
    end: int
    text: str

    def apply(self, content: str) -> str:
        return content[: self.start] + self.text + content[self.end :]


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one input signal.

    Attributes:
        event: Event to append to the session log, if any.
        clipboard: Internal clipboard contents after this signal.
        allow_native: Whether the editor's own handling may proceed.
        edit: Buffer mutation the recorder applies itself, if any.
        blocked: Whether the blocked-paste counter increments.
    """

    event: KeystrokeEvent | None
    clipboard: str
    allow_native: bool = True
    edit: Edit | None = None
    blocked: bool = False


def _resolve_selection(selection: Selection | None, content: str) -> tuple[int, int]:
    """Clamp *selection* to the buffer; ``None`` is a caret at the end."""
    n = len(content)
    if selection is None:
        return n, n
    return min(selection.start, n), min(selection.end, n)


def _paste(column: int, selection: Selection | None, clipboard: str, content: str, t: int) -> Classification:
    if clipboard:
        start, end = _resolve_selection(selection, content)
        return Classification(
            event=KeystrokeEvent(t=t, kind=EventKind.PasteInternal, pos=column, length=len(clipboard)),
            clipboard=clipboard,
            allow_native=False,
            edit=Edit(start, end, clipboard),
        )
    return _blocked(column, clipboard, t)


def _blocked(column: int, clipboard: str, t: int) -> Classification:
    return Classification(
        event=KeystrokeEvent(t=t, kind=EventKind.PasteBlocked, pos=column),
        clipboard=clipboard,
        allow_native=False,
        blocked=True,
    )


def _capture(selection: Selection | None, content: str, *, cut: bool) -> Classification:
    start, end = _resolve_selection(selection, content)
    captured = content[start:end]
    edit = Edit(start, end, "") if cut and end > start else None
    return Classification(event=None, clipboard=captured, edit=edit)


def classify(
    signal: object,
    *,
    clipboard: str,
    content: str,
    t: int,
) -> Classification:
    """Classify one raw input *signal*.

    Args:
        signal: One of the :mod:`byhand.capture.signals` variants.  Any other
            object is ignored.
        clipboard: Current internal clipboard (text from this session's own
            copy/cut actions, ``""`` when empty).
        content: Current content buffer, used to resolve selections.
        t: Milliseconds since session start; negative values clamp to 0.

    Returns:
        The :class:`Classification` to apply.
    """
    t = max(0, t)

    if isinstance(signal, Drop):
        return _blocked(signal.column, clipboard, t)

    if isinstance(signal, Paste):
        return _paste(signal.column, signal.selection, clipboard, content, t)

    if isinstance(signal, Copy):
        return _capture(signal.selection, content, cut=False)

    if isinstance(signal, Cut):
        return _capture(signal.selection, content, cut=True)

    if not isinstance(signal, KeyDown):
        return Classification(event=None, clipboard=clipboard)

    key = signal.key
    if signal.chord:
        if key == PASTE_SHORTCUT_KEY:
            return _paste(signal.column, signal.selection, clipboard, content, t)
        if key == COPY_SHORTCUT_KEY:
            return _capture(signal.selection, content, cut=False)
        if key == CUT_SHORTCUT_KEY:
            return _capture(signal.selection, content, cut=True)

    if is_modifier(key):
        return Classification(event=None, clipboard=clipboard)

    if is_deletion(key):
        return Classification(
            event=KeystrokeEvent(t=t, kind=EventKind.Delete, key=key, pos=signal.column),
            clipboard=clipboard,
        )

    if is_printable(key):
        return Classification(
            event=KeystrokeEvent(t=t, kind=EventKind.Key, key=key, pos=signal.column),
            clipboard=clipboard,
        )

    logger.debug("Ignoring unrecognized key %s", key)
    return Classification(event=None, clipboard=clipboard)
