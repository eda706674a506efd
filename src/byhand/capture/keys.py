"""Closed key-identifier tables shared by the classifier and playback.

Key identifiers are physical key codes (``KeyA``, ``Digit1``, ``Space``).
Every recognized printable identifier maps to exactly one literal
character; anything outside these tables is unrecognized.
"""

from __future__ import annotations

import string
from typing import Final, Mapping

MODIFIER_KEYS: Final[frozenset[str]] = frozenset(
    {
        "Shift", "ShiftLeft", "ShiftRight",
        "Control", "ControlLeft", "ControlRight",
        "Alt", "AltLeft", "AltRight",
        "Meta", "MetaLeft", "MetaRight",
        "CapsLock",
    }
)

DELETION_KEYS: Final[frozenset[str]] = frozenset({"Backspace", "Delete"})

PASTE_SHORTCUT_KEY: Final[str] = "KeyV"
COPY_SHORTCUT_KEY: Final[str] = "KeyC"
CUT_SHORTCUT_KEY: Final[str] = "KeyX"

_PUNCTUATION: Final[dict[str, str]] = {
    "Space": " ",
    "Enter": "\n",
    "Period": ".",
    "Comma": ",",
    "Semicolon": ";",
    "Quote": "'",
    "BracketLeft": "[",
    "BracketRight": "]",
}

PRINTABLE_KEYS: Final[Mapping[str, str]] = {
    **{f"Key{c}": c.lower() for c in string.ascii_uppercase},
    **{f"Digit{d}": d for d in string.digits},
    **_PUNCTUATION,
}


def is_modifier(key: str) -> bool:
    return key in MODIFIER_KEYS


def is_deletion(key: str) -> bool:
    return key in DELETION_KEYS


def is_printable(key: str) -> bool:
    return key in PRINTABLE_KEYS


def key_to_char(key: str | None) -> str:
    """Literal character typed by *key*, or ``""`` for unrecognized identifiers."""
    if key is None:
        return ""
    return PRINTABLE_KEYS.get(key, "")
