"""Per-install configuration persistence.

Stores author settings as a JSON file inside the data directory.
The file is created on first access with an auto-generated ``author_id``
(UUID) that never changes.

Typical location::

    data/config.json

Usage::

    from byhand.core.config import UserConfig

    cfg = UserConfig(data_dir)
    cfg.author_id      # stable UUID, auto-generated on first run
    cfg.author_name    # editable display name (defaults to "anonymous")
    cfg.min_words = 25 # persists immediately
    cfg.as_dict()
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any

from byhand.core.defaults import DEFAULT_DATA_DIR, DEFAULT_MIN_WORDS

logger = logging.getLogger(__name__)

_DEFAULT_AUTHOR_NAME = "anonymous"
_CONFIG_FILENAME = "config.json"


class UserConfig:
    """Read/write access to ``config.json`` in a data directory.

    On first instantiation (no config file yet) a random UUID
    ``author_id`` is generated and persisted.  This ID is stable across
    restarts and is stamped into every certified document.

    ``min_words`` is the caller-side submission gate; the recorder itself
    never refuses to finalize below it.

    All mutations are persisted immediately.
    """

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR) -> None:
        self._path = Path(data_dir) / _CONFIG_FILENAME
        self._data: dict[str, Any] = self._load()
        self._ensure_author_id()

    def _load(self) -> dict[str, Any]:
        if self._path.exists():
            try:
                data = json.loads(self._path.read_text("utf-8"))
            except (json.JSONDecodeError, OSError):
                logger.warning("Corrupt config at %s, using defaults", self._path)
            else:
                if isinstance(data, dict):
                    return data
                logger.warning("Config at %s is not an object, using defaults", self._path)
        return {}

    def _ensure_author_id(self) -> None:
        if "author_id" not in self._data:
            self._data["author_id"] = str(uuid.uuid4())
            self._persist()

    def _persist(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._data, indent=2) + "\n", "utf-8")

    @property
    def path(self) -> Path:
        return self._path

    # -- author_id (stable, read-only after creation) --------------------------

    @property
    def author_id(self) -> str:
        """Stable UUID assigned to this install.  Never changes."""
        return self._data["author_id"]

    # -- author_name -----------------------------------------------------------

    @property
    def author_name(self) -> str:
        return self._data.get("author_name", _DEFAULT_AUTHOR_NAME)

    @author_name.setter
    def author_name(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise ValueError("author_name must not be empty")
        self._data["author_name"] = value
        self._persist()

    # -- min_words -------------------------------------------------------------

    @property
    def min_words(self) -> int:
        return int(self._data.get("min_words", DEFAULT_MIN_WORDS))

    @min_words.setter
    def min_words(self, value: int) -> None:
        self._data["min_words"] = _validate_min_words(value)
        self._persist()

    # -- generic helpers -------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        return {
            "author_id": self.author_id,
            "author_name": self.author_name,
            "min_words": self.min_words,
            **{
                k: v
                for k, v in self._data.items()
                if k not in ("author_id", "author_name", "min_words")
            },
        }

    def update(self, patch: dict[str, Any]) -> dict[str, Any]:
        """Merge *patch* into the config and persist.  Returns the full config.

        ``author_id`` is ignored in *patch*; it is immutable after creation.
        """
        if "author_name" in patch:
            name = str(patch["author_name"]).strip()
            if not name:
                raise ValueError("author_name must not be empty")
            self._data["author_name"] = name
        if "min_words" in patch:
            self._data["min_words"] = _validate_min_words(patch["min_words"])
        for key, val in patch.items():
            if key in ("author_id", "author_name", "min_words"):
                continue
            self._data[key] = val
        self._persist()
        return self.as_dict()


def _validate_min_words(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"min_words must be an integer, got {value!r}") from None
    if n < 0:
        raise ValueError(f"min_words must be non-negative, got {n}")
    return n
