"""JSON I/O primitives for snapshots and certified documents."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def write_model_json(model: BaseModel, path: Path) -> Path:
    """Write *model* as camelCase JSON to *path* atomically.

    Writes to a temporary file in the same directory first, then
    atomically replaces the target via :func:`os.replace`.  This
    prevents readers from ever seeing a partially-written file.

    Args:
        model: Pydantic model to persist (serialized by alias).
        path: Destination file path.

    Returns:
        The *path* that was written, for convenient chaining.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = model.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".json.tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload + "\n")
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp)
        raise
    return path


def read_model_json(path: Path, model_cls: type[ModelT]) -> ModelT:
    """Read and validate a JSON file as *model_cls*.

    Raises:
        pydantic.ValidationError: If the payload does not match the contract.
    """
    return model_cls.model_validate_json(path.read_text("utf-8"))


def read_json(path: Path) -> object:
    """Read an arbitrary JSON document."""
    return json.loads(path.read_text("utf-8"))
