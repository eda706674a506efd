"""Verification identifiers and deterministic content fingerprints."""

from __future__ import annotations

import hashlib
import json
import secrets
import string
from typing import Any, Mapping

from byhand.core.defaults import (
    VERIFICATION_GROUP_SIZE,
    VERIFICATION_GROUPS,
    VERIFICATION_PREFIX,
)

_URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


def new_verification_id(
    prefix: str = VERIFICATION_PREFIX,
    *,
    groups: int = VERIFICATION_GROUPS,
    group_size: int = VERIFICATION_GROUP_SIZE,
) -> str:
    """Generate a URL-safe verification identifier such as ``bmoh-a1B2-c3D4-e5F6``.

    The identifier is random and opaque; it is a lookup key for the
    certified document, not a digest of its contents.

    Args:
        prefix: Leading tag, separated from the random groups by ``-``.
        groups: Number of random character groups.
        group_size: Characters per group.

    Returns:
        The formatted identifier.
    """
    raw = "".join(secrets.choice(_URL_SAFE_ALPHABET) for _ in range(groups * group_size))
    parts = [raw[i : i + group_size] for i in range(0, len(raw), group_size)]
    return "-".join([prefix, *parts])


def content_hash(content: str, metadata: Mapping[str, Any] | None = None) -> str:
    """Full SHA-256 hex digest of *content* plus *metadata*.

    The payload is canonical JSON (sorted keys, compact separators) so the
    same inputs always produce the same digest and a stored document can be
    re-hashed during verification.

    Args:
        content: Final document text.
        metadata: JSON-serializable metadata bound into the digest.

    Returns:
        64 lowercase hexadecimal characters.
    """
    payload = json.dumps(
        {"content": content, "metadata": dict(metadata or {})},
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
