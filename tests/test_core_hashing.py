"""Tests for verification identifiers and content fingerprints."""

from __future__ import annotations

import re

from byhand.core.hashing import content_hash, new_verification_id

_VID_PATTERN = re.compile(r"bmoh-[A-Za-z0-9_-]{4}-[A-Za-z0-9_-]{4}-[A-Za-z0-9_-]{4}")


class TestVerificationId:
    def test_format(self) -> None:
        assert _VID_PATTERN.fullmatch(new_verification_id())

    def test_ids_are_unique(self) -> None:
        ids = {new_verification_id() for _ in range(200)}
        assert len(ids) == 200

    def test_custom_prefix_and_shape(self) -> None:
        vid = new_verification_id("doc", groups=2, group_size=3)
        assert re.fullmatch(r"doc-[A-Za-z0-9_-]{3}-[A-Za-z0-9_-]{3}", vid)


class TestContentHash:
    def test_deterministic(self) -> None:
        meta = {"wordCount": 3, "title": "Essay"}
        assert content_hash("a b c", meta) == content_hash("a b c", meta)

    def test_metadata_key_order_irrelevant(self) -> None:
        assert content_hash("x", {"a": 1, "b": 2}) == content_hash("x", {"b": 2, "a": 1})

    def test_content_change_changes_digest(self) -> None:
        assert content_hash("draft one") != content_hash("draft two")

    def test_metadata_change_changes_digest(self) -> None:
        assert content_hash("x", {"score": 90}) != content_hash("x", {"score": 91})

    def test_output_is_full_sha256_hex(self) -> None:
        digest = content_hash("")
        assert re.fullmatch(r"[0-9a-f]{64}", digest)
