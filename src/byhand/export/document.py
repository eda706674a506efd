"""Outbound certified-document payload and its verification.

:func:`certify` turns a finalized :class:`~byhand.core.types.SessionSnapshot`
into the :class:`~byhand.core.types.CertifiedDocument` handed to persistence
and export collaborators.  :func:`verify_document` re-derives the
fingerprint and score from a stored document's own event log and checks
them against the stored values.

Neither function mutates the snapshot or document it is given; failures in
downstream collaborators can never roll back a finalized session.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from byhand.analysis.integrity import ScoreBand, score_band, score_integrity
from byhand.analysis.metrics import reduce_events
from byhand.analysis.text import count_words
from byhand.core.defaults import DEFAULT_TITLE
from byhand.core.hashing import content_hash, new_verification_id
from byhand.core.time import Clock, utc_now
from byhand.core.types import (
    CertifiedDocument,
    DocumentStatus,
    SessionSnapshot,
    WritingMetrics,
)

logger = logging.getLogger(__name__)


def _hash_metadata(
    *,
    doc_id: str,
    title: str,
    word_count: int,
    writing_time_ms: int,
    integrity_score: int,
    verification_id: str,
) -> dict[str, Any]:
    return {
        "id": doc_id,
        "title": title,
        "wordCount": word_count,
        "writingTimeMs": writing_time_ms,
        "integrityScore": integrity_score,
        "verificationId": verification_id,
    }


def certify(
    snapshot: SessionSnapshot,
    *,
    title: str | None = None,
    author_id: str | None = None,
    verification_id: str | None = None,
    clock: Clock = utc_now,
) -> CertifiedDocument:
    """Build the certified document for a finalized session.

    Args:
        snapshot: Finalized session.
        title: Overrides ``snapshot.title``; blank titles fall back to
            ``"Untitled Document"``.
        author_id: Optional stable author identifier (see
            :class:`~byhand.core.config.UserConfig`).
        verification_id: Correlation key; generated when omitted.
        clock: Source of ``created_at`` / ``certified_at``.

    Returns:
        A document with status ``certified``.

    Raises:
        ValueError: If the snapshot has no content.
    """
    if not snapshot.content.strip():
        raise ValueError(f"Session {snapshot.id} has no content to certify")

    doc_title = (title if title is not None else snapshot.title).strip() or DEFAULT_TITLE
    doc_id = str(uuid.uuid4())
    vid = verification_id or new_verification_id()
    writing_time_ms = snapshot.writing_time_ms
    now = clock()

    digest = content_hash(
        snapshot.content,
        _hash_metadata(
            doc_id=doc_id,
            title=doc_title,
            word_count=snapshot.word_count,
            writing_time_ms=writing_time_ms,
            integrity_score=snapshot.integrity_score,
            verification_id=vid,
        ),
    )

    document = CertifiedDocument(
        id=doc_id,
        title=doc_title,
        content=snapshot.content,
        word_count=snapshot.word_count,
        writing_time_ms=writing_time_ms,
        events=snapshot.events,
        metrics=snapshot.metrics,
        integrity_score=snapshot.integrity_score,
        verification_id=vid,
        content_hash=digest,
        status=DocumentStatus.Certified,
        author_id=author_id,
        created_at=now,
        certified_at=now,
    )
    logger.info("Certified session %s as %s (score=%d)", snapshot.id, vid, snapshot.integrity_score)
    return document


def revoke(document: CertifiedDocument) -> CertifiedDocument:
    """Return a copy of *document* with status ``revoked``."""
    logger.info("Revoking %s", document.verification_id)
    return document.model_copy(update={"status": DocumentStatus.Revoked})


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of re-deriving a stored document's fingerprint and score."""

    verification_id: str
    status: DocumentStatus
    recomputed_metrics: WritingMetrics
    recomputed_score: int
    metrics_match: bool
    score_match: bool
    word_count_match: bool
    content_hash_match: bool

    @property
    def is_valid(self) -> bool:
        return (
            self.status is DocumentStatus.Certified
            and self.metrics_match
            and self.score_match
            and self.word_count_match
            and self.content_hash_match
        )

    @property
    def band(self) -> ScoreBand:
        return score_band(self.recomputed_score)


def verify_document(document: CertifiedDocument) -> VerificationResult:
    """Check a stored document against its own event log and content."""
    metrics = reduce_events(document.events)
    score = score_integrity(metrics, document.word_count, document.writing_time_ms)
    digest = content_hash(
        document.content,
        _hash_metadata(
            doc_id=document.id,
            title=document.title,
            word_count=document.word_count,
            writing_time_ms=document.writing_time_ms,
            integrity_score=document.integrity_score,
            verification_id=document.verification_id,
        ),
    )

    result = VerificationResult(
        verification_id=document.verification_id,
        status=document.status,
        recomputed_metrics=metrics,
        recomputed_score=score,
        metrics_match=metrics == document.metrics,
        score_match=score == document.integrity_score,
        word_count_match=count_words(document.content) == document.word_count,
        content_hash_match=digest == document.content_hash,
    )
    if not result.is_valid:
        logger.warning(
            "Verification of %s failed: status=%s metrics_match=%s score_match=%s "
            "word_count_match=%s content_hash_match=%s",
            document.verification_id, document.status, result.metrics_match,
            result.score_match, result.word_count_match, result.content_hash_match,
        )
    return result
