"""Core data contracts: keystroke events, writing metrics, sessions and documents.

Python attributes are snake_case; the wire format (``model_dump(by_alias=True)``
and JSON input) uses the camelCase names of the recorded event log format so that
previously recorded sessions validate unchanged.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class EventKind(StrEnum):
    """Closed set of recorded event kinds.

    Values are the wire tags of the event log.  Do NOT add members:
    the metrics reducer and playback both assume exactly these four.
    """

    Key = "key"
    Delete = "delete"
    PasteBlocked = "paste_blocked"
    PasteInternal = "paste_internal"


class KeystrokeEvent(BaseModel, frozen=True, populate_by_name=True):
    """One observed input action, timestamped relative to session start.

    ``length`` is populated only for ``paste_internal`` events and carries the
    number of characters re-inserted from the internal clipboard.
    """

    t: int = Field(ge=0, description="Milliseconds since session start.")
    kind: EventKind = Field(alias="type", description="Event kind tag.")
    key: str | None = Field(default=None, description="Symbolic key identifier, e.g. 'KeyA'.")
    pos: int = Field(default=0, ge=0, description="Cursor column at the time of the event.")
    length: int | None = Field(
        default=None, alias="len", ge=0, description="Inserted length for internal pastes."
    )

    @model_validator(mode="after")
    def _check_variant_fields(self) -> KeystrokeEvent:
        if self.kind is EventKind.PasteInternal:
            if self.length is None:
                raise ValueError("paste_internal events must carry 'len'")
        elif self.length is not None:
            raise ValueError(f"'len' is only allowed on paste_internal events, not {self.kind}")
        if self.kind in (EventKind.Key, EventKind.Delete) and not self.key:
            raise ValueError(f"{self.kind} events must carry a key identifier")
        return self


class WritingMetrics(BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True):
    """Statistical fingerprint of one session's event log.

    ``keystroke_variance`` is the coefficient of variation of key-to-key
    intervals (population std / mean), not the raw variance.
    """

    avg_keystroke_interval: int = Field(default=0, ge=0, description="Mean key-to-key interval (ms, rounded).")
    keystroke_variance: float = Field(default=0.0, ge=0.0, description="Coefficient of variation of intervals.")
    pause_count: int = Field(default=0, ge=0, description="Intervals longer than the pause threshold.")
    deletion_rate: float = Field(default=0.0, ge=0.0, le=1.0, description="Deletes / (keys + deletes).")
    blocked_pastes: int = Field(default=0, ge=0, description="Number of paste_blocked events.")
    longest_burst: int = Field(default=0, ge=0, description="Longest run of sub-threshold keystrokes.")


class SessionSnapshot(BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True):
    """Immutable result of finalizing a writing session."""

    id: str = Field(description="Opaque session identifier.")
    title: str = Field(default="", description="Document title supplied by the writer.")
    started_at: datetime = Field(description="Wall-clock session start (UTC).")
    ended_at: datetime = Field(description="Wall-clock finalize instant (UTC).")
    events: tuple[KeystrokeEvent, ...] = Field(default=(), description="Ordered event log.")
    content: str = Field(default="", description="Final text buffer.")
    word_count: int = Field(ge=0, description="Whitespace-delimited token count of content.")
    blocked_pastes: int = Field(default=0, ge=0, description="Blocked paste/drop attempts.")
    metrics: WritingMetrics = Field(description="Fingerprint computed at finalize.")
    integrity_score: int = Field(ge=0, le=100, description="Heuristic score computed at finalize.")

    @model_validator(mode="after")
    def _check_invariants(self) -> SessionSnapshot:
        if self.ended_at < self.started_at:
            raise ValueError(
                f"ended_at ({self.ended_at}) must not precede started_at ({self.started_at})"
            )
        for prev, cur in zip(self.events, self.events[1:]):
            if cur.t < prev.t:
                raise ValueError(f"events out of order: t={cur.t} follows t={prev.t}")
        return self

    @property
    def writing_time_ms(self) -> int:
        """Elapsed time between start and finalize, in milliseconds."""
        return (self.ended_at - self.started_at) // timedelta(milliseconds=1)


class DocumentStatus(StrEnum):
    """Lifecycle of a certified document."""

    Draft = "draft"
    Certified = "certified"
    Revoked = "revoked"


class CertifiedDocument(BaseModel, frozen=True, alias_generator=to_camel, populate_by_name=True):
    """Outbound payload handed to persistence and export collaborators.

    ``verification_id`` is an opaque correlation key generated outside the
    scoring path; it carries no information about the score.
    """

    id: str
    title: str
    content: str
    word_count: int = Field(ge=0)
    writing_time_ms: int = Field(ge=0)
    events: tuple[KeystrokeEvent, ...] = ()
    metrics: WritingMetrics
    integrity_score: int = Field(ge=0, le=100)
    verification_id: str
    content_hash: str
    status: DocumentStatus = DocumentStatus.Certified
    author_id: str | None = None
    created_at: datetime
    certified_at: datetime | None = None
