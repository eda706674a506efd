"""Session-relative offsets and duration formatting.

All wall-clock instants are timezone-aware UTC.  Event timestamps are
integer milliseconds relative to session start and never wall-clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]

_ONE_MS = timedelta(milliseconds=1)


def utc_now() -> datetime:
    """Default wall clock: the current instant in UTC."""
    return datetime.now(tz=timezone.utc)


def offset_ms(now: datetime, started_at: datetime) -> int:
    """Milliseconds from *started_at* to *now*, floored at zero.

    Args:
        now: Current instant.
        started_at: Session start instant.

    Returns:
        Non-negative integer offset in milliseconds.
    """
    return max(0, (now - started_at) // _ONE_MS)


def format_duration(ms: int | float) -> str:
    """Render a millisecond duration as ``"1h 2m"``, ``"3m 4s"`` or ``"5s"``.

    Args:
        ms: Duration in milliseconds.  Negative values render as ``"0s"``.

    Returns:
        Compact human-readable duration.
    """
    seconds = max(0, int(ms // 1000))
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"
