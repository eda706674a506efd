"""Centralised default constants for byhand.

Every project-wide magic number / string lives here.
Import these instead of hard-coding values in function signatures or CLI options.

The scoring constants are part of the issued-certificate contract: changing
any of them changes the score of previously certified documents.
"""

from __future__ import annotations

from typing import Final

# ── Metrics reducer ──
PAUSE_THRESHOLD_MS: Final[int] = 2000
BURST_THRESHOLD_MS: Final[int] = 500

# ── Integrity scorer ──
MAX_SCORE: Final[int] = 100
MIN_SCORE: Final[int] = 0
BLOCKED_PASTE_PENALTY: Final[int] = 10
BLOCKED_PASTE_PENALTY_CAP: Final[int] = 30
WPM_SUSPICIOUS: Final[float] = 150.0
WPM_SUSPICIOUS_PENALTY: Final[int] = 20
WPM_IMPLAUSIBLE: Final[float] = 200.0
WPM_IMPLAUSIBLE_PENALTY: Final[int] = 40
LOW_VARIANCE_THRESHOLD: Final[float] = 0.1
LOW_VARIANCE_PENALTY: Final[int] = 15
NO_PAUSE_MIN_WORDS: Final[int] = 100
NO_PAUSE_PENALTY: Final[int] = 10
NO_DELETION_MIN_WORDS: Final[int] = 50
NO_DELETION_PENALTY: Final[int] = 5
EXCESSIVE_DELETION_RATE: Final[float] = 0.3
EXCESSIVE_DELETION_PENALTY: Final[int] = 10

# ── Score bands ──
BAND_EXCELLENT: Final[int] = 90
BAND_GOOD: Final[int] = 70
BAND_MODERATE: Final[int] = 50

# ── Session workflow ──
DEFAULT_MIN_WORDS: Final[int] = 10
DEFAULT_TITLE: Final[str] = "Untitled Document"

# ── Playback ──
PLAYBACK_MAX_GAP_MS: Final[int] = 200
PLAYBACK_SPEEDUP: Final[int] = 3
PLAYBACK_MIN_DELAY_MS: Final[int] = 10

# ── Verification identifiers ──
VERIFICATION_PREFIX: Final[str] = "bmoh"
VERIFICATION_GROUPS: Final[int] = 3
VERIFICATION_GROUP_SIZE: Final[int] = 4

# ── Paths ──
DEFAULT_DATA_DIR: Final[str] = "data"
