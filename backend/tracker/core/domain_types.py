"""Domain Types — identity types, records and constants shared across layers.

Invariants:
    - Times are integer epoch milliseconds everywhere (never datetime)
    - SessionRecord / LocationRecord are what the repository returns; the ORM
      never leaks past infrastructure/
    - is_active is stored as an integer (1/0), not a bool

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclasses for records: immutable once read
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", str)
EpochMillis = NewType("EpochMillis", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_SESSION_DURATION_MS = 12 * 60 * 60 * 1000
ACTIVE = 1
INACTIVE = 0


# ─── Enums ───────────────────────────────────────────────────────

class BatchMode(str, Enum):
    """How a location batch is matched to sessions."""
    FIRST_SESSION = "first_session"  # first element's sessionId owns the batch
    PER_ITEM = "per_item"            # each element validated and stored on its own


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class NewSession:
    """Fields of a session about to be inserted."""
    id: SessionId
    device_id: str | None
    start_time: int
    end_time: int
    is_active: int = ACTIVE


@dataclass(frozen=True)
class NewLocation:
    """Fields of a location point about to be inserted."""
    session_id: SessionId
    latitude: float | None
    longitude: float | None
    timestamp: int


@dataclass(frozen=True)
class SessionRecord:
    id: str
    device_id: str | None
    start_time: int
    end_time: int
    is_active: int


@dataclass(frozen=True)
class LocationRecord:
    id: int
    session_id: str
    latitude: float | None
    longitude: float | None
    timestamp: int
