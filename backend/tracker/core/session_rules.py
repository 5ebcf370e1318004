"""Session Rules — pure derivations for session start and location batches.

Invariants:
    - Session id is "{deviceId}-{now}" with a single clock read for id and start
    - Falsy duration (None or 0) falls back to the default duration
    - Falsy timestamp (None or 0) falls back to the receipt time
    - FIRST_SESSION mode: the first element's sessionId owns every point
    - PER_ITEM mode: each point keeps its own sessionId

Design Decisions:
    - `now` is a parameter, never read here: callers own the clock, tests pin it
    - Inputs typed by LocationLike Protocol so core never imports schemas/
"""

from typing import Protocol, Sequence

from tracker.core.domain_types import (
    DEFAULT_SESSION_DURATION_MS, BatchMode, NewLocation, NewSession, SessionId,
)


class LocationLike(Protocol):
    """Structural contract for one reported point (request schema or test double)."""
    session_id: str | None
    latitude: float | None
    longitude: float | None
    timestamp: int | None


def build_session_id(device_id: str | None, now: int) -> SessionId:
    """Derive the session key as "<deviceId>-<now>".

    A missing deviceId deliberately renders as an empty prefix ("-<now>")
    rather than the literal "undefined-<now>". The stored device_id stays NULL.
    """
    return SessionId(f"{device_id or ''}-{now}")


def compute_end_time(
    start_time: int,
    duration: int | None,
    default_duration: int = DEFAULT_SESSION_DURATION_MS,
) -> int:
    return start_time + (duration or default_duration)


def new_session(
    device_id: str | None,
    duration: int | None,
    now: int,
    default_duration: int = DEFAULT_SESSION_DURATION_MS,
) -> NewSession:
    """Build the row for a freshly started session (active)."""
    return NewSession(
        id=build_session_id(device_id, now),
        device_id=device_id,
        start_time=now,
        end_time=compute_end_time(now, duration, default_duration),
    )


def resolve_timestamp(timestamp: int | None, now: int) -> int:
    return timestamp or now


def sessions_to_verify(
    items: Sequence[LocationLike], mode: BatchMode,
) -> list[str | None]:
    """Session ids that must exist before a batch is accepted.

    FIRST_SESSION checks only the first element. PER_ITEM checks every
    distinct id, in first-seen order.
    """
    if not items:
        return []
    if mode is BatchMode.FIRST_SESSION:
        return [items[0].session_id]
    seen: list[str | None] = []
    for item in items:
        if item.session_id not in seen:
            seen.append(item.session_id)
    return seen


def assign_locations(
    items: Sequence[LocationLike], mode: BatchMode, now: int,
) -> list[NewLocation]:
    """Map reported points to insertable rows, preserving array order."""
    if not items:
        return []
    owner = items[0].session_id
    return [
        NewLocation(
            session_id=SessionId(
                owner if mode is BatchMode.FIRST_SESSION else item.session_id
            ),
            latitude=item.latitude,
            longitude=item.longitude,
            timestamp=resolve_timestamp(item.timestamp, now),
        )
        for item in items
    ]
