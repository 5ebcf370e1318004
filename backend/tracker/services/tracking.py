"""Tracking Service — session lifecycle, location ingestion, and queries.

Invariants:
    - The clock is read once per request via current_time_ms()
    - Location batches are checked for session existence before any insert
    - Non-atomic batches insert row by row; rows before a failure stay persisted
    - The reported count is the size of the supplied batch

Design Decisions:
    - Plain async functions over a service class: no state beyond the repository
    - Repository passed in (TrackingRepository Protocol): routes inject the SQL
      implementation, tests inject an in-memory double
"""

import logging
import time
from typing import Sequence

from tracker.core.domain_types import (
    DEFAULT_SESSION_DURATION_MS, BatchMode, LocationRecord, NewSession, SessionRecord,
)
from tracker.core.errors import SessionNotFoundError
from tracker.core.repository_protocols import TrackingRepository
from tracker.core.session_rules import (
    LocationLike, assign_locations, new_session, sessions_to_verify,
)

logger = logging.getLogger(__name__)


def current_time_ms() -> int:
    return int(time.time() * 1000)


async def start_session(
    repo: TrackingRepository,
    device_id: str | None,
    duration: int | None,
    default_duration: int = DEFAULT_SESSION_DURATION_MS,
) -> NewSession:
    """Create an active session for a device and persist it."""
    session = new_session(device_id, duration, current_time_ms(), default_duration)
    await repo.insert_session(session)
    logger.info(
        f"Session started: {session.id}",
        extra={"session_id": session.id, "device_id": device_id},
    )
    return session


async def stop_session(repo: TrackingRepository, session_id: str | None) -> None:
    """Mark a session inactive. Unknown or already-stopped ids are not errors."""
    await repo.deactivate_session(session_id)
    logger.info(f"Session stopped: {session_id}", extra={"session_id": session_id})


async def record_locations(
    repo: TrackingRepository,
    items: Sequence[LocationLike],
    mode: BatchMode = BatchMode.FIRST_SESSION,
    atomic: bool = False,
) -> int:
    """Store a batch of reported points and return the batch size.

    Raises SessionNotFoundError before inserting anything if a session the
    mode requires does not exist. In FIRST_SESSION mode every point is stored
    under the first element's session id.
    """
    if not items:
        return 0

    for session_id in sessions_to_verify(items, mode):
        if not await repo.session_exists(session_id):
            logger.warning(
                f"Location report for unknown session: {session_id}",
                extra={"session_id": session_id},
            )
            raise SessionNotFoundError(session_id)

    locations = assign_locations(items, mode, current_time_ms())
    if atomic:
        await repo.add_locations(locations)
    else:
        for location in locations:
            await repo.add_location(location)

    logger.info(
        f"Recorded {len(items)} locations",
        extra={"session_id": locations[0].session_id, "count": len(items)},
    )
    return len(items)


async def list_sessions(repo: TrackingRepository) -> list[SessionRecord]:
    return await repo.list_sessions()


async def list_locations(
    repo: TrackingRepository, session_id: str,
) -> list[LocationRecord]:
    return await repo.list_locations(session_id)
