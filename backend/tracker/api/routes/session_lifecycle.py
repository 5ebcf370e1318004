"""Session Lifecycle — start, stop, and list tracking sessions.

Invariants:
    - start always creates a new active row; id collisions surface as 500
    - stop never checks existence and always reports success
    - list returns every session, newest start first, no pagination
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from tracker.api.dependencies import get_repository, settings_dependency
from tracker.config import Settings
from tracker.core.repository_protocols import TrackingRepository
from tracker.schemas.fields import model_or_empty
from tracker.schemas.session import (
    MessageResponse, SessionRead, SessionStartRequest, SessionStartResponse,
    SessionStopRequest,
)
from tracker.services import tracking

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["sessions"])


@router.post("/session/start", response_model=SessionStartResponse)
async def start_session(
    body: Any = Body(None),
    repo: TrackingRepository = Depends(get_repository),
    settings: Settings = Depends(settings_dependency),
):
    """Open a tracking session for a device."""
    request = model_or_empty(SessionStartRequest, body)
    session = await tracking.start_session(
        repo, request.device_id, request.duration,
        default_duration=settings.default_session_duration_ms,
    )
    return SessionStartResponse(
        session_id=session.id,
        start_time=session.start_time,
        end_time=session.end_time,
    )


@router.post("/session/stop", response_model=MessageResponse)
async def stop_session(
    body: Any = Body(None),
    repo: TrackingRepository = Depends(get_repository),
):
    request = model_or_empty(SessionStopRequest, body)
    await tracking.stop_session(repo, request.session_id)
    return MessageResponse(message="Session stopped")


@router.get("/sessions", response_model=list[SessionRead])
async def list_sessions(repo: TrackingRepository = Depends(get_repository)):
    """All sessions, ordered by start time descending."""
    records = await tracking.list_sessions(repo)
    return [
        SessionRead(
            id=r.id,
            device_id=r.device_id,
            start_time=r.start_time,
            end_time=r.end_time,
            is_active=r.is_active,
        )
        for r in records
    ]
