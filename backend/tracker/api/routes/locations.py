"""Locations — batch ingestion and per-session location history.

Invariants:
    - POST accepts one location object or an array of them; non-object
      elements carry no sessionId
    - An empty array is a no-op success
    - Unknown session on ingestion → 404; unknown session on read → []
    - History is ordered by timestamp ascending

Design Decisions:
    - Batch mode and atomicity come from settings, not from the request
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from tracker.api.dependencies import get_repository, settings_dependency
from tracker.config import Settings
from tracker.core.repository_protocols import TrackingRepository
from tracker.schemas.location import LocationRead, parse_location_batch
from tracker.schemas.session import MessageResponse
from tracker.services import tracking

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["locations"])


@router.post("/location", response_model=MessageResponse)
async def report_locations(
    body: Any = Body(None),
    repo: TrackingRepository = Depends(get_repository),
    settings: Settings = Depends(settings_dependency),
):
    """Record one location or a batch of locations."""
    items = parse_location_batch(body)
    if not items:
        return MessageResponse(message="No data")
    count = await tracking.record_locations(
        repo, items,
        mode=settings.location_batch_mode,
        atomic=settings.atomic_location_batches,
    )
    return MessageResponse(message=f"Recorded {count} locations")


@router.get("/session/{session_id}/locations", response_model=list[LocationRead])
async def list_session_locations(
    session_id: str, repo: TrackingRepository = Depends(get_repository),
):
    records = await tracking.list_locations(repo, session_id)
    return [
        LocationRead(
            id=r.id,
            session_id=r.session_id,
            latitude=r.latitude,
            longitude=r.longitude,
            timestamp=r.timestamp,
        )
        for r in records
    ]
