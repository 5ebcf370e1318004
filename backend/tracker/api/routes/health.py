"""Health & Readiness — liveness and readiness endpoints.

Invariants:
    - GET /api/health always returns 200 if the process is up; never touches the store
    - GET /api/health/ready returns 503 if the database is unreachable

Design Decisions:
    - Separate liveness/readiness: a store outage must not fail the liveness check
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from tracker.infrastructure import database
from tracker.schemas.health import HealthResponse
from tracker.services.tracking import current_time_ms

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check():
    """Basic liveness check."""
    return HealthResponse(status="ok", timestamp=current_time_ms())


@router.get("/ready")
async def readiness_check():
    """Readiness check, includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
