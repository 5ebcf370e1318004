"""Route Dependencies — request-scoped repository and settings injection.

Invariants:
    - Routes obtain storage only through get_repository (never db_manager)
    - One repository per request, bound to that request's AsyncSession
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import Settings, get_settings
from tracker.core.repository_protocols import TrackingRepository
from tracker.infrastructure.database import get_db
from tracker.infrastructure.repository import SqlTrackingRepository


async def get_repository(
    db: AsyncSession = Depends(get_db),
) -> TrackingRepository:
    return SqlTrackingRepository(db)


def settings_dependency() -> Settings:
    """Settings as a dependency, so tests can override batch behavior per app."""
    return get_settings()
