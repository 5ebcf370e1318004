"""SQL Tracking Repository — SQLAlchemy implementation of TrackingRepository.

Invariants:
    - Every SQLAlchemyError is rolled back and re-raised as StorageError carrying
      the raw driver message
    - add_location() commits its own row: a later failure never undoes it
    - add_locations() commits once; any failure rolls back the whole batch
    - ORM instances never leave this module (records are returned instead)
    - Sessions ordered by start_time DESC; locations by timestamp ASC, ties by id

Design Decisions:
    - Repository bound to one AsyncSession (request scope): the session comes from
      get_db, so tests swap the engine without touching this class
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.domain_types import (
    INACTIVE, LocationRecord, NewLocation, NewSession, SessionRecord,
)
from tracker.core.errors import StorageError
from tracker.models.location import LocationPoint
from tracker.models.session import TrackingSession

logger = logging.getLogger(__name__)


def _raw_message(exc: SQLAlchemyError) -> str:
    """Driver message without SQLAlchemy's statement/parameter decoration."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _location_row(location: NewLocation) -> LocationPoint:
    return LocationPoint(
        session_id=location.session_id,
        latitude=location.latitude,
        longitude=location.longitude,
        timestamp=location.timestamp,
    )


class SqlTrackingRepository:
    """Sessions and locations persisted through one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            message = _raw_message(e)
            logger.error(f"Storage {operation} failed: {message}")
            raise StorageError(message, operation) from e

    async def insert_session(self, session: NewSession) -> None:
        async with self._storage_errors("insert_session"):
            self._db.add(TrackingSession(
                id=session.id,
                device_id=session.device_id,
                start_time=session.start_time,
                end_time=session.end_time,
                is_active=session.is_active,
            ))
            await self._db.commit()

    async def deactivate_session(self, session_id: str | None) -> None:
        async with self._storage_errors("deactivate_session"):
            await self._db.execute(
                update(TrackingSession)
                .where(TrackingSession.id == session_id)
                .values(is_active=INACTIVE),
            )
            await self._db.commit()

    async def session_exists(self, session_id: str | None) -> bool:
        async with self._storage_errors("session_lookup"):
            result = await self._db.execute(
                select(TrackingSession.id).where(TrackingSession.id == session_id),
            )
            return result.scalar_one_or_none() is not None

    async def add_location(self, location: NewLocation) -> None:
        async with self._storage_errors("insert_location"):
            self._db.add(_location_row(location))
            await self._db.commit()

    async def add_locations(self, locations: Sequence[NewLocation]) -> None:
        async with self._storage_errors("insert_locations"):
            self._db.add_all([_location_row(loc) for loc in locations])
            await self._db.commit()

    async def list_sessions(self) -> list[SessionRecord]:
        async with self._storage_errors("list_sessions"):
            result = await self._db.execute(
                select(TrackingSession).order_by(
                    TrackingSession.start_time.desc(),
                    TrackingSession.id.desc(),
                ),
            )
            return [
                SessionRecord(
                    id=s.id,
                    device_id=s.device_id,
                    start_time=s.start_time,
                    end_time=s.end_time,
                    is_active=s.is_active,
                )
                for s in result.scalars().all()
            ]

    async def list_locations(self, session_id: str) -> list[LocationRecord]:
        async with self._storage_errors("list_locations"):
            result = await self._db.execute(
                select(LocationPoint)
                .where(LocationPoint.session_id == session_id)
                .order_by(LocationPoint.timestamp.asc(), LocationPoint.id.asc()),
            )
            return [
                LocationRecord(
                    id=p.id,
                    session_id=p.session_id,
                    latitude=p.latitude,
                    longitude=p.longitude,
                    timestamp=p.timestamp,
                )
                for p in result.scalars().all()
            ]
