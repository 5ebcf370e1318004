"""Service test fixtures — in-memory TrackingRepository double.

Invariants:
    - FakeRepository satisfies the TrackingRepository Protocol structurally
    - fail_on_insert=N makes the Nth location insert raise StorageError
    - add_locations() stages the whole batch and only keeps it if every row succeeds
"""

import pytest

from tracker.core.domain_types import (
    INACTIVE, LocationRecord, SessionRecord,
)
from tracker.core.errors import StorageError
from tracker.services import tracking


class FakeRepository:
    def __init__(self):
        self.sessions: dict[str, SessionRecord] = {}
        self.locations: list[LocationRecord] = []
        self.lookups: list[str | None] = []
        self.fail_on_insert: int | None = None
        self._inserts = 0

    def _next_row(self, location) -> LocationRecord:
        self._inserts += 1
        if self.fail_on_insert == self._inserts:
            raise StorageError("disk full", "insert_location")
        return LocationRecord(
            id=self._inserts,
            session_id=location.session_id,
            latitude=location.latitude,
            longitude=location.longitude,
            timestamp=location.timestamp,
        )

    async def insert_session(self, session):
        if session.id in self.sessions:
            raise StorageError("duplicate key", "insert_session")
        self.sessions[session.id] = SessionRecord(
            id=session.id,
            device_id=session.device_id,
            start_time=session.start_time,
            end_time=session.end_time,
            is_active=session.is_active,
        )

    async def deactivate_session(self, session_id):
        record = self.sessions.get(session_id)
        if record:
            self.sessions[session_id] = SessionRecord(
                id=record.id,
                device_id=record.device_id,
                start_time=record.start_time,
                end_time=record.end_time,
                is_active=INACTIVE,
            )

    async def session_exists(self, session_id):
        self.lookups.append(session_id)
        return session_id in self.sessions

    async def add_location(self, location):
        self.locations.append(self._next_row(location))

    async def add_locations(self, locations):
        staged = [self._next_row(loc) for loc in locations]
        self.locations.extend(staged)

    async def list_sessions(self):
        return sorted(
            self.sessions.values(), key=lambda s: s.start_time, reverse=True,
        )

    async def list_locations(self, session_id):
        return sorted(
            (p for p in self.locations if p.session_id == session_id),
            key=lambda p: (p.timestamp, p.id),
        )


@pytest.fixture
def repo():
    return FakeRepository()


@pytest.fixture
def clock(monkeypatch):
    state = {"now": 1_000}
    monkeypatch.setattr(tracking, "current_time_ms", lambda: state["now"])
    return state
