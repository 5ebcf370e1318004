"""Boundary Protocols — contract between the service layer and storage.

Invariants:
    - Services depend on TrackingRepository, never on SQLAlchemy directly
    - Every implementation raises StorageError for store failures
    - add_location() commits one row; add_locations() is all-or-nothing

Design Decisions:
    - Protocol over ABC: structural subtyping, so the SQL repository and the
      in-memory test double share no base class
    - Async methods: implementations do IO
"""

from typing import Protocol, Sequence

from tracker.core.domain_types import (
    LocationRecord, NewLocation, NewSession, SessionRecord,
)


class TrackingRepository(Protocol):
    """Persistence for sessions and their location points."""

    async def insert_session(self, session: NewSession) -> None: ...

    async def deactivate_session(self, session_id: str | None) -> None: ...

    async def session_exists(self, session_id: str | None) -> bool: ...

    async def add_location(self, location: NewLocation) -> None: ...

    async def add_locations(self, locations: Sequence[NewLocation]) -> None: ...

    async def list_sessions(self) -> list[SessionRecord]: ...

    async def list_locations(self, session_id: str) -> list[LocationRecord]: ...
