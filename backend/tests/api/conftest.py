"""API test fixtures — pinned clock and FastAPI test client.

Invariants:
    - get_db dependency overridden to use the test DB (root conftest)
    - db_manager patched so the readiness route sees the test engine
    - The service clock is pinned; tests advance it explicitly
"""

import pytest
from httpx import ASGITransport, AsyncClient

import tracker.infrastructure.database as db_module
from tracker.infrastructure.database import DatabaseSessionManager, get_db
from tracker.main import app
from tracker.models.session import TrackingSession
from tracker.services import tracking

START_MS = 1_700_000_000_000


@pytest.fixture
def clock(monkeypatch):
    """Pinned service clock. Set clock["now"] to move time."""
    state = {"now": START_MS}
    monkeypatch.setattr(tracking, "current_time_ms", lambda: state["now"])
    return state


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_session(test_db):
    """Insert session "A" directly into the test DB."""
    session = TrackingSession(
        id="A", device_id="dev", start_time=START_MS,
        end_time=START_MS + 1000, is_active=1,
    )
    test_db.add(session)
    await test_db.commit()
    return session
