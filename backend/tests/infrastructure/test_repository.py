"""SqlTrackingRepository against in-memory SQLite.

Invariants:
    - Store failures surface as StorageError with the driver message
    - add_location commits per row: a later failing row leaves earlier rows
    - add_locations is all-or-nothing: a failing row rolls back the batch
    - The session stays usable after a failed statement (rolled back)
"""

import pytest

from tracker.core.domain_types import NewLocation, NewSession, SessionId
from tracker.core.errors import StorageError
from tracker.infrastructure.repository import SqlTrackingRepository


def _session(session_id="A", start=1_000):
    return NewSession(
        id=SessionId(session_id), device_id="dev", start_time=start, end_time=start + 1,
    )


def _location(ts, session_id="A"):
    return NewLocation(
        session_id=SessionId(session_id), latitude=1.0, longitude=2.0, timestamp=ts,
    )


@pytest.fixture
async def repo(test_db):
    repository = SqlTrackingRepository(test_db)
    await repository.insert_session(_session())
    return repository


async def test_duplicate_session_raises_storage_error(repo, test_session_factory):
    async with test_session_factory() as db:
        with pytest.raises(StorageError) as exc_info:
            await SqlTrackingRepository(db).insert_session(_session())
    assert "UNIQUE constraint failed" in exc_info.value.message
    assert exc_info.value.operation == "insert_session"


async def test_repository_usable_after_failure(repo, test_session_factory):
    async with test_session_factory() as db:
        other = SqlTrackingRepository(db)
        with pytest.raises(StorageError):
            await other.insert_session(_session())
        await other.insert_session(_session("B", start=2_000))
        ids = [s.id for s in await other.list_sessions()]
    assert ids == ["B", "A"]


async def test_session_exists(repo):
    assert await repo.session_exists("A") is True
    assert await repo.session_exists("nope") is False
    assert await repo.session_exists(None) is False


async def test_deactivate_unknown_session_is_noop(repo):
    await repo.deactivate_session("nope")
    assert (await repo.list_sessions())[0].is_active == 1


async def test_add_locations_commits_whole_batch(repo):
    await repo.add_locations([_location(ts) for ts in (1, 2, 3)])
    assert [p.timestamp for p in await repo.list_locations("A")] == [1, 2, 3]


async def test_list_locations_orders_by_timestamp_then_id(repo):
    for ts in (5, 1, 5, 3):
        await repo.add_location(_location(ts))
    points = await repo.list_locations("A")
    assert [p.timestamp for p in points] == [1, 3, 5, 5]
    fives = [p.id for p in points if p.timestamp == 5]
    assert fives == sorted(fives)


async def test_failed_row_keeps_rows_committed_before_it(repo):
    await repo.add_location(_location(1))
    await repo.add_location(_location(2))
    with pytest.raises(StorageError) as exc_info:
        await repo.add_location(_location(3, session_id="ghost"))

    assert "FOREIGN KEY constraint failed" in exc_info.value.message
    assert exc_info.value.operation == "insert_location"
    assert [p.timestamp for p in await repo.list_locations("A")] == [1, 2]


async def test_failed_batch_rolls_back_every_row(repo):
    batch = [_location(1), _location(2), _location(3, session_id="ghost")]
    with pytest.raises(StorageError) as exc_info:
        await repo.add_locations(batch)

    assert exc_info.value.operation == "insert_locations"
    assert await repo.list_locations("A") == []


async def test_rows_insert_normally_after_failed_batch(repo):
    with pytest.raises(StorageError):
        await repo.add_locations([_location(1), _location(2, session_id="ghost")])
    await repo.add_locations([_location(5)])
    assert [p.timestamp for p in await repo.list_locations("A")] == [5]
