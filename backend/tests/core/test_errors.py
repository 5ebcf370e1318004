"""Tests for the error hierarchy — status codes and client envelope."""

from tracker.core.errors import SessionNotFoundError, StorageError, TrackerError


def test_session_not_found_is_404_with_fixed_message():
    err = SessionNotFoundError("abc")
    assert err.http_status == 404
    assert err.to_response() == {"error": "Session not found"}
    assert err.context.session_id == "abc"


def test_storage_error_passes_raw_message():
    err = StorageError('duplicate key value violates unique constraint "sessions_pkey"', "insert_session")
    assert err.http_status == 500
    assert err.to_response() == {
        "error": 'duplicate key value violates unique constraint "sessions_pkey"',
    }
    assert err.operation == "insert_session"


def test_all_errors_share_base():
    assert isinstance(StorageError("x", "op"), TrackerError)
    assert isinstance(SessionNotFoundError(None), TrackerError)
