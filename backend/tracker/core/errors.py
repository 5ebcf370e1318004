"""Error Hierarchy — the two failure kinds the tracking API can surface.

Invariants:
    - Every error has a code (str) and an http_status (int)
    - to_response() produces the flat {"error": message} envelope clients expect
    - StorageError carries the raw driver message unmodified

Design Decisions:
    - Single hierarchy with TrackerError base: one FastAPI handler catches all
    - No input-validation error type: missing fields flow to the store and
      fail there as StorageError, or are defaulted
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ErrorContext:
    """Context attached to an error for logging only (never sent to clients)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    operation: str | None = None


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


class SessionNotFoundError(TrackerError):
    """Location report referenced a session that does not exist."""
    def __init__(self, session_id: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.session_id = session_id
        super().__init__("Session not found", "SESSION_NOT_FOUND", 404, ctx)
        self.session_id = session_id


class StorageError(TrackerError):
    """Any store-layer failure. Message is the underlying error string."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(message, "STORAGE_ERROR", 500, ctx)
        self.operation = operation
