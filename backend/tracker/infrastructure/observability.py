"""Structured Logging — one root handler shared by the app, uvicorn and drivers.

Invariants:
    - Every JSON line carries timestamp, level, logger, message and call site
      (module, function, line)
    - Tracking context (session_id, device_id, error_code, path, count) is
      rendered in both formats whenever a log call passes it via `extra=`
    - setup_logging() may run once per lifespan: the previous handler is
      swapped out, never stacked
    - uvicorn loggers propagate to root so server and app lines share one format

Design Decisions:
    - Context keys are a formatter argument: tests and tools can widen them
    - Driver loggers (asyncpg, aiosqlite, sqlalchemy.engine) capped at WARNING
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Iterable

CONTEXT_FIELDS = ("session_id", "device_id", "error_code", "path", "count")

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
_QUIET_LOGGERS = ("asyncpg", "aiosqlite", "sqlalchemy.engine")

_handler: logging.Handler | None = None


def _context(record: logging.LogRecord, fields: Iterable[str]) -> dict:
    return {
        key: record.__dict__[key]
        for key in fields
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def __init__(self, fields: Iterable[str] = CONTEXT_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(_context(record, self.fields))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with the tracking context appended as key=value."""

    def __init__(self, fields: Iterable[str] = CONTEXT_FIELDS):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record, self.fields)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Install the root handler and route server/driver loggers through it."""
    global _handler

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stdout)
    _handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return _handler
