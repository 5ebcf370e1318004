"""Error Handlers — global exception handlers for the tracking API.

Invariants:
    - TrackerError → its own status with {"error": message}
    - RequestValidationError → 500 with the field errors as one message string
    - Exception (catch-all) → 500 with the raw exception string

Design Decisions:
    - Three-layer handler: domain (TrackerError), validation (Pydantic), catch-all (Exception)
    - Raw messages pass through to clients; there is no redaction layer
    - Only two error kinds reach clients, 404 and 500: a body the store could
      never accept (non-numeric coordinate or duration, broken JSON) is a
      storage-class failure, not a client error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tracker.core.errors import TrackerError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_tracker_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_tracker_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        """Handle not-found and storage errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"TrackerError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "session_id": exc.context.session_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed bodies (bad JSON, non-numeric coordinates)."""
        message = _format_validation_errors(exc)
        logger.error(
            f"Unstorable request body on {request.url.path}: {message}",
            extra={"error_code": "STORAGE_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": message},
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )


def _format_validation_errors(exc: RequestValidationError) -> str:
    """One line per failing field, e.g. "latitude: Input should be a valid number"."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        if e.get("loc") else e["msg"]
        for e in exc.errors()
    )
