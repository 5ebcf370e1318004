"""Health Schemas — liveness payload."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: int
