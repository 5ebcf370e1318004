"""Location Schemas — reported points in, stored points out.

Invariants:
    - latitude/longitude ranges are not validated
    - timestamp is optional; the service substitutes receipt time
    - Any JSON body parses: an array is a batch, anything else is one point, and
      a point that is not an object has no sessionId (so it is reported as 404)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tracker.schemas.fields import LooseText, model_or_empty


class LocationReport(BaseModel):
    """One reported point. POST /api/location takes one or a list of these."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: LooseText = Field(None, alias="sessionId")
    latitude: float | None = None
    longitude: float | None = None
    timestamp: int | None = None


def parse_location_batch(body: Any) -> list[LocationReport]:
    items = body if isinstance(body, list) else [body]
    return [model_or_empty(LocationReport, item) for item in items]


class LocationRead(BaseModel):
    """One row of GET /api/session/{id}/locations."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    session_id: str | None = Field(None, alias="sessionId")
    latitude: float | None = None
    longitude: float | None = None
    timestamp: int | None = None
