"""Session Schemas — start/stop request bodies and session response shapes.

Invariants:
    - deviceId / sessionId accept any JSON value (LooseText), so ids never fail
    - Missing fields become None; only a non-integer duration fails validation
    - Responses serialize with camelCase aliases

Design Decisions:
    - populate_by_name=True: services and tests build schemas with snake_case
      names while the wire stays camelCase
"""

from pydantic import BaseModel, ConfigDict, Field

from tracker.schemas.fields import LooseText


class SessionStartRequest(BaseModel):
    """Session start: device id plus optional duration in milliseconds."""
    model_config = ConfigDict(populate_by_name=True)

    device_id: LooseText = Field(None, alias="deviceId")
    duration: int | None = None


class SessionStopRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: LooseText = Field(None, alias="sessionId")


class SessionStartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    start_time: int = Field(alias="startTime")
    end_time: int = Field(alias="endTime")


class SessionRead(BaseModel):
    """One row of GET /api/sessions."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    device_id: str | None = Field(None, alias="deviceId")
    start_time: int | None = Field(None, alias="startTime")
    end_time: int | None = Field(None, alias="endTime")
    is_active: int | None = Field(None, alias="isActive")


class MessageResponse(BaseModel):
    message: str
