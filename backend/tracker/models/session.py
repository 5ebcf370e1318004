"""TrackingSession ORM — one bounded tracking interval for one device.

Invariants:
    - id is the derived "{deviceId}-{startTime}" text key (no server default)
    - is_active is an integer flag: 1 on insert, 0 after stop, never back to 1
    - Rows are never deleted

Design Decisions:
    - BigInteger epoch milliseconds over DateTime: values round-trip to the
      client exactly as sent and stored
    - No relationship() to locations: nothing loads a session with its points
"""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.base import Base


class TrackingSession(Base):
    """Session row, owner of zero or more location points."""
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    device_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    end_time: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    is_active: Mapped[int | None] = mapped_column(Integer, nullable=True)
