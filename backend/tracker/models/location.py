"""LocationPoint ORM — one timestamped coordinate sample.

Invariants:
    - session_id references sessions.id
    - Immutable once inserted; never deleted
"""

from sqlalchemy import BigInteger, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.base import Base


class LocationPoint(Base):
    __tablename__ = "locations"

    # Integer (not BigInteger) so SQLite maps it to an autoincrementing rowid
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str | None] = mapped_column(
        Text, ForeignKey("sessions.id"), nullable=True, index=True,
    )
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    timestamp: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
