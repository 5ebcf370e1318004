"""ORM Models — SQLAlchemy declarative models for the two tracking tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Both models imported here so Base.metadata knows every table before
      create_all() runs at startup
"""

from tracker.models.session import TrackingSession  # noqa: F401
from tracker.models.location import LocationPoint  # noqa: F401
