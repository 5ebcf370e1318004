"""Database Infrastructure — SQLAlchemy declarative Base for the two tracking tables."""
