"""Pydantic Schemas — request/response shapes at the HTTP boundary.

Invariants:
    - Wire names are camelCase (aliases); Python attributes are snake_case
    - Request schemas are permissive: every field optional, extras ignored

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
