"""Session Tracker — location-tracking backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
