"""
hotel_desk.services

Service layer.

Responsibilities:
- Own transaction boundaries (commit/rollback) for multi-row writes.
- Raise domain errors the API layer maps to HTTP statuses.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Single-row CRUD goes straight from routers to repositories; anything touching more
# than one table lives here.
