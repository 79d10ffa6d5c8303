"""
hotel_desk.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Swapping the backend (sqlite for dev, Postgres in prod) only touches `database_url`.
