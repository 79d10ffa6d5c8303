"""
hotel_desk.db.base

SQLAlchemy declarative base shared by every ORM model.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# --- Module Notes -----------------------------------------------------------
# Alembic autogeneration reads `Base.metadata`; import `db.models` before using it.
