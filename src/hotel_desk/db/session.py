"""
hotel_desk.db.session

Engine and session factory construction.

Responsibilities:
- Build the async engine for the configured URL (SQLite file by default).
- Build request-sized sessions that keep loaded rows usable after commit.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hotel_desk.settings import Settings

# Seconds a SQLite writer waits on a locked database before failing.
SQLITE_BUSY_TIMEOUT = 15


def create_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        # Concurrent bookings serialize on SQLite's file lock instead of erroring out.
        kwargs["connect_args"] = {"timeout": SQLITE_BUSY_TIMEOUT}
    else:
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


# --- Module Notes -----------------------------------------------------------
# Routers get one session per request from `api.deps.db_session`; whoever writes commits.
