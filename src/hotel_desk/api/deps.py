"""
hotel_desk.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions, the clock and the document store.
- Encapsulate app.state access patterns (engine/sessionmaker/clock).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotel_desk.auth.session import Clock
from hotel_desk.services.documents import DocumentStore
from hotel_desk.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app is built with an explicit Settings object; routes see that same object.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `hotel_desk.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def clock_dep(request: Request) -> Clock:
    return request.app.state.clock  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the writer.
    async with session_factory() as session:
        yield session


def document_store(settings: Settings = Depends(settings_dep)) -> DocumentStore:
    return DocumentStore(settings.upload_dir)


# --- Module Notes -----------------------------------------------------------
# Session/guard dependencies live in `auth.deps` and build on the ones here.
