"""
tests.conftest

Shared fixtures: per-test SQLite database, a controllable clock, and an app/client pair
driven through its lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotel_desk.api.app import create_app
from hotel_desk.db.init_db import init_db
from hotel_desk.db.session import create_engine, create_sessionmaker
from hotel_desk.settings import Settings

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'hotel.db'}",
        upload_dir=str(tmp_path / "uploads"),
        session_secret="test-secret-0123456789abcdef-0123456789",
    )


@pytest_asyncio.fixture
async def sessionmaker(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    # App-less database for repository/service tests.
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings, clock: FakeClock) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings, clock=clock)
    # httpx ASGITransport does not manage lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def login(client: httpx.AsyncClient, code: str) -> httpx.Response:
    return await client.post("/v1/auth/login", json={"code": code})


async def add_room(
    session: AsyncSession, room_type: str, *, guests: int = 2, chambers: tuple[str, ...] = ()
) -> None:
    from hotel_desk.db.repositories.chambers import ChamberRepo
    from hotel_desk.db.repositories.rooms import RoomRepo

    await RoomRepo(session).create(
        room_type=room_type,
        description=f"{room_type} room",
        guests=guests,
        size_m2=30,
        beds=1,
        price_per_night=120.0,
        rating=4.5,
        amenities=["wifi"],
        features=["balcony"],
        image_urls=["https://example.com/room.jpg"],
        cancellation_policy="Free cancellation up to 24h before check-in",
    )
    for number in chambers:
        await ChamberRepo(session).create(chamber_number=number, room_type=room_type)
    await session.commit()
