"""
hotel_desk.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Upsert the seeded administrator profile.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hotel_desk.auth.models import Role
from hotel_desk.db.base import Base
from hotel_desk.db.repositories.profiles import ProfileRepo
from hotel_desk.observability.logging import get_logger
from hotel_desk.settings import Settings

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production relies on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> None:
    # Upsert on code: an existing row with the seed code is forced back to admin.
    async with session_factory() as session:
        repo = ProfileRepo(session)
        existing = await repo.get_by_code(settings.seed_admin_code)
        if existing is None:
            await repo.create(name=settings.seed_admin_name, role=Role.admin, code=settings.seed_admin_code)
            log.info("seed_admin_created")
        else:
            await repo.update(existing.id, name=settings.seed_admin_name, role=Role.admin)
        await session.commit()


# --- Module Notes -----------------------------------------------------------
# Neither helper runs in prod; deployments run Alembic and seed through the admin API.
