"""
hotel_desk.db.repositories.profiles

Repository for `Profile` rows (identities that store their own role).
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.auth.models import Role
from hotel_desk.db.models import Profile


class ProfileRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, name: str, role: Role, code: str) -> Profile:
        profile = Profile(name=name, role=role, code=code)
        self._session.add(profile)
        await self._session.flush()
        return profile

    async def get(self, profile_id: uuid.UUID) -> Profile | None:
        return await self._session.get(Profile, profile_id)

    async def get_by_code(self, code: str) -> Profile | None:
        stmt = select(Profile).where(Profile.code == code).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, role: Role | None = None) -> list[Profile]:
        stmt = select(Profile).order_by(desc(Profile.created_at))
        if role is not None:
            stmt = stmt.where(Profile.role == role)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, profile_id: uuid.UUID, **changes: Any) -> Profile | None:
        profile = await self._session.get(Profile, profile_id, with_for_update=True)
        if profile is None:
            return None
        for field, value in changes.items():
            setattr(profile, field, value)
        await self._session.flush()
        return profile

    async def delete(self, profile_id: uuid.UUID) -> bool:
        profile = await self._session.get(Profile, profile_id)
        if profile is None:
            return False
        await self._session.delete(profile)
        await self._session.flush()
        return True
