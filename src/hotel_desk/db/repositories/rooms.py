from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import Room


class RoomRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> Room:
        room = Room(**fields)
        self._session.add(room)
        await self._session.flush()
        return room

    async def get(self, room_id: uuid.UUID) -> Room | None:
        return await self._session.get(Room, room_id)

    async def get_by_type(self, room_type: str) -> Room | None:
        stmt = select(Room).where(Room.room_type == room_type).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self) -> list[Room]:
        stmt = select(Room).order_by(desc(Room.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, room_id: uuid.UUID, **changes: Any) -> Room | None:
        room = await self._session.get(Room, room_id, with_for_update=True)
        if room is None:
            return None
        for field, value in changes.items():
            setattr(room, field, value)
        await self._session.flush()
        return room

    async def delete(self, room_id: uuid.UUID) -> bool:
        room = await self._session.get(Room, room_id)
        if room is None:
            return False
        await self._session.delete(room)
        await self._session.flush()
        return True
