"""
hotel_desk.db.repositories.chambers

Repository for `RoomChamber` rows (physical rooms).

Responsibilities:
- CRUD for chambers.
- Claim/release a chamber with a conditional UPDATE so two bookings can never
  both move the same chamber out of `available`.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import ChamberStatus, RoomChamber


class ChamberRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        chamber_number: str,
        room_type: str,
        status: ChamberStatus = ChamberStatus.available,
    ) -> RoomChamber:
        chamber = RoomChamber(chamber_number=chamber_number, room_type=room_type, status=status)
        self._session.add(chamber)
        await self._session.flush()
        return chamber

    async def get(self, chamber_id: uuid.UUID) -> RoomChamber | None:
        return await self._session.get(RoomChamber, chamber_id)

    async def get_by_number(self, chamber_number: str) -> RoomChamber | None:
        stmt = select(RoomChamber).where(RoomChamber.chamber_number == chamber_number).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(
        self, *, room_type: str | None = None, status: ChamberStatus | None = None
    ) -> list[RoomChamber]:
        stmt = select(RoomChamber).order_by(RoomChamber.chamber_number)
        if room_type is not None:
            stmt = stmt.where(RoomChamber.room_type == room_type)
        if status is not None:
            stmt = stmt.where(RoomChamber.status == status)
        return list((await self._session.execute(stmt)).scalars().all())

    async def available_candidates(self, room_type: str, *, limit: int = 5) -> list[RoomChamber]:
        stmt = (
            select(RoomChamber)
            .where(
                RoomChamber.room_type == room_type,
                RoomChamber.status == ChamberStatus.available,
            )
            .order_by(RoomChamber.chamber_number)
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def claim(self, chamber_id: uuid.UUID) -> bool:
        # Compare-and-swap: succeeds only if the chamber is still available.
        stmt = (
            update(RoomChamber)
            .where(RoomChamber.id == chamber_id, RoomChamber.status == ChamberStatus.available)
            .values(status=ChamberStatus.reserved)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def release(self, chamber_id: uuid.UUID) -> bool:
        stmt = (
            update(RoomChamber)
            .where(RoomChamber.id == chamber_id, RoomChamber.status == ChamberStatus.reserved)
            .values(status=ChamberStatus.available)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def update(self, chamber_id: uuid.UUID, **changes: Any) -> RoomChamber | None:
        chamber = await self._session.get(RoomChamber, chamber_id, with_for_update=True)
        if chamber is None:
            return None
        for field, value in changes.items():
            setattr(chamber, field, value)
        await self._session.flush()
        return chamber

    async def delete(self, chamber_id: uuid.UUID) -> bool:
        chamber = await self._session.get(RoomChamber, chamber_id)
        if chamber is None:
            return False
        await self._session.delete(chamber)
        await self._session.flush()
        return True
