from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import Reservation, ReservationStatus


class ReservationRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> Reservation:
        reservation = Reservation(**fields)
        self._session.add(reservation)
        await self._session.flush()
        return reservation

    async def get(self, reservation_id: uuid.UUID) -> Reservation | None:
        return await self._session.get(Reservation, reservation_id)

    async def list(self, *, status: ReservationStatus | None = None) -> list[Reservation]:
        stmt = select(Reservation).order_by(desc(Reservation.created_at))
        if status is not None:
            stmt = stmt.where(Reservation.status == status)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_for_user(self, user_id: uuid.UUID) -> list[Reservation]:
        stmt = (
            select(Reservation)
            .where(Reservation.user_id == user_id)
            .order_by(desc(Reservation.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def lock(self, reservation_id: uuid.UUID) -> Reservation | None:
        return await self._session.get(Reservation, reservation_id, with_for_update=True)

    async def update(self, reservation_id: uuid.UUID, **changes: Any) -> Reservation | None:
        reservation = await self.lock(reservation_id)
        if reservation is None:
            return None
        for field, value in changes.items():
            setattr(reservation, field, value)
        await self._session.flush()
        return reservation

    async def delete(self, reservation_id: uuid.UUID) -> Reservation | None:
        reservation = await self._session.get(Reservation, reservation_id)
        if reservation is None:
            return None
        await self._session.delete(reservation)
        await self._session.flush()
        return reservation
