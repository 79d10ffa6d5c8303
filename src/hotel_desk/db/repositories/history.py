"""
hotel_desk.db.repositories.history

Repository for `ReservationHistory` entries.

Responsibilities:
- Append field-level reservation changes.
- Query the change log newest-first for the employee history screen.
"""

from __future__ import annotations

import uuid

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import ReservationHistory


class HistoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        reservation_id: uuid.UUID,
        field_changed: str,
        old_value: str | None,
        new_value: str | None,
        changed_by: uuid.UUID | None,
    ) -> ReservationHistory:
        # Append-only in normal operation.
        entry = ReservationHistory(
            reservation_id=reservation_id,
            field_changed=field_changed,
            old_value=old_value,
            new_value=new_value,
            changed_by=changed_by,
        )
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def list(
        self, *, reservation_id: uuid.UUID | None = None, limit: int = 200
    ) -> list[ReservationHistory]:
        stmt = select(ReservationHistory).order_by(desc(ReservationHistory.changed_at)).limit(limit)
        if reservation_id is not None:
            stmt = stmt.where(ReservationHistory.reservation_id == reservation_id)
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# `changed_by` is resolved to employee names by the router, not joined here.
