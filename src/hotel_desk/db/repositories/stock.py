from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import StockItem


class StockRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> StockItem:
        item = StockItem(**fields)
        self._session.add(item)
        await self._session.flush()
        return item

    async def get(self, item_id: uuid.UUID) -> StockItem | None:
        return await self._session.get(StockItem, item_id)

    async def list(self, *, category: str | None = None) -> list[StockItem]:
        stmt = select(StockItem).order_by(desc(StockItem.created_at))
        if category is not None:
            stmt = stmt.where(StockItem.category == category)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(StockItem)
        return int((await self._session.execute(stmt)).scalar_one())

    async def count_below(self, threshold: int) -> int:
        stmt = select(func.count()).select_from(StockItem).where(StockItem.quantity < threshold)
        return int((await self._session.execute(stmt)).scalar_one())

    async def update(self, item_id: uuid.UUID, **changes: Any) -> StockItem | None:
        item = await self._session.get(StockItem, item_id, with_for_update=True)
        if item is None:
            return None
        for field, value in changes.items():
            setattr(item, field, value)
        # A quantity change counts as a restock event.
        if "quantity" in changes:
            item.last_restocked = datetime.utcnow()
        await self._session.flush()
        return item

    async def delete(self, item_id: uuid.UUID) -> bool:
        item = await self._session.get(StockItem, item_id)
        if item is None:
            return False
        await self._session.delete(item)
        await self._session.flush()
        return True
