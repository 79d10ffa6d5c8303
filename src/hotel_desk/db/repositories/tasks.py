from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import Task, TaskStatus


class TaskRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        title: str,
        description: str,
        status: TaskStatus = TaskStatus.pending,
        assigned_to: uuid.UUID | None = None,
    ) -> Task:
        task = Task(title=title, description=description, status=status, assigned_to=assigned_to)
        self._session.add(task)
        await self._session.flush()
        return task

    async def get(self, task_id: uuid.UUID) -> Task | None:
        return await self._session.get(Task, task_id)

    async def list(self, *, limit: int | None = None) -> list[Task]:
        # Newest first, matching the dashboard's "recent tasks" panel.
        stmt = select(Task).order_by(desc(Task.created_at))
        if limit is not None:
            stmt = stmt.limit(limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count_by_status(self) -> dict[TaskStatus, int]:
        stmt = select(Task.status, func.count()).group_by(Task.status)
        counts = {status: 0 for status in TaskStatus}
        for status, n in (await self._session.execute(stmt)).all():
            counts[status] = int(n)
        return counts

    async def update(self, task_id: uuid.UUID, **changes: Any) -> Task | None:
        task = await self._session.get(Task, task_id, with_for_update=True)
        if task is None:
            return None
        for field, value in changes.items():
            setattr(task, field, value)
        await self._session.flush()
        return task

    async def delete(self, task_id: uuid.UUID) -> bool:
        task = await self._session.get(Task, task_id)
        if task is None:
            return False
        await self._session.delete(task)
        await self._session.flush()
        return True
