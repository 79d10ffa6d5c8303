"""
hotel_desk.db.repositories.employees

Repository for `Employee` rows.

Responsibilities:
- CRUD for staff records (stock and reservation departments).
- Code lookup for login; the department tag is returned as stored and ignored by auth.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import Employee


class EmployeeRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> Employee:
        employee = Employee(**fields)
        self._session.add(employee)
        await self._session.flush()
        return employee

    async def get(self, employee_id: uuid.UUID) -> Employee | None:
        return await self._session.get(Employee, employee_id)

    async def get_by_code(self, code: str) -> Employee | None:
        stmt = select(Employee).where(Employee.code == code).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(self, *, role: str | None = None) -> list[Employee]:
        stmt = select(Employee).order_by(desc(Employee.created_at))
        if role is not None:
            stmt = stmt.where(Employee.role == role)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self, *, role: str | None = None) -> int:
        stmt = select(func.count()).select_from(Employee)
        if role is not None:
            stmt = stmt.where(Employee.role == role)
        return int((await self._session.execute(stmt)).scalar_one())

    async def update(self, employee_id: uuid.UUID, **changes: Any) -> Employee | None:
        employee = await self._session.get(Employee, employee_id, with_for_update=True)
        if employee is None:
            return None
        for field, value in changes.items():
            setattr(employee, field, value)
        await self._session.flush()
        return employee

    async def delete(self, employee_id: uuid.UUID) -> Employee | None:
        # Returns the deleted row so callers can clean up its stored document.
        employee = await self._session.get(Employee, employee_id)
        if employee is None:
            return None
        await self._session.delete(employee)
        await self._session.flush()
        return employee
