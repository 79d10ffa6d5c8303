"""
hotel_desk.services.identity_codes

Access-code uniqueness across both identity tables.

Login resolves profiles before employees; keeping codes globally unique on write
means that precedence never has to break a tie.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo
from hotel_desk.services.errors import ConflictError


async def ensure_code_available(
    session: AsyncSession,
    code: str,
    *,
    profile_id: uuid.UUID | None = None,
    employee_id: uuid.UUID | None = None,
) -> None:
    # The row being edited may keep its own code.
    profile = await ProfileRepo(session).get_by_code(code)
    if profile is not None and profile.id != profile_id:
        raise ConflictError("Access code already in use")
    employee = await EmployeeRepo(session).get_by_code(code)
    if employee is not None and employee.id != employee_id:
        raise ConflictError("Access code already in use")
