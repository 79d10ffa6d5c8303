"""
tests.test_identity

Identity resolution against the real tables.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotel_desk.auth.authenticator import AccessCodeAuthenticator, InvalidCodeError
from hotel_desk.auth.models import IdentitySource, Role
from hotel_desk.auth.resolvers import EmployeeResolver, Found, NotFound, ProfileResolver, first_match
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo
from hotel_desk.services.errors import ConflictError
from hotel_desk.services.identity_codes import ensure_code_available


@pytest.mark.asyncio
async def test_profile_code_keeps_stored_role(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        await ProfileRepo(session).create(name="Stock Lead", role=Role.stock_manager, code="4444444")
        await session.commit()

        identity = await AccessCodeAuthenticator.for_session(session).authenticate("4444444")

    assert identity.role is Role.stock_manager
    assert identity.source is IdentitySource.profiles
    assert identity.name == "Stock Lead"


@pytest.mark.asyncio
async def test_employee_role_is_forced(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        # The department tag says "stock"; login must still yield a reservation employee.
        await EmployeeRepo(session).create(first_name="Sam", last_name="Reyes", role="stock", code="5555555")
        await session.commit()

        identity = await AccessCodeAuthenticator.for_session(session).authenticate("5555555")

    assert identity.role is Role.reservation_employee
    assert identity.source is IdentitySource.employees
    assert identity.name == "Sam Reyes"


@pytest.mark.asyncio
async def test_profiles_take_precedence(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        # Written straight through the repositories to bypass the uniqueness check.
        await ProfileRepo(session).create(name="Guest", role=Role.user, code="6666666")
        await EmployeeRepo(session).create(first_name="Ann", last_name="Lee", code="6666666")
        await session.commit()

        resolve = first_match([ProfileResolver(ProfileRepo(session)), EmployeeResolver(EmployeeRepo(session))])
        result = await resolve("6666666")
        missing = await resolve("0000000")

    assert isinstance(result, Found)
    assert result.identity.source is IdentitySource.profiles
    assert isinstance(missing, NotFound)
    assert missing.strategy == "profiles+employees"


@pytest.mark.asyncio
async def test_unknown_code_is_invalid(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        with pytest.raises(InvalidCodeError):
            await AccessCodeAuthenticator.for_session(session).authenticate("0000000")


@pytest.mark.asyncio
async def test_codes_are_unique_across_tables(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        profile = await ProfileRepo(session).create(name="Guest", role=Role.user, code="7777777")
        employee = await EmployeeRepo(session).create(first_name="Ann", last_name="Lee", code="8888888")
        await session.commit()

        with pytest.raises(ConflictError):
            await ensure_code_available(session, "7777777")
        with pytest.raises(ConflictError):
            await ensure_code_available(session, "8888888", profile_id=profile.id)

        # A row may keep its own code.
        await ensure_code_available(session, "7777777", profile_id=profile.id)
        await ensure_code_available(session, "8888888", employee_id=employee.id)
        await ensure_code_available(session, "1212121")
