"""
hotel_desk.auth.resolvers

Identity resolution strategies.

Responsibilities:
- Look an access code up in one identity table and return a tagged result.
- Compose strategies with an explicit first-match-wins policy.

Precedence is the order of the strategy list: profiles are consulted before
employees, so a code present in both tables resolves to the profile. Writes keep
codes unique across both tables (see `services.identity_codes`).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from hotel_desk.auth.models import Identity, IdentitySource, Role
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo


@dataclass(frozen=True, slots=True)
class Found:
    identity: Identity


@dataclass(frozen=True, slots=True)
class NotFound:
    strategy: str


Resolution = Found | NotFound


class IdentityResolver(Protocol):
    name: str

    async def resolve(self, code: str) -> Resolution: ...


class ProfileResolver:
    """Profiles carry their own role."""

    name = IdentitySource.profiles.value

    def __init__(self, profiles: ProfileRepo) -> None:
        self._profiles = profiles

    async def resolve(self, code: str) -> Resolution:
        row = await self._profiles.get_by_code(code)
        if row is None:
            return NotFound(self.name)
        return Found(
            Identity(
                id=str(row.id),
                name=row.name,
                role=Role(row.role),
                source=IdentitySource.profiles,
                code=row.code,
            )
        )


class EmployeeResolver:
    """Employees always log in as reservation employees, whatever their department tag."""

    name = IdentitySource.employees.value

    def __init__(self, employees: EmployeeRepo) -> None:
        self._employees = employees

    async def resolve(self, code: str) -> Resolution:
        row = await self._employees.get_by_code(code)
        if row is None:
            return NotFound(self.name)
        return Found(
            Identity(
                id=str(row.id),
                name=f"{row.first_name} {row.last_name}".strip(),
                role=Role.reservation_employee,
                source=IdentitySource.employees,
                code=row.code or "",
            )
        )


def first_match(
    resolvers: Sequence[IdentityResolver],
) -> Callable[[str], Awaitable[Resolution]]:
    # Strategies run sequentially; later tables are not queried once one matches.
    chain = tuple(resolvers)

    async def _resolve(code: str) -> Resolution:
        for resolver in chain:
            result = await resolver.resolve(code)
            if isinstance(result, Found):
                return result
        return NotFound("+".join(r.name for r in chain))

    return _resolve
