"""
hotel_desk.auth.authenticator

Access-code authenticator.

Responsibilities:
- Exchange an access code for exactly one `Identity`.
- Distinguish "invalid code" from "lookup failed" for callers.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.auth.models import Identity
from hotel_desk.auth.resolvers import (
    EmployeeResolver,
    Found,
    IdentityResolver,
    ProfileResolver,
    first_match,
)
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo


class AuthenticationError(Exception):
    pass


class InvalidCodeError(AuthenticationError):
    pass


class LookupFailedError(AuthenticationError):
    pass


class AccessCodeAuthenticator:
    def __init__(self, resolvers: Sequence[IdentityResolver]) -> None:
        self._resolve = first_match(resolvers)

    @classmethod
    def for_session(cls, session: AsyncSession) -> AccessCodeAuthenticator:
        return cls(
            [
                ProfileResolver(ProfileRepo(session)),
                EmployeeResolver(EmployeeRepo(session)),
            ]
        )

    async def authenticate(self, code: str) -> Identity:
        if not code or not code.strip():
            raise InvalidCodeError("empty code")
        try:
            result = await self._resolve(code)
        except SQLAlchemyError as e:
            raise LookupFailedError(str(e)) from e
        if isinstance(result, Found):
            return result.identity
        raise InvalidCodeError("invalid code")


# --- Module Notes -----------------------------------------------------------
# No rate limiting or lockout here; a failed attempt simply requires resubmitting the code.
