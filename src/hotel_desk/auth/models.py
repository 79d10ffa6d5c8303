"""
hotel_desk.auth.models

Auth domain models.

Responsibilities:
- Define the closed set of roles.
- Define the authenticated identity type (`Identity`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class Role(enum.StrEnum):
    admin = "admin"
    stock_manager = "stock_manager"
    user = "user"
    # Never stored: assigned by the employee lookup itself.
    reservation_employee = "reservation_employee"


class IdentitySource(enum.StrEnum):
    profiles = "profiles"
    employees = "employees"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated principal resolved from an access code.
    """

    id: str
    name: str
    role: Role
    source: IdentitySource
    # The access code never leaves the server; identities restored from a token carry "".
    code: str = field(default="", repr=False, compare=False)

    def to_claims(self) -> dict[str, Any]:
        return {
            "sub": self.id,
            "name": self.name,
            "role": self.role.value,
            "src": self.source.value,
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        # Raises KeyError/ValueError on malformed claims; callers treat that as "no session".
        return cls(
            id=str(claims["sub"]),
            name=str(claims.get("name", "")),
            role=Role(claims["role"]),
            source=IdentitySource(claims["src"]),
        )


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API, services and the session token.
