"""
hotel_desk.auth.guard

Role-based route guard.

Responsibilities:
- Hold the static table of protected path prefixes and their allowed roles.
- Decide allow / redirect-to-login / redirect-to-home for a session.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from hotel_desk.auth.models import Role
from hotel_desk.auth.session import SessionStore


class GuardDecision(enum.StrEnum):
    allow = "allow"
    redirect_login = "redirect_login"
    redirect_home = "redirect_home"


@dataclass(frozen=True, slots=True)
class ProtectedRoute:
    prefix: str
    allowed_roles: frozenset[Role]

    def covers(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix.rstrip("/") + "/")


class RouteTable:
    """
    Immutable prefix -> roles table. The longest matching prefix wins.
    """

    def __init__(self, routes: Iterable[ProtectedRoute]) -> None:
        ordered = sorted(routes, key=lambda r: len(r.prefix), reverse=True)
        prefixes = [r.prefix for r in ordered]
        if len(set(prefixes)) != len(prefixes):
            raise ValueError("duplicate protected route prefix")
        self._routes: tuple[ProtectedRoute, ...] = tuple(ordered)

    def match(self, path: str) -> ProtectedRoute | None:
        for route in self._routes:
            if route.covers(path):
                return route
        return None

    def __iter__(self) -> Iterator[ProtectedRoute]:
        return iter(self._routes)


PROTECTED_ROUTES = RouteTable(
    [
        ProtectedRoute("/admin", frozenset({Role.admin})),
        ProtectedRoute("/stock", frozenset({Role.stock_manager})),
        ProtectedRoute("/user", frozenset({Role.user})),
        ProtectedRoute("/employee", frozenset({Role.reservation_employee})),
    ]
)

# Landing page per role after login.
HOME_BY_ROLE: dict[Role, str] = {
    Role.admin: "/admin",
    Role.stock_manager: "/stock",
    Role.user: "/user",
    Role.reservation_employee: "/employee",
}


def decide(store: SessionStore, allowed_roles: frozenset[Role]) -> GuardDecision:
    # Expiry is re-checked on every call, not only when the session is first restored.
    if not store.check_session() or store.identity is None:
        return GuardDecision.redirect_login
    if store.identity.role not in allowed_roles:
        return GuardDecision.redirect_home
    return GuardDecision.allow


def decide_path(
    store: SessionStore, path: str, routes: RouteTable = PROTECTED_ROUTES
) -> GuardDecision:
    route = routes.match(path)
    if route is None:
        return GuardDecision.allow
    return decide(store, route.allowed_roles)


class GuardRedirect(Exception):
    def __init__(self, decision: GuardDecision, location: str) -> None:
        super().__init__(f"{decision.value} -> {location}")
        self.decision = decision
        self.location = location
