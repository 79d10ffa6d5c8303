"""
tests.test_guard

Route guard decisions and the protected-route table.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from hotel_desk.auth.authenticator import AccessCodeAuthenticator
from hotel_desk.auth.guard import (
    PROTECTED_ROUTES,
    GuardDecision,
    ProtectedRoute,
    RouteTable,
    decide,
    decide_path,
)
from hotel_desk.auth.models import Identity, IdentitySource, Role
from hotel_desk.auth.session import SessionCodec, SessionStore
from tests.conftest import FakeClock
from tests.test_session import CFG, StubResolver

ADMIN_ONLY = frozenset({Role.admin})

CODES = {
    "9999999": Identity(id="a", name="Admin", role=Role.admin, source=IdentitySource.profiles),
    "1111111": Identity(id="u", name="Guest", role=Role.user, source=IdentitySource.profiles),
    "2222222": Identity(
        id="e", name="Desk Clerk", role=Role.reservation_employee, source=IdentitySource.employees
    ),
}


def store_for(clock: FakeClock) -> SessionStore:
    return SessionStore(
        authenticator=AccessCodeAuthenticator([StubResolver("profiles", CODES)]),
        codec=SessionCodec(CFG),
        ttl=timedelta(hours=1),
        clock=clock,
    )


def test_route_table_uses_longest_prefix() -> None:
    table = RouteTable(
        [
            ProtectedRoute("/admin", frozenset({Role.admin})),
            ProtectedRoute("/admin/stock", frozenset({Role.stock_manager})),
        ]
    )
    route = table.match("/admin/stock/items")
    assert route is not None
    assert route.prefix == "/admin/stock"
    assert table.match("/admin/users").prefix == "/admin"  # type: ignore[union-attr]
    assert table.match("/administrator") is None


def test_route_table_rejects_duplicate_prefixes() -> None:
    with pytest.raises(ValueError):
        RouteTable(
            [
                ProtectedRoute("/admin", frozenset({Role.admin})),
                ProtectedRoute("/admin", frozenset({Role.user})),
            ]
        )


def test_default_table_covers_every_dashboard() -> None:
    assert {r.prefix for r in PROTECTED_ROUTES} == {"/admin", "/stock", "/user", "/employee"}
    assert PROTECTED_ROUTES.match("/employee/history").allowed_roles == frozenset(  # type: ignore[union-attr]
        {Role.reservation_employee}
    )


def test_no_session_redirects_to_login(clock: FakeClock) -> None:
    assert decide(store_for(clock), ADMIN_ONLY) is GuardDecision.redirect_login


@pytest.mark.asyncio
async def test_wrong_role_redirects_home(clock: FakeClock) -> None:
    store = store_for(clock)
    await store.login("1111111")
    assert decide(store, ADMIN_ONLY) is GuardDecision.redirect_home
    assert decide_path(store, "/user/reservations") is GuardDecision.allow


@pytest.mark.asyncio
async def test_admin_is_allowed(clock: FakeClock) -> None:
    store = store_for(clock)
    await store.login("9999999")
    assert decide(store, ADMIN_ONLY) is GuardDecision.allow
    assert decide_path(store, "/admin/users") is GuardDecision.allow
    assert decide_path(store, "/employee") is GuardDecision.redirect_home


@pytest.mark.asyncio
async def test_expiry_is_rechecked_on_every_decision(clock: FakeClock) -> None:
    store = store_for(clock)
    await store.login("2222222")
    assert decide_path(store, "/employee/reservations") is GuardDecision.allow

    clock.advance(seconds=3601)
    assert decide_path(store, "/employee/reservations") is GuardDecision.redirect_login


def test_unprotected_paths_are_allowed(clock: FakeClock) -> None:
    assert decide_path(store_for(clock), "/") is GuardDecision.allow
    assert decide_path(store_for(clock), "/login") is GuardDecision.allow
