"""
hotel_desk.auth.deps

FastAPI dependency functions for sessions and route guarding.

Responsibilities:
- Build a request-scoped `SessionStore` from the session cookie.
- Enforce the protected-route table via reusable dependency factories.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.api.deps import clock_dep, db_session, settings_dep
from hotel_desk.auth.authenticator import AccessCodeAuthenticator
from hotel_desk.auth.guard import PROTECTED_ROUTES, GuardDecision, GuardRedirect, decide
from hotel_desk.auth.jwt import TokenConfig
from hotel_desk.auth.models import Identity
from hotel_desk.auth.session import Clock, SessionCodec, SessionStore
from hotel_desk.observability.logging import get_logger
from hotel_desk.settings import Settings

log = get_logger(__name__)


def session_codec(settings: Settings) -> SessionCodec:
    return SessionCodec(
        TokenConfig(
            alg=settings.session_alg,
            issuer=settings.session_issuer,
            secret=settings.session_secret,
        )
    )


async def get_session_store(
    request: Request,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    clock: Clock = Depends(clock_dep),
) -> AsyncIterator[SessionStore]:
    store = SessionStore(
        authenticator=AccessCodeAuthenticator.for_session(session),
        codec=session_codec(settings),
        ttl=timedelta(seconds=settings.session_ttl_seconds),
        clock=clock,
    )
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        store.restore(token)
    try:
        yield store
    finally:
        store.close()


def redirect_for(decision: GuardDecision, settings: Settings) -> GuardRedirect:
    location = settings.login_path if decision is GuardDecision.redirect_login else settings.home_path
    return GuardRedirect(decision, location)


def guard_route(prefix: str):
    route = PROTECTED_ROUTES.match(prefix)
    if route is None:
        raise ValueError(f"{prefix!r} is not a protected route")

    def _dep(
        store: SessionStore = Depends(get_session_store),
        settings: Settings = Depends(settings_dep),
    ) -> Identity:
        decision = decide(store, route.allowed_roles)
        if decision is not GuardDecision.allow or store.identity is None:
            log.info("guard_redirect", decision=decision.value, route=route.prefix)
            raise redirect_for(decision, settings)
        return store.identity

    return _dep


# --- Module Notes -----------------------------------------------------------
# Routers attach `guard_route("/admin")` etc. at router level, so every endpoint under
# a prefix is covered by the same table the navigate endpoint consults.
