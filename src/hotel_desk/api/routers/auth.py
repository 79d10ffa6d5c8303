"""
hotel_desk.api.routers.auth

Login, logout and session introspection.

Responsibilities:
- Exchange an access code for a session cookie.
- Report the current session, or redirect to login when it is missing or expired.
- Answer "may I navigate to this path?" from the protected-route table.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.status import HTTP_401_UNAUTHORIZED

from hotel_desk.api.deps import settings_dep
from hotel_desk.auth.deps import get_session_store, redirect_for
from hotel_desk.auth.guard import HOME_BY_ROLE, GuardDecision, decide_path
from hotel_desk.auth.models import Identity
from hotel_desk.auth.session import SessionStore
from hotel_desk.settings import Settings

router = APIRouter(prefix="/v1/auth", tags=["auth"])


class LoginRequest(BaseModel):
    code: str = Field(min_length=1, max_length=64)


class IdentityResponse(BaseModel):
    id: str
    name: str
    role: str
    source: str

    @classmethod
    def of(cls, identity: Identity) -> IdentityResponse:
        return cls(
            id=identity.id,
            name=identity.name,
            role=identity.role.value,
            source=identity.source.value,
        )


class SessionResponse(BaseModel):
    identity: IdentityResponse
    expires_at: datetime
    home: str


class NavigateResponse(BaseModel):
    path: str
    decision: GuardDecision
    location: str | None = None


def _session_response(store: SessionStore) -> SessionResponse:
    identity = store.identity
    expires_at = store.expires_at
    if identity is None or expires_at is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid access code")
    return SessionResponse(
        identity=IdentityResponse.of(identity),
        expires_at=expires_at,
        home=HOME_BY_ROLE[identity.role],
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(settings_dep),
) -> SessionResponse | JSONResponse:
    # Unknown code and lookup failure look the same to the caller. A failed attempt also
    # ends whatever session the client was holding.
    token = store.dump() if await store.login(body.code) else None
    if token is None:
        failed = JSONResponse(status_code=HTTP_401_UNAUTHORIZED, content={"detail": "Invalid access code"})
        failed.delete_cookie(settings.session_cookie_name)
        return failed
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.env == "prod",
    )
    return _session_response(store)


@router.post("/logout")
async def logout(
    response: Response,
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    store.logout()
    response.delete_cookie(settings.session_cookie_name)
    return {"status": "logged_out"}


@router.get("/session", response_model=SessionResponse)
async def current_session(
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(settings_dep),
) -> SessionResponse:
    if not store.check_session():
        raise redirect_for(GuardDecision.redirect_login, settings)
    return _session_response(store)


@router.get("/navigate", response_model=NavigateResponse)
async def navigate(
    response: Response,
    path: str = Query(min_length=1, max_length=512),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(settings_dep),
) -> NavigateResponse:
    decision = decide_path(store, path)
    if decision is GuardDecision.allow:
        return NavigateResponse(path=path, decision=decision)
    if decision is GuardDecision.redirect_login:
        response.delete_cookie(settings.session_cookie_name)
    return NavigateResponse(
        path=path,
        decision=decision,
        location=redirect_for(decision, settings).location,
    )


# --- Module Notes -----------------------------------------------------------
# Tokens are re-issued only at login; the expiry is absolute, never sliding.
