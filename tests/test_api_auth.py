"""
tests.test_api_auth

Login, session cookie and guard behaviour over HTTP.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from hotel_desk.auth.models import Role
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo
from tests.conftest import FakeClock, login


@pytest.mark.asyncio
async def test_seeded_admin_can_log_in(client: httpx.AsyncClient) -> None:
    r = await login(client, "9999999")
    assert r.status_code == 200
    body = r.json()
    assert body["identity"]["role"] == "admin"
    assert body["identity"]["source"] == "profiles"
    assert body["home"] == "/admin"
    assert "hotel_session" in r.cookies
    assert "9999999" not in r.text

    r = await client.get("/v1/auth/navigate", params={"path": "/admin/users"})
    assert r.json() == {"path": "/admin/users", "decision": "allow", "location": None}

    r = await client.get("/v1/admin/dashboard")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_unknown_code_is_rejected(client: httpx.AsyncClient) -> None:
    r = await login(client, "0000000")
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid access code"
    assert "hotel_session" not in client.cookies

    r = await client.get("/v1/auth/session")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_blank_code_fails_validation(client: httpx.AsyncClient) -> None:
    r = await login(client, "")
    assert r.status_code == 422

    r = await login(client, "   ")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_protected_route_without_session_redirects_to_login(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/admin/users")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"
    assert r.json() == {"detail": "Login required", "redirect": "/login"}


@pytest.mark.asyncio
async def test_wrong_role_redirects_home(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await ProfileRepo(session).create(name="Guest", role=Role.user, code="1111111")
        await session.commit()

    r = await login(client, "1111111")
    assert r.json()["home"] == "/user"

    r = await client.get("/v1/admin/users")
    assert r.status_code == 403
    assert r.headers["location"] == "/"

    r = await client.get("/v1/auth/navigate", params={"path": "/admin"})
    assert r.json()["decision"] == "redirect_home"
    assert r.json()["location"] == "/"

    r = await client.get("/v1/user/reservations")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_employee_logs_in_as_reservation_employee(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await EmployeeRepo(session).create(first_name="Sam", last_name="Reyes", role="stock", code="5555555")
        await session.commit()

    r = await login(client, "5555555")
    assert r.status_code == 200
    assert r.json()["identity"]["role"] == "reservation_employee"
    assert r.json()["home"] == "/employee"

    assert (await client.get("/v1/employee/reservations")).status_code == 200
    assert (await client.get("/v1/stock/items")).status_code == 403


@pytest.mark.asyncio
async def test_session_expires_after_one_hour(client: httpx.AsyncClient, clock: FakeClock) -> None:
    await login(client, "9999999")
    clock.advance(minutes=59)
    assert (await client.get("/v1/auth/session")).status_code == 200

    clock.advance(seconds=61)
    r = await client.get("/v1/admin/dashboard")
    assert r.status_code == 401
    assert r.headers["location"] == "/login"
    # The expired cookie is cleared on the way out.
    assert "hotel_session" not in client.cookies


@pytest.mark.asyncio
async def test_logout_ends_session(client: httpx.AsyncClient) -> None:
    await login(client, "9999999")

    r = await client.post("/v1/auth/logout")
    assert r.json() == {"status": "logged_out"}

    r = await client.get("/v1/admin/dashboard")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_forged_cookie_is_ignored(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/admin/dashboard", headers={"cookie": "hotel_session=forged.token.value"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_failed_login_ends_existing_session(client: httpx.AsyncClient) -> None:
    assert (await login(client, "9999999")).status_code == 200
    assert "hotel_session" in client.cookies

    r = await login(client, "0000000")
    assert r.status_code == 401
    assert r.json() == {"detail": "Invalid access code"}
    assert "hotel_session" not in client.cookies

    r = await client.get("/v1/auth/session")
    assert r.status_code == 401
