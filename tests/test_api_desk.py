"""
tests.test_api_desk

Public booking plus the stock, user and employee dashboards.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from hotel_desk.auth.models import Role
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.profiles import ProfileRepo
from tests.conftest import add_room, login

BOOKING = {
    "first_name": "Ada",
    "last_name": "Byron",
    "email": "ada@example.com",
    "phone": "+44 20 0000 0000",
    "check_in": "2025-03-01",
    "check_out": "2025-03-04",
    "room_type": "Deluxe",
    "guests": 2,
}


@pytest.mark.asyncio
async def test_public_booking_assigns_then_runs_out(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))

    r = await client.post("/v1/bookings", json=BOOKING)
    assert r.status_code == 201
    assert r.json()["status"] == "pending"
    assert r.json()["chamber_number"] == "101"

    r = await client.post("/v1/bookings", json=BOOKING)
    assert r.status_code == 201
    assert r.json()["status"] == "not_assigned"
    assert r.json()["chamber_number"] == "not assigned"


@pytest.mark.asyncio
async def test_public_booking_validation(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))

    r = await client.post("/v1/bookings", json={**BOOKING, "check_out": "2025-02-27"})
    assert r.status_code == 422
    assert r.json()["code"] == "VALIDATION_ERROR"

    r = await client.post("/v1/bookings", json={**BOOKING, "room_type": "Penthouse"})
    assert r.status_code == 422

    r = await client.post("/v1/bookings", json={**BOOKING, "email": "not-an-email"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_employee_changes_status_and_history_names_them(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    async with app.state.sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        await EmployeeRepo(session).create(first_name="Sam", last_name="Reyes", code="5555555")
        await session.commit()

    reservation = (await client.post("/v1/bookings", json=BOOKING)).json()
    await login(client, "5555555")

    r = await client.get("/v1/employee/reservations", params={"status": "pending"})
    assert [x["id"] for x in r.json()] == [reservation["id"]]

    r = await client.patch(
        f"/v1/employee/reservations/{reservation['id']}/status", json={"status": "cancelled"}
    )
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"
    assert r.json()["chamber_number"] == "not assigned"

    r = await client.get("/v1/employee/history", params={"reservation_id": reservation["id"]})
    entries = r.json()
    assert {e["field_changed"] for e in entries} == {"status", "chamber_number"}
    assert all(e["changed_by"]["first_name"] == "Sam" for e in entries)

    r = await client.get("/v1/employee/rooms")
    [deluxe] = r.json()
    assert deluxe["room"]["room_type"] == "Deluxe"
    assert deluxe["chambers"][0]["status"] == "available"

    r = await client.patch(
        f"/v1/employee/reservations/{reservation['id']}/status", json={"status": "not_assigned"}
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_user_manages_only_own_reservations(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101", "102"))
        await ProfileRepo(session).create(name="Guest", role=Role.user, code="1111111")
        await session.commit()

    anonymous = (await client.post("/v1/bookings", json=BOOKING)).json()
    await login(client, "1111111")

    r = await client.post(
        "/v1/user/reservations",
        json={"check_in": "2025-05-01", "check_out": "2025-05-03", "room_type": "Deluxe"},
    )
    assert r.status_code == 201
    mine = r.json()
    assert mine["chamber_number"] == "102"

    r = await client.get("/v1/user/reservations")
    assert [x["id"] for x in r.json()] == [mine["id"]]

    r = await client.patch(f"/v1/user/reservations/{mine['id']}", json={"guests": 2})
    assert r.status_code == 200
    assert r.json()["guests"] == 2

    r = await client.patch(
        f"/v1/user/reservations/{mine['id']}", json={"check_out": "2025-04-30"}
    )
    assert r.status_code == 422

    assert (await client.delete(f"/v1/user/reservations/{anonymous['id']}")).status_code == 404
    assert (await client.delete(f"/v1/user/reservations/{mine['id']}")).status_code == 204
    assert (await client.get("/v1/user/reservations")).json() == []


@pytest.mark.asyncio
async def test_stock_manager_crud_with_levels(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await ProfileRepo(session).create(name="Stock Lead", role=Role.stock_manager, code="4444444")
        await session.commit()
    await login(client, "4444444")

    r = await client.post(
        "/v1/stock/items",
        json={"name": "Towels", "category": "linen", "quantity": 4, "unit": "pcs", "price": 3.5},
    )
    assert r.status_code == 201
    item = r.json()
    assert item["level"] == "low"

    r = await client.patch(f"/v1/stock/items/{item['id']}", json={"quantity": 0})
    assert r.json()["level"] == "out"

    r = await client.patch(f"/v1/stock/items/{item['id']}", json={"quantity": 50})
    assert r.json()["level"] == "ok"

    r = await client.get("/v1/stock/items", params={"category": "linen"})
    assert len(r.json()) == 1

    assert (await client.delete(f"/v1/stock/items/{item['id']}")).status_code == 204
    assert (await client.get("/v1/admin/dashboard")).status_code == 403


@pytest.mark.asyncio
async def test_user_edit_cannot_exceed_room_capacity(app: FastAPI, client: httpx.AsyncClient) -> None:
    async with app.state.sessionmaker() as session:
        await add_room(session, "Single", guests=1, chambers=("301",))
        await ProfileRepo(session).create(name="Guest", role=Role.user, code="1111111")
        await session.commit()
    await login(client, "1111111")

    r = await client.post(
        "/v1/user/reservations",
        json={"check_in": "2025-05-01", "check_out": "2025-05-03", "room_type": "Single", "guests": 5},
    )
    assert r.status_code == 422

    r = await client.post(
        "/v1/user/reservations",
        json={"check_in": "2025-05-01", "check_out": "2025-05-03", "room_type": "Single"},
    )
    reservation_id = r.json()["id"]

    r = await client.patch(f"/v1/user/reservations/{reservation_id}", json={"guests": 5})
    assert r.status_code == 422
    assert "at most 1" in r.json()["detail"]

    [mine] = (await client.get("/v1/user/reservations")).json()
    assert mine["guests"] == 1
