"""
hotel_desk.api.routers.employee

Reservation-employee endpoints.

Responsibilities:
- List reservations and change their status (each change is logged).
- Show rooms with their chambers, and the reservation change history.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.api.deps import db_session
from hotel_desk.api.routers.admin.rooms import ChamberResponse
from hotel_desk.api.routers.catalog import ReservationResponse, RoomResponse
from hotel_desk.auth.deps import guard_route
from hotel_desk.auth.models import Identity
from hotel_desk.db.models import ReservationStatus
from hotel_desk.db.repositories.chambers import ChamberRepo
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.history import HistoryRepo
from hotel_desk.db.repositories.reservations import ReservationRepo
from hotel_desk.db.repositories.rooms import RoomRepo
from hotel_desk.services.reservation_service import ReservationService

employee_only = guard_route("/employee")

router = APIRouter(
    prefix="/v1/employee",
    tags=["employee"],
    dependencies=[Depends(employee_only)],
)


class StatusChange(BaseModel):
    status: ReservationStatus


class RoomWithChambers(BaseModel):
    room: RoomResponse
    chambers: list[ChamberResponse]


class ChangedBy(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str


class HistoryEntry(BaseModel):
    id: uuid.UUID
    reservation_id: uuid.UUID
    field_changed: str
    old_value: str | None
    new_value: str | None
    changed_by: ChangedBy | None
    changed_at: datetime


@router.get("/reservations", response_model=list[ReservationResponse])
async def list_reservations(
    status: ReservationStatus | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[ReservationResponse]:
    reservations = await ReservationRepo(session).list(status=status)
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.patch("/reservations/{reservation_id}/status", response_model=ReservationResponse)
async def change_reservation_status(
    reservation_id: uuid.UUID,
    body: StatusChange,
    identity: Identity = Depends(employee_only),
    session: AsyncSession = Depends(db_session),
) -> ReservationResponse:
    reservation = await ReservationService(session=session).change_status(
        reservation_id=reservation_id,
        status=body.status,
        changed_by=uuid.UUID(identity.id),
    )
    return ReservationResponse.model_validate(reservation)


@router.get("/rooms", response_model=list[RoomWithChambers])
async def list_rooms(session: AsyncSession = Depends(db_session)) -> list[RoomWithChambers]:
    chambers = await ChamberRepo(session).list()
    out: list[RoomWithChambers] = []
    for room in await RoomRepo(session).list():
        out.append(
            RoomWithChambers(
                room=RoomResponse.model_validate(room),
                chambers=[
                    ChamberResponse.model_validate(c) for c in chambers if c.room_type == room.room_type
                ],
            )
        )
    return out


@router.get("/history", response_model=list[HistoryEntry])
async def reservation_history(
    reservation_id: uuid.UUID | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[HistoryEntry]:
    entries = await HistoryRepo(session).list(reservation_id=reservation_id)
    employees = EmployeeRepo(session)
    names: dict[uuid.UUID, ChangedBy | None] = {}
    out: list[HistoryEntry] = []
    for e in entries:
        changed_by = None
        if e.changed_by is not None:
            if e.changed_by not in names:
                emp = await employees.get(e.changed_by)
                names[e.changed_by] = (
                    ChangedBy(id=emp.id, first_name=emp.first_name, last_name=emp.last_name)
                    if emp is not None
                    else None
                )
            changed_by = names[e.changed_by]
        out.append(
            HistoryEntry(
                id=e.id,
                reservation_id=e.reservation_id,
                field_changed=e.field_changed,
                old_value=e.old_value,
                new_value=e.new_value,
                changed_by=changed_by,
                changed_at=e.changed_at,
            )
        )
    return out
