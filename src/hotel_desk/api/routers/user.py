"""
hotel_desk.api.routers.user

Reservation-user endpoints: a logged-in guest's own reservations.

Responsibilities:
- List/create/edit/delete reservations linked to the caller's profile.
- Hide other users' reservations behind 404.
"""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session
from hotel_desk.api.routers.catalog import ReservationResponse
from hotel_desk.auth.deps import guard_route
from hotel_desk.auth.models import Identity
from hotel_desk.db.models import Reservation
from hotel_desk.db.repositories.reservations import ReservationRepo
from hotel_desk.services.booking_service import BookingRequest, BookingService
from hotel_desk.services.reservation_service import ReservationService

user_only = guard_route("/user")

router = APIRouter(
    prefix="/v1/user/reservations",
    tags=["user"],
    dependencies=[Depends(user_only)],
)


class UserReservationCreate(BaseModel):
    check_in: date
    check_out: date
    room_type: str = Field(min_length=1, max_length=128)
    guests: int = Field(default=1, ge=1, le=20)
    special_requests: str | None = Field(default=None, max_length=2000)


class UserReservationUpdate(BaseModel):
    check_in: date | None = None
    check_out: date | None = None
    guests: int | None = Field(default=None, ge=1, le=20)
    special_requests: str | None = Field(default=None, max_length=2000)


async def _own_or_404(session: AsyncSession, identity: Identity, reservation_id: uuid.UUID) -> Reservation:
    reservation = await ReservationRepo(session).get(reservation_id)
    if reservation is None or str(reservation.user_id) != identity.id:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Reservation not found")
    return reservation


@router.get("", response_model=list[ReservationResponse])
async def list_my_reservations(
    identity: Identity = Depends(user_only),
    session: AsyncSession = Depends(db_session),
) -> list[ReservationResponse]:
    reservations = await ReservationRepo(session).list_for_user(uuid.UUID(identity.id))
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.post("", response_model=ReservationResponse, status_code=HTTP_201_CREATED)
async def create_my_reservation(
    body: UserReservationCreate,
    identity: Identity = Depends(user_only),
    session: AsyncSession = Depends(db_session),
) -> ReservationResponse:
    reservation = await BookingService(session=session).book(
        BookingRequest(
            first_name=identity.name,
            last_name="",
            email="",
            phone="",
            user_id=uuid.UUID(identity.id),
            **body.model_dump(),
        )
    )
    return ReservationResponse.model_validate(reservation)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_my_reservation(
    reservation_id: uuid.UUID,
    body: UserReservationUpdate,
    identity: Identity = Depends(user_only),
    session: AsyncSession = Depends(db_session),
) -> ReservationResponse:
    reservation = await _own_or_404(session, identity, reservation_id)
    updated = await ReservationService(session=session).update_guest_fields(
        reservation=reservation,
        changes=body.model_dump(exclude_unset=True, exclude_none=True),
    )
    return ReservationResponse.model_validate(updated)


@router.delete("/{reservation_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_my_reservation(
    reservation_id: uuid.UUID,
    identity: Identity = Depends(user_only),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _own_or_404(session, identity, reservation_id)
    await ReservationService(session=session).delete(reservation_id=reservation_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
