"""
hotel_desk.api.routers.catalog

Public (unauthenticated) endpoints behind the landing page.

Responsibilities:
- List the room-type catalog.
- Accept booking requests and return the assignment outcome.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from hotel_desk.api.deps import db_session
from hotel_desk.db.models import ReservationStatus
from hotel_desk.db.repositories.rooms import RoomRepo
from hotel_desk.services.booking_service import BookingRequest, BookingService

router = APIRouter(prefix="/v1", tags=["catalog"])


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    room_type: str
    description: str
    guests: int
    size_m2: int
    beds: int
    price_per_night: float
    rating: float
    amenities: list[str]
    features: list[str]
    image_urls: list[str]
    cancellation_policy: str
    created_at: datetime


class BookingBody(BaseModel):
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=64)
    check_in: date
    check_out: date
    room_type: str = Field(min_length=1, max_length=128)
    guests: int = Field(default=1, ge=1, le=20)
    special_requests: str | None = Field(default=None, max_length=2000)


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID | None
    first_name: str
    last_name: str
    email: str
    phone: str
    check_in: date
    check_out: date
    room_type: str
    guests: int
    special_requests: str | None
    status: ReservationStatus
    chamber_id: uuid.UUID | None
    chamber_number: str
    created_at: datetime


@router.get("/catalog/rooms", response_model=list[RoomResponse])
async def list_catalog_rooms(session: AsyncSession = Depends(db_session)) -> list[RoomResponse]:
    rooms = await RoomRepo(session).list()
    return [RoomResponse.model_validate(r) for r in rooms]


@router.post("/bookings", response_model=ReservationResponse, status_code=HTTP_201_CREATED)
async def create_booking(
    body: BookingBody,
    session: AsyncSession = Depends(db_session),
) -> ReservationResponse:
    reservation = await BookingService(session=session).book(
        BookingRequest(**body.model_dump())
    )
    return ReservationResponse.model_validate(reservation)


# --- Module Notes -----------------------------------------------------------
# Booking never requires a session; a logged-in reservation user books through
# `/v1/user/reservations` so the reservation is linked to their profile.
