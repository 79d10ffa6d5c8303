"""
hotel_desk.api.routers.admin.rooms

Room-type catalog and physical chamber management.

Responsibilities:
- CRUD for catalog entries (room types shown on the landing page).
- CRUD for chambers; a chamber's room type must exist in the catalog.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session
from hotel_desk.api.routers.catalog import RoomResponse
from hotel_desk.db.models import ChamberStatus
from hotel_desk.db.repositories.chambers import ChamberRepo
from hotel_desk.db.repositories.rooms import RoomRepo
from hotel_desk.services.errors import ConflictError, InvalidInputError

rooms_router = APIRouter()
chambers_router = APIRouter()


class RoomCreate(BaseModel):
    room_type: str = Field(min_length=1, max_length=128)
    description: str = Field(min_length=1)
    guests: int = Field(ge=1)
    size_m2: int = Field(ge=1)
    beds: int = Field(ge=1)
    price_per_night: float = Field(ge=0)
    rating: float = Field(default=0, ge=0, le=5)
    amenities: list[str] = Field(min_length=1)
    features: list[str] = Field(min_length=1)
    cancellation_policy: str = Field(min_length=1)
    image_urls: list[str] = Field(min_length=1)


class RoomUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1)
    guests: int | None = Field(default=None, ge=1)
    size_m2: int | None = Field(default=None, ge=1)
    beds: int | None = Field(default=None, ge=1)
    price_per_night: float | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    amenities: list[str] | None = Field(default=None, min_length=1)
    features: list[str] | None = Field(default=None, min_length=1)
    cancellation_policy: str | None = Field(default=None, min_length=1)
    image_urls: list[str] | None = Field(default=None, min_length=1)


class ChamberCreate(BaseModel):
    chamber_number: str = Field(min_length=1, max_length=32)
    room_type: str = Field(min_length=1, max_length=128)
    status: ChamberStatus = ChamberStatus.available


class ChamberUpdate(BaseModel):
    status: ChamberStatus


class ChamberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    chamber_number: str
    room_type: str
    status: ChamberStatus
    created_at: datetime


def _clean(items: list[str]) -> list[str]:
    # Form input arrives comma-split; drop blanks and surrounding whitespace.
    return [s.strip() for s in items if s and s.strip()]


@rooms_router.get("", response_model=list[RoomResponse])
async def list_rooms(session: AsyncSession = Depends(db_session)) -> list[RoomResponse]:
    return [RoomResponse.model_validate(r) for r in await RoomRepo(session).list()]


@rooms_router.post("", response_model=RoomResponse, status_code=HTTP_201_CREATED)
async def create_room(
    body: RoomCreate,
    session: AsyncSession = Depends(db_session),
) -> RoomResponse:
    repo = RoomRepo(session)
    if await repo.get_by_type(body.room_type) is not None:
        raise ConflictError(f"Room type {body.room_type!r} already exists")
    fields = body.model_dump()
    for key in ("amenities", "features", "image_urls"):
        fields[key] = _clean(fields[key])
    room = await repo.create(**fields)
    await session.commit()
    return RoomResponse.model_validate(room)


@rooms_router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: uuid.UUID,
    body: RoomUpdate,
    session: AsyncSession = Depends(db_session),
) -> RoomResponse:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    for key in ("amenities", "features", "image_urls"):
        if key in changes:
            changes[key] = _clean(changes[key])
    room = await RoomRepo(session).update(room_id, **changes)
    if room is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Room not found")
    await session.commit()
    return RoomResponse.model_validate(room)


@rooms_router.delete("/{room_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Response:
    repo = RoomRepo(session)
    room = await repo.get(room_id)
    if room is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Room not found")
    if await ChamberRepo(session).list(room_type=room.room_type):
        raise ConflictError("Room type still has chambers")
    await repo.delete(room_id)
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)


@chambers_router.get("", response_model=list[ChamberResponse])
async def list_chambers(
    room_type: str | None = None,
    status: ChamberStatus | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[ChamberResponse]:
    chambers = await ChamberRepo(session).list(room_type=room_type, status=status)
    return [ChamberResponse.model_validate(c) for c in chambers]


@chambers_router.post("", response_model=ChamberResponse, status_code=HTTP_201_CREATED)
async def create_chamber(
    body: ChamberCreate,
    session: AsyncSession = Depends(db_session),
) -> ChamberResponse:
    if await RoomRepo(session).get_by_type(body.room_type) is None:
        raise InvalidInputError(f"Unknown room type: {body.room_type}")
    repo = ChamberRepo(session)
    if await repo.get_by_number(body.chamber_number) is not None:
        raise ConflictError(f"Chamber {body.chamber_number} already exists")
    chamber = await repo.create(**body.model_dump())
    await session.commit()
    return ChamberResponse.model_validate(chamber)


@chambers_router.patch("/{chamber_id}", response_model=ChamberResponse)
async def update_chamber(
    chamber_id: uuid.UUID,
    body: ChamberUpdate,
    session: AsyncSession = Depends(db_session),
) -> ChamberResponse:
    chamber = await ChamberRepo(session).update(chamber_id, status=body.status)
    if chamber is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Chamber not found")
    await session.commit()
    return ChamberResponse.model_validate(chamber)


@chambers_router.delete("/{chamber_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_chamber(
    chamber_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Response:
    repo = ChamberRepo(session)
    chamber = await repo.get(chamber_id)
    if chamber is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Chamber not found")
    if chamber.status is ChamberStatus.reserved:
        raise ConflictError("Chamber is reserved")
    await repo.delete(chamber_id)
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)
