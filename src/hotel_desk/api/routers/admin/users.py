"""
hotel_desk.api.routers.admin.users

Profile (user) management.

Responsibilities:
- List/create/update/delete profiles with a stored role.
- Keep access codes unique across profiles and employees.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session
from hotel_desk.api.routers.admin.guard import admin_only
from hotel_desk.auth.models import Identity, IdentitySource, Role
from hotel_desk.db.repositories.profiles import ProfileRepo
from hotel_desk.services.errors import ConflictError, InvalidInputError
from hotel_desk.services.identity_codes import ensure_code_available

router = APIRouter()

CODE_PATTERN = r"^\d{4,16}$"


class ProfileCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    role: Role
    code: str = Field(pattern=CODE_PATTERN)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    role: Role | None = None
    code: str | None = Field(default=None, pattern=CODE_PATTERN)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    role: Role
    code: str
    created_at: datetime


def _check_storable(role: Role | None) -> None:
    # Reservation employees are resolved from the employees table, never stored as a profile role.
    if role is Role.reservation_employee:
        raise InvalidInputError("reservation_employee is assigned at login, not stored")


@router.get("", response_model=list[ProfileResponse])
async def list_users(
    role: Role | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[ProfileResponse]:
    profiles = await ProfileRepo(session).list(role=role)
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.post("", response_model=ProfileResponse, status_code=HTTP_201_CREATED)
async def create_user(
    body: ProfileCreate,
    session: AsyncSession = Depends(db_session),
) -> ProfileResponse:
    _check_storable(body.role)
    await ensure_code_available(session, body.code)
    profile = await ProfileRepo(session).create(name=body.name, role=body.role, code=body.code)
    await session.commit()
    return ProfileResponse.model_validate(profile)


@router.patch("/{profile_id}", response_model=ProfileResponse)
async def update_user(
    profile_id: uuid.UUID,
    body: ProfileUpdate,
    session: AsyncSession = Depends(db_session),
) -> ProfileResponse:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    _check_storable(changes.get("role"))
    if "code" in changes:
        await ensure_code_available(session, changes["code"], profile_id=profile_id)
    profile = await ProfileRepo(session).update(profile_id, **changes)
    if profile is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="User not found")
    await session.commit()
    return ProfileResponse.model_validate(profile)


@router.delete("/{profile_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_user(
    profile_id: uuid.UUID,
    identity: Identity = Depends(admin_only),
    session: AsyncSession = Depends(db_session),
) -> Response:
    if identity.source is IdentitySource.profiles and identity.id == str(profile_id):
        raise ConflictError("Administrators cannot delete their own profile")
    if not await ProfileRepo(session).delete(profile_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="User not found")
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)
