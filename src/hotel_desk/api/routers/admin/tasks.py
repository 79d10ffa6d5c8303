"""
hotel_desk.api.routers.admin.tasks

Admin task board: CRUD over tasks assignable to profiles, newest first.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session
from hotel_desk.db.models import TaskStatus
from hotel_desk.db.repositories.profiles import ProfileRepo
from hotel_desk.db.repositories.tasks import TaskRepo
from hotel_desk.services.errors import InvalidInputError

router = APIRouter()


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    description: str = Field(default="", max_length=4000)
    status: TaskStatus = TaskStatus.pending
    assigned_to: uuid.UUID | None = None


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = Field(default=None, max_length=4000)
    status: TaskStatus | None = None
    assigned_to: uuid.UUID | None = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    status: TaskStatus
    assigned_to: uuid.UUID | None
    created_at: datetime


async def _check_assignee(session: AsyncSession, profile_id: uuid.UUID | None) -> None:
    if profile_id is not None and await ProfileRepo(session).get(profile_id) is None:
        raise InvalidInputError("Assignee does not exist")


@router.get("", response_model=list[TaskResponse])
async def list_tasks(session: AsyncSession = Depends(db_session)) -> list[TaskResponse]:
    return [TaskResponse.model_validate(t) for t in await TaskRepo(session).list()]


@router.post("", response_model=TaskResponse, status_code=HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    session: AsyncSession = Depends(db_session),
) -> TaskResponse:
    await _check_assignee(session, body.assigned_to)
    task = await TaskRepo(session).create(**body.model_dump())
    await session.commit()
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    session: AsyncSession = Depends(db_session),
) -> TaskResponse:
    # `assigned_to: null` explicitly unassigns, so only unset fields are skipped here.
    changes = body.model_dump(exclude_unset=True)
    for required in ("title", "status", "description"):
        if required in changes and changes[required] is None:
            del changes[required]
    await _check_assignee(session, changes.get("assigned_to"))
    task = await TaskRepo(session).update(task_id, **changes)
    if task is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Task not found")
    await session.commit()
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Response:
    if not await TaskRepo(session).delete(task_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Task not found")
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)
