"""
hotel_desk.api.routers.admin.employees

Employee management (stock and reservation departments).

Responsibilities:
- CRUD for employee records, filterable by department.
- Upload and download one supporting document per employee.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session, document_store, settings_dep
from hotel_desk.api.routers.admin.users import CODE_PATTERN
from hotel_desk.db.models import Employee
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.services.documents import DocumentStore
from hotel_desk.services.identity_codes import ensure_code_available
from hotel_desk.settings import Settings

router = APIRouter()

UPLOAD_CHUNK_BYTES = 64 * 1024

# Starlette names this constant differently across releases.
HTTP_CONTENT_TOO_LARGE = 413


class EmployeeCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    telephone: str = Field(default="", max_length=64)
    address: str = Field(default="", max_length=512)
    email: EmailStr | None = None
    ccp: str = Field(default="", max_length=64)
    role: str = Field(default="reservation", min_length=1, max_length=64)
    code: str | None = Field(default=None, pattern=CODE_PATTERN)


class EmployeeUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    telephone: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=512)
    email: EmailStr | None = None
    ccp: str | None = Field(default=None, max_length=64)
    role: str | None = Field(default=None, min_length=1, max_length=64)
    code: str | None = Field(default=None, pattern=CODE_PATTERN)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    telephone: str
    address: str
    email: str
    ccp: str
    role: str
    code: str | None
    has_document: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def of(cls, employee: Employee) -> EmployeeResponse:
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            telephone=employee.telephone,
            address=employee.address,
            email=employee.email,
            ccp=employee.ccp,
            role=employee.role,
            code=employee.code,
            has_document=employee.file_path is not None,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


async def _read_capped(file: UploadFile, limit: int) -> bytes:
    # Stop reading as soon as the limit is passed; oversized uploads are never buffered whole.
    chunks: list[bytes] = []
    size = 0
    while chunk := await file.read(UPLOAD_CHUNK_BYTES):
        size += len(chunk)
        if size > limit:
            raise HTTPException(status_code=HTTP_CONTENT_TOO_LARGE, detail=f"File exceeds {limit} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def _get_or_404(repo: EmployeeRepo, employee_id: uuid.UUID) -> Employee:
    employee = await repo.get(employee_id)
    if employee is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    role: str | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[EmployeeResponse]:
    employees = await EmployeeRepo(session).list(role=role)
    return [EmployeeResponse.of(e) for e in employees]


@router.post("", response_model=EmployeeResponse, status_code=HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate,
    session: AsyncSession = Depends(db_session),
) -> EmployeeResponse:
    if body.code is not None:
        await ensure_code_available(session, body.code)
    fields = body.model_dump()
    fields["email"] = fields["email"] or ""
    employee = await EmployeeRepo(session).create(**fields)
    await session.commit()
    return EmployeeResponse.of(employee)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: uuid.UUID,
    body: EmployeeUpdate,
    session: AsyncSession = Depends(db_session),
) -> EmployeeResponse:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "code" in changes:
        await ensure_code_available(session, changes["code"], employee_id=employee_id)
    employee = await EmployeeRepo(session).update(employee_id, **changes)
    if employee is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Employee not found")
    await session.commit()
    return EmployeeResponse.of(employee)


@router.delete("/{employee_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
    documents: DocumentStore = Depends(document_store),
) -> Response:
    employee = await EmployeeRepo(session).delete(employee_id)
    if employee is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Employee not found")
    await session.commit()
    if employee.file_path:
        await documents.delete(employee.file_path)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.put("/{employee_id}/document", response_model=EmployeeResponse)
async def upload_document(
    employee_id: uuid.UUID,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(db_session),
    documents: DocumentStore = Depends(document_store),
    settings: Settings = Depends(settings_dep),
) -> EmployeeResponse:
    repo = EmployeeRepo(session)
    employee = await _get_or_404(repo, employee_id)

    content = await _read_capped(file, settings.max_upload_bytes)
    previous = employee.file_path
    name = await documents.save(filename=file.filename or "", data=content)
    await repo.update(employee_id, file_path=name)
    await session.commit()
    # Replaced documents are removed only after the new one is committed.
    if previous:
        await documents.delete(previous)
    return EmployeeResponse.of(employee)


@router.get("/{employee_id}/document")
async def download_document(
    employee_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
    documents: DocumentStore = Depends(document_store),
) -> FileResponse:
    employee = await _get_or_404(EmployeeRepo(session), employee_id)
    if not employee.file_path:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Document not found")
    path = documents.path_for(employee.file_path)
    return FileResponse(
        path,
        filename=f"{employee.last_name}_{employee.first_name}{path.suffix}",
    )
