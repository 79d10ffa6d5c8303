"""
hotel_desk.api.routers.health

Liveness and readiness probes.

Responsibilities:
- `/healthz`: the process is serving HTTP.
- `/readyz`: the database answers and the document directory is writable.
"""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from hotel_desk import __version__
from hotel_desk.api.deps import db_session, settings_dep
from hotel_desk.observability.logging import get_logger
from hotel_desk.settings import Settings

router = APIRouter(tags=["health"])

log = get_logger(__name__)


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name, "version": __version__}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
):
    failed: list[str] = []
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.warning("readiness_check_failed", check="database", error=str(e))
        failed.append("database")

    uploads = Path(settings.upload_dir)
    if not (uploads.is_dir() and os.access(uploads, os.W_OK)):
        log.warning("readiness_check_failed", check="uploads", path=str(uploads))
        failed.append("uploads")

    if failed:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "failed": failed},
        )
    return {"status": "ready"}
