"""
hotel_desk.api.app

FastAPI app factory for the hotel back-office service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Map guard redirects and domain errors to HTTP responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from hotel_desk import __version__
from hotel_desk.api.routers.admin.router import router as admin_router
from hotel_desk.api.routers.auth import router as auth_router
from hotel_desk.api.routers.catalog import router as catalog_router
from hotel_desk.api.routers.employee import router as employee_router
from hotel_desk.api.routers.health import router as health_router
from hotel_desk.api.routers.stock import router as stock_router
from hotel_desk.api.routers.user import router as user_router
from hotel_desk.auth.guard import GuardDecision, GuardRedirect
from hotel_desk.auth.session import Clock, utcnow
from hotel_desk.db.init_db import init_db, seed_admin
from hotel_desk.db.session import create_engine, create_sessionmaker
from hotel_desk.observability.logging import configure_logging, get_logger
from hotel_desk.observability.middleware import RequestContextMiddleware
from hotel_desk.services.errors import (
    ConflictError,
    HotelDeskError,
    InvalidInputError,
    NotFoundError,
)
from hotel_desk.settings import Settings

log = get_logger(__name__)

# Starlette names this constant differently across releases.
HTTP_UNPROCESSABLE_CONTENT = 422

_ERROR_STATUS: dict[type[HotelDeskError], int] = {
    NotFoundError: HTTP_404_NOT_FOUND,
    ConflictError: HTTP_409_CONFLICT,
    InvalidInputError: HTTP_UNPROCESSABLE_CONTENT,
}


def create_app(*, settings: Settings, clock: Clock = utcnow) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Engine and session factory live on app.state; routers reach them via `api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables and the seeded admin. Prod uses Alembic.
            await init_db(engine)
            await seed_admin(app.state.sessionmaker, settings)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Hotel Desk",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(admin_router)
    app.include_router(stock_router)
    app.include_router(user_router)
    app.include_router(employee_router)

    @app.exception_handler(GuardRedirect)
    async def _guard_redirect(_: Request, exc: GuardRedirect) -> JSONResponse:
        if exc.decision is GuardDecision.redirect_login:
            response = JSONResponse(
                status_code=HTTP_401_UNAUTHORIZED,
                content={"detail": "Login required", "redirect": exc.location},
                headers={"Location": exc.location},
            )
            # An expired or forged session is dropped client-side as well.
            response.delete_cookie(settings.session_cookie_name)
            return response
        return JSONResponse(
            status_code=HTTP_403_FORBIDDEN,
            content={"detail": "Not allowed for this role", "redirect": exc.location},
            headers={"Location": exc.location},
        )

    @app.exception_handler(HotelDeskError)
    async def _domain_error(_: Request, exc: HotelDeskError) -> JSONResponse:
        status = _ERROR_STATUS.get(type(exc), HTTP_UNPROCESSABLE_CONTENT)
        return JSONResponse(
            status_code=status,
            content={"detail": exc.message, "code": exc.error_code},
        )

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; business logic stays
# in routers/services.
