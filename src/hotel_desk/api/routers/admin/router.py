"""
hotel_desk.api.routers.admin.router

Admin router aggregator.

Responsibilities:
- Mount per-screen admin routers under `/v1/admin`.
- Guard every admin endpoint with the `/admin` entry of the protected-route table.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hotel_desk.api.routers.admin import dashboard, employees, rooms, tasks, users
from hotel_desk.api.routers.admin.guard import admin_only

router = APIRouter(prefix="/v1/admin", tags=["admin"], dependencies=[Depends(admin_only)])

router.include_router(dashboard.router, prefix="/dashboard")
router.include_router(users.router, prefix="/users")
router.include_router(employees.router, prefix="/employees")
router.include_router(tasks.router, prefix="/tasks")
router.include_router(rooms.rooms_router, prefix="/rooms")
router.include_router(rooms.chambers_router, prefix="/chambers")
