"""
hotel_desk.api.routers.admin.dashboard

Admin dashboard summary.

Responsibilities:
- Aggregate counts over employees, tasks and stock, plus the latest tasks.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.api.deps import db_session, settings_dep
from hotel_desk.api.routers.admin.tasks import TaskResponse
from hotel_desk.db.models import TaskStatus
from hotel_desk.db.repositories.employees import EmployeeRepo
from hotel_desk.db.repositories.stock import StockRepo
from hotel_desk.db.repositories.tasks import TaskRepo
from hotel_desk.settings import Settings

router = APIRouter()


class DashboardResponse(BaseModel):
    total_employees: int
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    stock_items: int
    low_stock_items: int
    recent_tasks: list[TaskResponse]


@router.get("", response_model=DashboardResponse)
async def dashboard(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> DashboardResponse:
    tasks = TaskRepo(session)
    stock = StockRepo(session)
    by_status = await tasks.count_by_status()
    recent = await tasks.list(limit=5)
    return DashboardResponse(
        total_employees=await EmployeeRepo(session).count(),
        total_tasks=sum(by_status.values()),
        completed_tasks=by_status[TaskStatus.completed],
        in_progress_tasks=by_status[TaskStatus.in_progress],
        stock_items=await stock.count(),
        low_stock_items=await stock.count_below(settings.low_stock_threshold),
        recent_tasks=[TaskResponse.model_validate(t) for t in recent],
    )
