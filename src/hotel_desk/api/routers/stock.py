"""
hotel_desk.api.routers.stock

Stock manager endpoints.

Responsibilities:
- CRUD for stock items, guarded by the `/stock` protected route.
- Report each item's stock level (out / low / ok) against the configured threshold.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from hotel_desk.api.deps import db_session, settings_dep
from hotel_desk.auth.deps import guard_route
from hotel_desk.db.models import StockItem
from hotel_desk.db.repositories.stock import StockRepo
from hotel_desk.settings import Settings

stock_manager_only = guard_route("/stock")

router = APIRouter(
    prefix="/v1/stock/items",
    tags=["stock"],
    dependencies=[Depends(stock_manager_only)],
)

StockLevel = Literal["out", "low", "ok"]


class StockItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    category: str = Field(min_length=1, max_length=128)
    quantity: int = Field(ge=0)
    unit: str = Field(min_length=1, max_length=32)
    price: float = Field(default=0, ge=0)
    description: str | None = Field(default=None, max_length=2000)


class StockItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    category: str | None = Field(default=None, min_length=1, max_length=128)
    quantity: int | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1, max_length=32)
    price: float | None = Field(default=None, ge=0)
    description: str | None = Field(default=None, max_length=2000)


class StockItemResponse(BaseModel):
    id: uuid.UUID
    name: str
    category: str
    quantity: int
    unit: str
    price: float
    description: str | None
    level: StockLevel
    last_restocked: datetime
    created_at: datetime


def stock_level(quantity: int, threshold: int) -> StockLevel:
    if quantity <= 0:
        return "out"
    if quantity < threshold:
        return "low"
    return "ok"


def _response(item: StockItem, settings: Settings) -> StockItemResponse:
    return StockItemResponse(
        id=item.id,
        name=item.name,
        category=item.category,
        quantity=item.quantity,
        unit=item.unit,
        price=item.price,
        description=item.description,
        level=stock_level(item.quantity, settings.low_stock_threshold),
        last_restocked=item.last_restocked,
        created_at=item.created_at,
    )


@router.get("", response_model=list[StockItemResponse])
async def list_items(
    category: str | None = None,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[StockItemResponse]:
    items = await StockRepo(session).list(category=category)
    return [_response(i, settings) for i in items]


@router.post("", response_model=StockItemResponse, status_code=HTTP_201_CREATED)
async def create_item(
    body: StockItemCreate,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> StockItemResponse:
    item = await StockRepo(session).create(**body.model_dump())
    await session.commit()
    return _response(item, settings)


@router.patch("/{item_id}", response_model=StockItemResponse)
async def update_item(
    item_id: uuid.UUID,
    body: StockItemUpdate,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> StockItemResponse:
    item = await StockRepo(session).update(
        item_id, **body.model_dump(exclude_unset=True, exclude_none=True)
    )
    if item is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Stock item not found")
    await session.commit()
    return _response(item, settings)


@router.delete("/{item_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Response:
    if not await StockRepo(session).delete(item_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Stock item not found")
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)
