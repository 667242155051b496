import math

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from .dependencies import get_order_service
from .exceptions import OrderNotFoundError, OrderPersistenceError, OutOfStockError
from .schemas import (
    OrderCreate,
    OrderEnvelope,
    OrderPage,
    OrderResponse,
    OrderStatusUpdate,
    PaginationLinks,
    PaginationMeta,
)
from .service import OrderService

router = APIRouter(tags=["orders"])


@router.post("", response_model=OrderEnvelope, status_code=201)
async def create_order(
    order: OrderCreate,
    db: AsyncSession = Depends(get_db),
    service: OrderService = Depends(get_order_service)
):
    try:
        placed = await service.place_order(db, order)
    except OutOfStockError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OrderPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return OrderEnvelope(data=placed)


@router.get("", response_model=OrderPage)
async def list_orders(
    request: Request,
    limit: int = Query(default=10, ge=1, le=100),
    page: int = Query(default=1, ge=1),
    db: AsyncSession = Depends(get_db),
    service: OrderService = Depends(get_order_service)
):
    orders, total = await service.list_orders(db, page=page, per_page=limit)
    last_page = max(1, math.ceil(total / limit))

    def page_url(number: int) -> str:
        return str(request.url.include_query_params(limit=limit, page=number))

    first_index = (page - 1) * limit + 1
    return OrderPage(
        data=[OrderResponse.model_validate(o) for o in orders],
        meta=PaginationMeta(
            current_page=page,
            last_page=last_page,
            per_page=limit,
            total=total,
            from_=first_index if orders else None,
            to=first_index + len(orders) - 1 if orders else None,
        ),
        links=PaginationLinks(
            first=page_url(1),
            last=page_url(last_page),
            prev=page_url(page - 1) if page > 1 else None,
            next=page_url(page + 1) if page < last_page else None,
        ),
    )


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    service: OrderService = Depends(get_order_service)
):
    try:
        order = await service.find_order(db, order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderEnvelope(data=OrderResponse.model_validate(order))


@router.patch("/{order_id}", response_model=OrderEnvelope)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    service: OrderService = Depends(get_order_service)
):
    try:
        order = await service.update_status(db, order_id, payload.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderEnvelope(data=OrderResponse.model_validate(order))
