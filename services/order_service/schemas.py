from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from .models import OrderStatus


class OrderCreate(BaseModel):
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: EmailStr
    item: str = Field(min_length=1, max_length=255)
    quantity: int = Field(ge=1, le=1000)
    total_price: Decimal = Field(ge=Decimal("0.01"), le=Decimal("999999.99"), decimal_places=2)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    customer_email: str
    item: str
    quantity: int
    status: OrderStatus
    total_price: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderEnvelope(BaseModel):
    data: OrderResponse


class PaginationMeta(BaseModel):
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None

    class Config:
        populate_by_name = True


class PaginationLinks(BaseModel):
    first: str
    last: str
    prev: Optional[str] = None
    next: Optional[str] = None


class OrderPage(BaseModel):
    data: List[OrderResponse]
    meta: PaginationMeta
    links: PaginationLinks


# Friendlier texts for the 422 body, keyed by (field, pydantic error type)
VALIDATION_MESSAGES = {
    ("customer_name", "missing"): "Customer name is required.",
    ("customer_name", "string_too_short"): "Customer name is required.",
    ("customer_email", "missing"): "Customer email is required.",
    ("customer_email", "value_error"): "Please provide a valid email address.",
    ("item", "missing"): "Item name is required.",
    ("item", "string_too_short"): "Item name is required.",
    ("quantity", "missing"): "Quantity is required.",
    ("quantity", "greater_than_equal"): "Quantity must be at least 1.",
    ("total_price", "missing"): "Total price is required.",
    ("total_price", "greater_than_equal"): "Total price must be greater than 0.",
}
