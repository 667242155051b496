from pydantic import BaseModel

from .schemas import OrderResponse


class OrderPlaced(BaseModel):
    """Published after an order is persisted."""
    order: OrderResponse
