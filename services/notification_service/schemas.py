from typing import Optional
from pydantic import BaseModel


class OrderConfirmation(BaseModel):
    recipient: str
    subject: str
    body: str
    order_id: int


class WebhookPayload(BaseModel):
    event: str = "order.placed"
    order_id: int
    customer_name: str
    customer_email: str
    item: str
    quantity: int
    total_price: str
    status: str
    created_at: Optional[str] = None
