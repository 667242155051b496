"""
Builds notification payloads. Nothing here performs I/O: delivery is the job
of the queue jobs, the event listeners and the webhook client.
"""
from services.order_service.schemas import OrderResponse
from .schemas import OrderConfirmation, WebhookPayload


def format_price(order: OrderResponse) -> str:
    return f"{order.total_price:.2f}"


class NotificationService:
    @staticmethod
    def build_confirmation(order: OrderResponse) -> OrderConfirmation:
        return OrderConfirmation(
            recipient=order.customer_email,
            subject=f"Order #{order.id} Confirmation",
            body=(
                f"Dear {order.customer_name}, your order for {order.quantity}x {order.item} "
                f"(total: ${format_price(order)}) has been received and is now {order.status.value}."
            ),
            order_id=order.id,
        )

    @staticmethod
    def build_webhook_payload(order: OrderResponse) -> WebhookPayload:
        return WebhookPayload(
            order_id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            item=order.item,
            quantity=order.quantity,
            total_price=format_price(order),
            status=order.status.value,
            created_at=order.created_at.isoformat() if order.created_at else None,
        )
