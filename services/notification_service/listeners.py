import structlog

from services.order_service.events import OrderPlaced
from .service import format_price

logger = structlog.get_logger(__name__)


class SendNotificationListener:
    def __init__(self, sink):
        self.sink = sink

    async def __call__(self, event: OrderPlaced) -> None:
        order = event.order
        self.sink.send(
            f"EVENT NOTIFICATION - Order #{order.id} placed by {order.customer_name} "
            f"| Item: {order.item} x{order.quantity} | Total: ${format_price(order)}"
        )
        logger.info("notification_listener_handled", order_id=order.id)
