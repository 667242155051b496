"""
Order placement workflow.

Only two failures reach the caller: OutOfStockError (nothing was changed) and
OrderPersistenceError (the reservation was handed back). Once the order row is
committed it is placed; jobs, listeners and the webhook are best effort.
"""
from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.inventory_service.jobs import UpdateInventoryJob
from services.inventory_service.ledger import InventoryLedger
from services.notification_service.jobs import SendOrderConfirmationJob
from services.notification_service.service import NotificationService
from shared.events import EventBus
from shared.integrations import WebhookClient
from shared.jobs import JobQueue
from shared.observability import orders_placed_total
from .events import OrderPlaced
from .exceptions import OrderNotFoundError, OrderPersistenceError, OutOfStockError
from .models import Order, OrderStatus
from .repository import OrderRepository
from .schemas import OrderCreate, OrderResponse

logger = structlog.get_logger(__name__)


class OrderService:
    def __init__(
        self,
        inventory: InventoryLedger,
        jobs: JobQueue,
        events: EventBus,
        sink,
        notifications: NotificationService | None = None,
        webhook: Optional[WebhookClient] = None,
    ):
        self.inventory = inventory
        self.jobs = jobs
        self.events = events
        self.sink = sink
        self.notifications = notifications or NotificationService()
        self.webhook = webhook

    async def place_order(self, db: AsyncSession, data: OrderCreate) -> OrderResponse:
        # 1. Check and reserve stock in one step
        reservation = self.inventory.reserve_if_available(data.item, data.quantity)
        if reservation is None:
            orders_placed_total.labels(outcome="rejected").inc()
            logger.warning("order_rejected_out_of_stock", item=data.item, quantity=data.quantity)
            raise OutOfStockError(data.item, data.quantity)

        # 2. Persist
        try:
            record = await OrderRepository.create_order(db, Order(
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                item=data.item,
                quantity=data.quantity,
                total_price=data.total_price,
            ))
        except SQLAlchemyError as e:
            await db.rollback()
            self.inventory.release(data.item, reservation.quantity_deducted)
            orders_placed_total.labels(outcome="error").inc()
            logger.error("order_persist_failed", item=data.item, error=str(e))
            raise OrderPersistenceError() from e

        order = OrderResponse.model_validate(record)
        orders_placed_total.labels(outcome="placed").inc()
        logger.info("order_created", order_id=order.id, customer=order.customer_name, remaining=reservation.remaining)

        # 3. Side effects. None of these may undo the order.
        confirmation = self.notifications.build_confirmation(order)
        self.jobs.dispatch(SendOrderConfirmationJob(confirmation, self.sink))
        self.jobs.dispatch(UpdateInventoryJob(order))

        await self.events.publish(OrderPlaced(order=order))

        if self.webhook is not None:
            payload = self.notifications.build_webhook_payload(order)
            await self.webhook.send(payload.model_dump(mode="json"))

        return order

    async def list_orders(self, db: AsyncSession, page: int = 1, per_page: int = 10):
        return await OrderRepository.list_orders(db, page, per_page)

    async def find_order(self, db: AsyncSession, order_id: int) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    async def update_status(self, db: AsyncSession, order_id: int, status: OrderStatus) -> Order:
        # Any status may follow any other
        order = await OrderRepository.update_status(db, order_id, status)
        if not order:
            raise OrderNotFoundError(order_id)

        logger.info("order_status_updated", order_id=order_id, status=status.value)
        return order
