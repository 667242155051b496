from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.jobs import Job
from services.order_service.schemas import OrderResponse
from .models import InventoryLog
from .repository import InventoryLogRepository

logger = structlog.get_logger(__name__)


class UpdateInventoryJob(Job):
    """Writes the audit record for an order's stock deduction."""
    name = "update_inventory"

    def __init__(self, order: OrderResponse):
        self.order = order

    async def handle(self, db: AsyncSession) -> None:
        log = InventoryLog(
            order_id=self.order.id,
            item=self.order.item,
            quantity_deducted=self.order.quantity,
            processed_at=datetime.now(timezone.utc),
        )
        await InventoryLogRepository.create_log(db, log)
        logger.info(
            "inventory_log_created",
            order_id=self.order.id,
            item=self.order.item,
            quantity=self.order.quantity,
        )

    def payload(self):
        return {"order_id": self.order.id, "item": self.order.item, "quantity": self.order.quantity}
