import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.jobs import Job
from .schemas import OrderConfirmation

logger = structlog.get_logger(__name__)


class SendOrderConfirmationJob(Job):
    name = "send_order_confirmation"
    backoff = 5

    def __init__(self, confirmation: OrderConfirmation, sink):
        self.confirmation = confirmation
        self.sink = sink

    async def handle(self, db: AsyncSession) -> None:
        c = self.confirmation
        self.sink.send(
            f"ORDER CONFIRMATION - Order #{c.order_id} | To: {c.recipient} "
            f"| Subject: {c.subject} | {c.body}"
        )
        logger.info("order_confirmation_sent", order_id=c.order_id)

    def payload(self):
        return self.confirmation.model_dump()
