from fastapi import Request
from sqlalchemy.ext.asyncio import async_sessionmaker

from services.inventory_service.ledger import InventoryLedger
from services.notification_service.listeners import SendNotificationListener
from services.notification_service.sink import LogNotificationSink
from shared.config.settings import JOB_WORKERS, WEBHOOK_TIMEOUT, WEBHOOK_URL
from shared.events import EventBus
from shared.integrations import WebhookClient
from shared.jobs import JobQueue
from .events import OrderPlaced
from .service import OrderService


def build_order_service(
    session_factory: async_sessionmaker,
    *,
    inventory: InventoryLedger | None = None,
    sink=None,
    webhook_url: str | None = WEBHOOK_URL,
    webhook_timeout: float = WEBHOOK_TIMEOUT,
    workers: int = JOB_WORKERS,
    backoff: float | None = None,
) -> OrderService:
    """Assembles the order workflow with its own ledger, queue and event bus."""
    sink = sink or LogNotificationSink()

    events = EventBus()
    events.subscribe(OrderPlaced, SendNotificationListener(sink))

    return OrderService(
        inventory=inventory or InventoryLedger(),
        jobs=JobQueue(session_factory, workers=workers, backoff=backoff),
        events=events,
        sink=sink,
        webhook=WebhookClient(webhook_url, timeout=webhook_timeout) if webhook_url else None,
    )


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service
