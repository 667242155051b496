from typing import Any, Dict, Optional

import httpx
import structlog

from shared.config.settings import WEBHOOK_TIMEOUT
from shared.observability import webhook_calls_total

logger = structlog.get_logger(__name__)


class WebhookClient:
    """
    Fire-once outbound webhook. Delivery problems are logged and reported via
    the return value; they are never raised to the caller and never retried.
    """

    def __init__(
        self,
        url: str,
        timeout: float = WEBHOOK_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def send(self, payload: Dict[str, Any]) -> bool:
        try:
            resp = await self._client.post(self.url, json=payload)
        except httpx.TimeoutException:
            webhook_calls_total.labels(outcome="failed").inc()
            logger.warning("webhook_timeout", url=self.url, webhook_event=payload.get("event"))
            return False
        except httpx.HTTPError as e:
            webhook_calls_total.labels(outcome="failed").inc()
            logger.warning("webhook_error", url=self.url, webhook_event=payload.get("event"), error=str(e))
            return False

        if not resp.is_success:
            webhook_calls_total.labels(outcome="failed").inc()
            logger.warning("webhook_rejected", url=self.url, status=resp.status_code)
            return False

        webhook_calls_total.labels(outcome="delivered").inc()
        logger.info("webhook_delivered", url=self.url, status=resp.status_code)
        return True

    async def aclose(self) -> None:
        await self._client.aclose()
