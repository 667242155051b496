from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Type

import structlog
from pydantic import BaseModel

logger = structlog.get_logger(__name__)

Listener = Callable[[BaseModel], Awaitable[None]]


class EventBus:
    """
    In-process publish/subscribe. Publishers never see listener results or
    errors; a failing listener is logged and the remaining listeners still run.
    """

    def __init__(self):
        self._listeners: Dict[Type[BaseModel], List[Listener]] = defaultdict(list)

    def subscribe(self, event_type: Type[BaseModel], listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def listeners_for(self, event_type: Type[BaseModel]) -> List[Listener]:
        return list(self._listeners.get(event_type, []))

    async def publish(self, event: BaseModel) -> None:
        event_name = type(event).__name__
        listeners = self.listeners_for(type(event))
        logger.info("event_published", event_type=event_name, listeners=len(listeners))

        for listener in listeners:
            try:
                await listener(event)
            except Exception:
                logger.exception(
                    "event_listener_failed",
                    event_type=event_name,
                    listener=getattr(listener, "__name__", type(listener).__name__),
                )
