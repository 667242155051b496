import structlog

logger = structlog.get_logger("notifications")


class LogNotificationSink:
    """Stands in for an email gateway: every notification becomes one log line."""

    def send(self, message: str) -> None:
        logger.info("notification", channel="notifications", message=message)
