import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .queue import Job

logger = structlog.get_logger(__name__)


class ForceFailJob(Job):
    """
    Always raises. Dispatch it to watch a job walk through every retry and land
    in the failed_jobs table.
    """
    name = "force_fail"
    backoff = 2

    def __init__(self):
        self.attempts = 0

    async def handle(self, db: AsyncSession) -> None:
        self.attempts += 1
        logger.warning("force_fail_attempt", attempt=self.attempts)
        raise RuntimeError(f"Intentional failure on attempt #{self.attempts}")

    def payload(self):
        return {"reason": "intentional failure"}
