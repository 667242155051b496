import asyncio
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.config.settings import JOB_BACKOFF_SECONDS, JOB_MAX_TRIES, JOB_WORKERS
from shared.observability import order_jobs_total
from .models import FailedJob
from .repository import FailedJobRepository

logger = structlog.get_logger(__name__)


class Job:
    """
    A unit of background work. Subclasses implement `handle` and may override
    `tries` and `backoff` (seconds between attempts).
    """
    name = "job"
    tries = JOB_MAX_TRIES
    backoff = JOB_BACKOFF_SECONDS

    async def handle(self, db: AsyncSession) -> None:
        raise NotImplementedError

    def payload(self) -> Dict[str, Any]:
        """JSON-safe description stored with the dead-letter record."""
        return {}


class JobQueue:
    """
    In-process job queue. `dispatch` only enqueues; worker tasks run each job
    with retries and move it to the failed_jobs table once it runs out of tries.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        workers: int = JOB_WORKERS,
        backoff: Optional[float] = None,
    ):
        self._session_factory = session_factory
        self._workers = max(1, workers)
        self._backoff = backoff
        self._queue: asyncio.Queue = asyncio.Queue()
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def dispatch(self, job: Job) -> None:
        self._queue.put_nowait(job)
        logger.info("job_dispatched", job=job.name, queued=self._queue.qsize())

    def start(self) -> None:
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._worker(n), name=f"job-worker-{n}")
            for n in range(self._workers)
        ]
        logger.info("job_workers_started", workers=self._workers)

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("job_workers_stopped", pending=self._queue.qsize())

    async def join(self) -> None:
        """Waits until every dispatched job has succeeded or been dead-lettered."""
        await self._queue.join()

    async def _worker(self, number: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.run(job)
            finally:
                self._queue.task_done()

    async def run(self, job: Job) -> bool:
        """Runs one job to completion. Returns False if it ended in the dead-letter store."""
        backoff = job.backoff if self._backoff is None else self._backoff

        for attempt in range(1, job.tries + 1):
            try:
                async with self._session_factory() as db:
                    await job.handle(db)
            except Exception as exc:
                if attempt >= job.tries:
                    await self._bury(job, attempt, exc)
                    return False
                order_jobs_total.labels(job=job.name, outcome="retried").inc()
                logger.warning("job_attempt_failed", job=job.name, attempt=attempt, tries=job.tries, error=str(exc))
                await asyncio.sleep(backoff)
            else:
                order_jobs_total.labels(job=job.name, outcome="succeeded").inc()
                logger.info("job_succeeded", job=job.name, attempt=attempt)
                return True
        return False

    async def _bury(self, job: Job, attempts: int, exc: Exception) -> None:
        order_jobs_total.labels(job=job.name, outcome="dead_lettered").inc()
        logger.error("job_dead_lettered", job=job.name, attempts=attempts, error=str(exc))

        failed_job = FailedJob(
            job=job.name,
            payload=job.payload(),
            attempts=attempts,
            exception=f"{type(exc).__name__}: {exc}",
        )
        try:
            async with self._session_factory() as db:
                await FailedJobRepository.create_failed_job(db, failed_job)
        except Exception:
            # The worker has to keep draining the queue even if the store is down
            logger.exception("dead_letter_write_failed", job=job.name, payload=failed_job.payload)
