from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import FailedJob


class FailedJobRepository:
    @staticmethod
    async def create_failed_job(db: AsyncSession, failed_job: FailedJob):
        if failed_job.failed_at is None:
            failed_job.failed_at = datetime.now(timezone.utc)
        db.add(failed_job)
        await db.commit()
        await db.refresh(failed_job)
        return failed_job

    @staticmethod
    async def list_failed_jobs(db: AsyncSession, limit: int = 50):
        result = await db.execute(
            select(FailedJob).order_by(FailedJob.id.desc()).limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def get_failed_job(db: AsyncSession, failed_job_id: int):
        result = await db.execute(select(FailedJob).where(FailedJob.id == failed_job_id))
        return result.scalars().first()
