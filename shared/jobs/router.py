from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from .force_fail import ForceFailJob
from .repository import FailedJobRepository
from .schemas import FailedJobResponse, JobDispatched

router = APIRouter(tags=["failed-jobs"])


@router.get("", response_model=list[FailedJobResponse])
async def list_failed_jobs(
    limit: int = Query(default=50, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    return await FailedJobRepository.list_failed_jobs(db, limit)


@router.get("/{failed_job_id}", response_model=FailedJobResponse)
async def get_failed_job(failed_job_id: int, db: AsyncSession = Depends(get_db)):
    failed_job = await FailedJobRepository.get_failed_job(db, failed_job_id)
    if not failed_job:
        raise HTTPException(status_code=404, detail="Failed job not found")
    return failed_job


@router.post("/force-fail", response_model=JobDispatched, status_code=202)
async def force_fail(request: Request):
    """Queues a job that always fails. FOR TESTING ONLY."""
    request.app.state.job_queue.dispatch(ForceFailJob())
    return JobDispatched(job=ForceFailJob.name)
