from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class FailedJobResponse(BaseModel):
    id: int
    job: str
    payload: Dict[str, Any]
    attempts: int
    exception: str
    failed_at: datetime

    class Config:
        from_attributes = True


class JobDispatched(BaseModel):
    job: str
    status: str = "queued"
