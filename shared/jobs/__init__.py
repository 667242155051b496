from .queue import Job, JobQueue
from .force_fail import ForceFailJob
from .models import FailedJob
from .repository import FailedJobRepository

__all__ = [
    "Job",
    "JobQueue",
    "ForceFailJob",
    "FailedJob",
    "FailedJobRepository"
]
