from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from shared.config.database import Base


class FailedJob(Base):
    """Dead-letter record for a job that used up all of its attempts."""
    __tablename__ = "failed_jobs"

    id = Column(Integer, primary_key=True, index=True)
    job = Column(String(255), nullable=False)
    payload = Column(JSON, nullable=False)
    attempts = Column(Integer, nullable=False)
    exception = Column(Text, nullable=False)
    failed_at = Column(DateTime(timezone=True), nullable=False)
