# models.py

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from database import Base


class JobStatus(str, enum.Enum):
    """Lifecycle of a generation job. Only moves forward."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


_STATUS_RANK = {
    JobStatus.QUEUED: 0,
    JobStatus.PROCESSING: 1,
    JobStatus.COMPLETED: 2,
    JobStatus.FAILED: 2,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    """Job model for tracking mock video generation requests."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    status = Column(String, default=JobStatus.QUEUED.value)  # queued, processing, completed, failed
    prompt = Column(Text, nullable=False)
    duration = Column(Float, nullable=False)
    aspect_ratio = Column(String, nullable=False)
    seed = Column(Integer, nullable=True)
    video_url = Column(String, nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)
