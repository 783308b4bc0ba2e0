"""
Service classes for the Mock Video Generator.
Contains the JobStore and the MockVideoGenerator.
"""

import uuid
import time
import random
import logging
import threading
from typing import Callable, List, Optional

from config import (
    DATABASE_URL,
    SAMPLE_VIDEOS,
    DEFAULT_ASPECT_RATIO,
    MIN_DELAY_SECONDS,
    MAX_DELAY_SECONDS,
    FAILURE_RATE,
)
from database import Base, make_engine, make_session_factory
from models import Job, JobStatus, utc_now


class JobNotFoundError(Exception):
    """Raised when a job id is not present in the store."""

    def __init__(self, job_id: str):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class InvalidTransitionError(Exception):
    """Raised when an update would move a job backwards or out of a terminal status."""


class GenerationError(Exception):
    """Raised by the generator when a (simulated) generation fails."""


class JobStore:
    """Process-wide job records, backed by SQLAlchemy.

    Created once per application lifespan and injected into the handlers.
    Every operation holds a lock, so the request handlers and the worker
    threads never interleave on the shared SQLite connection.
    """

    def __init__(self, database_url: str = DATABASE_URL):
        self.engine = make_engine(database_url)
        Base.metadata.create_all(bind=self.engine)
        self._session_factory = make_session_factory(self.engine)
        self._lock = threading.Lock()

    def create(self, prompt: str, duration: float, aspect_ratio: str, seed: Optional[int] = None) -> Job:
        job = Job(
            id=str(uuid.uuid4()),
            status=JobStatus.QUEUED.value,
            prompt=prompt,
            duration=duration,
            aspect_ratio=aspect_ratio,
            seed=seed,
        )
        with self._lock, self._session_factory() as db:
            db.add(job)
            db.commit()
            db.refresh(job)
        return job

    def get(self, job_id: str) -> Optional[Job]:
        with self._lock, self._session_factory() as db:
            return db.get(Job, job_id)

    def set_status(
        self,
        job_id: str,
        status: JobStatus,
        video_url: Optional[str] = None,
        error: Optional[str] = None,
    ) -> Job:
        """Move a job forward, replacing its status, url and error together."""
        status = JobStatus(status)
        with self._lock, self._session_factory() as db:
            job = db.get(Job, job_id)
            if job is None:
                raise JobNotFoundError(job_id)

            current = JobStatus(job.status)
            if status.rank <= current.rank:
                raise InvalidTransitionError(
                    f"Job {job_id} cannot move from {current.value} to {status.value}"
                )

            job.status = status.value
            job.video_url = video_url
            job.error = error
            job.updated_at = utc_now()
            db.commit()
            db.refresh(job)
            return job

    def list_jobs(self) -> List[Job]:
        with self._lock, self._session_factory() as db:
            return db.query(Job).order_by(Job.created_at).all()

    def count(self) -> int:
        with self._lock, self._session_factory() as db:
            return db.query(Job).count()

    def close(self):
        self.engine.dispose()


class MockVideoGenerator:
    """Pretends to render a video: sleeps for a while, then picks a sample URL."""

    def __init__(
        self,
        samples: Optional[dict] = None,
        min_delay: float = MIN_DELAY_SECONDS,
        max_delay: float = MAX_DELAY_SECONDS,
        failure_rate: float = FAILURE_RATE,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range: {min_delay}..{max_delay}")
        self.samples = samples or SAMPLE_VIDEOS
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.failure_rate = failure_rate
        self._sleep = sleep

    def generate(self, aspect_ratio: str, seed: Optional[int] = None) -> str:
        rng = random.Random(seed) if seed is not None else random.Random()

        delay = rng.uniform(self.min_delay, self.max_delay)
        logging.info(f"🎬 Simulating render for {delay:.2f}s ({aspect_ratio})")
        self._sleep(delay)

        if self.failure_rate and rng.random() < self.failure_rate:
            raise GenerationError("Simulated generation failure")

        candidates = self.samples.get(aspect_ratio) or self.samples[DEFAULT_ASPECT_RATIO]
        return rng.choice(candidates)
