# tasks.py

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, Optional

from fastapi import Request

from config import MAX_WORKERS
from models import JobStatus
from services import JobNotFoundError, JobStore, MockVideoGenerator

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


def generate_video_task(store: JobStore, generator: MockVideoGenerator, job_id: str):
    """
    Background task that moves a job to processing, runs the mock generator
    and records the terminal status in the store.
    """
    try:
        job = store.set_status(job_id, JobStatus.PROCESSING)
        logging.info(f"📝 Worker picked up job {job_id} for prompt: '{job.prompt}'")

        video_url = generator.generate(job.aspect_ratio, seed=job.seed)

        store.set_status(job_id, JobStatus.COMPLETED, video_url=video_url)
        logging.info(f"✅ Worker finished job {job_id}. Video at: {video_url}")

    except JobNotFoundError:
        logging.error(f"❌ Worker got unknown job {job_id}")
        raise

    except Exception as e:
        logging.error(f"❌ Worker failed job {job_id}. Error: {e}")
        store.set_status(job_id, JobStatus.FAILED, error=str(e) or "Unknown error")


class JobRunner:
    """Runs generation tasks on a bounded thread pool and keeps track of them."""

    def __init__(self, store: JobStore, generator: Optional[MockVideoGenerator] = None, max_workers: int = MAX_WORKERS):
        self.store = store
        self.generator = generator or MockVideoGenerator()
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="video-worker")
        self._futures: Dict[Future, str] = {}
        self._lock = threading.Lock()

    def submit(self, job_id: str) -> Future:
        future = self._executor.submit(generate_video_task, self.store, self.generator, job_id)
        with self._lock:
            self._futures[future] = job_id
        future.add_done_callback(self._on_done)
        return future

    def _on_done(self, future: Future):
        with self._lock:
            job_id = self._futures.pop(future, None)
        if not future.cancelled() and future.exception() is not None:
            logging.error(f"❌ Task for job {job_id} raised: {future.exception()!r}")

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._futures)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Wait for every outstanding task. Returns False if some are still running."""
        with self._lock:
            futures = list(self._futures)
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    def shutdown(self, wait_for_running: bool = True):
        with self._lock:
            outstanding = dict(self._futures)

        self._executor.shutdown(wait=wait_for_running, cancel_futures=True)

        for future, job_id in outstanding.items():
            if future.cancelled():
                logging.warning(f"Job {job_id} never started; marking it failed.")
                self.store.set_status(job_id, JobStatus.FAILED, error="Server shutting down")


# Dependency for FastAPI to get the runner created in the app lifespan
def get_runner(request: Request) -> JobRunner:
    return request.app.state.runner
