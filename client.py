"""
Client for the Mock Video Generator API.

Submits a generation request, then polls the job status on a fixed interval
until the job reaches a terminal status. Transient errors while polling are
ignored and retried on the next tick.
"""

import sys
import time
import logging
import argparse
from typing import Callable, Optional

import requests

from config import (
    API_BASE_URL,
    POLL_INTERVAL_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    DEFAULT_DURATION,
    DEFAULT_ASPECT_RATIO,
    ASPECT_RATIOS,
)

logger = logging.getLogger("mockvideo.client")

TERMINAL_STATUSES = ("completed", "failed", "canceled")


class ClientError(Exception):
    """Raised when the server refuses a submission."""


class PollTimeoutError(ClientError):
    """Raised when a job is still running after the allowed number of polls."""


class VideoClient:
    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session=None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    def submit(
        self,
        prompt: str,
        duration: float = DEFAULT_DURATION,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        seed: Optional[int] = None,
    ) -> dict:
        """Send a generation request and return ``{"jobId": ..., "status": "queued"}``."""
        payload = {"prompt": prompt, "duration": duration, "aspectRatio": aspect_ratio, "seed": seed}
        response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        if 400 <= response.status_code < 500:
            raise ClientError(_error_message(response))
        response.raise_for_status()
        return response.json()

    def status(self, job_id: str) -> dict:
        """Query the job once. An unknown job comes back as a failed snapshot."""
        response = self.session.get(self.endpoint, params={"jobId": job_id}, timeout=self.timeout)
        if response.status_code != 404:
            response.raise_for_status()
        return response.json()

    def poll(
        self,
        job_id: str,
        on_update: Optional[Callable[[dict], None]] = None,
        max_polls: Optional[int] = None,
    ) -> dict:
        """Query immediately, then every ``poll_interval`` seconds until a terminal status."""
        polls = 0
        while True:
            polls += 1
            try:
                snapshot = self.status(job_id)
            except (requests.RequestException, ValueError) as e:
                # transient; try again next tick
                logger.debug("Status query for %s failed: %s", job_id, e)
            else:
                if on_update is not None:
                    on_update(snapshot)
                if snapshot.get("status") in TERMINAL_STATUSES:
                    return snapshot

            if max_polls is not None and polls >= max_polls:
                raise PollTimeoutError(f"Job {job_id} not finished after {polls} polls")
            self._sleep(self.poll_interval)

    def generate(self, prompt: str, on_update: Optional[Callable[[dict], None]] = None, max_polls: Optional[int] = None, **options) -> dict:
        job = self.submit(prompt, **options)
        return self.poll(job["jobId"], on_update=on_update, max_polls=max_polls)


def _error_message(response) -> str:
    try:
        return response.json().get("error") or f"HTTP {response.status_code}"
    except ValueError:
        return f"HTTP {response.status_code}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate a mock video and wait for the result.")
    parser.add_argument("prompt", help="Describe the video you want")
    parser.add_argument("--duration", type=float, default=DEFAULT_DURATION, help="Seconds (2-20)")
    parser.add_argument("--aspect-ratio", choices=ASPECT_RATIOS, default=DEFAULT_ASPECT_RATIO)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--base-url", default=API_BASE_URL)
    parser.add_argument("--interval", type=float, default=POLL_INTERVAL_SECONDS, help="Polling period in seconds")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    client = VideoClient(base_url=args.base_url, poll_interval=args.interval)

    last_status = None

    def report(snapshot: dict):
        nonlocal last_status
        if snapshot.get("status") != last_status:
            last_status = snapshot.get("status")
            print(f"status: {last_status}")

    try:
        job = client.submit(args.prompt, duration=args.duration, aspect_ratio=args.aspect_ratio, seed=args.seed)
    except (ClientError, requests.RequestException) as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    print(f"job: {job['jobId']}")
    result = client.poll(job["jobId"], on_update=report)

    if result.get("status") == "completed" and result.get("url"):
        print(result["url"])
        return 0
    print(result.get("error") or "Generation failed", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
