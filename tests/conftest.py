"""Shared fixtures for the API, store and worker tests.

Puts the project root on the path so the flat modules (``main``, ``services``,
``tasks`` ...) import the same way they do when the server runs.
"""

import os
import sys
import time
import threading

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from main import create_app  # noqa: E402
from services import JobStore, MockVideoGenerator  # noqa: E402


class Gate:
    """Stands in for time.sleep so a test decides when a render finishes."""

    def __init__(self):
        self._event = threading.Event()
        self.calls = []

    def sleep(self, seconds):
        self.calls.append(seconds)
        self._event.wait(timeout=5)

    def open(self):
        self._event.set()


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def store():
    s = JobStore("sqlite://")
    yield s
    s.close()


@pytest.fixture
def instant_generator():
    return MockVideoGenerator(min_delay=0, max_delay=0)


@pytest.fixture
def gate():
    g = Gate()
    yield g
    g.open()


@pytest.fixture
def gated_generator(gate):
    return MockVideoGenerator(min_delay=0, max_delay=0, sleep=gate.sleep)


@pytest.fixture
def client(instant_generator):
    app = create_app(database_url="sqlite://", generator=instant_generator, max_workers=2)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def gated_client(gated_generator):
    app = create_app(database_url="sqlite://", generator=gated_generator, max_workers=1)
    with TestClient(app) as c:
        yield c
