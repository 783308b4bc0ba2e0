from unittest.mock import patch

import pytest
import requests

import client as client_module
from client import ClientError, PollTimeoutError, VideoClient
from config import SAMPLE_VIDEOS


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Replays scripted responses; an exception in the script is raised instead."""

    def __init__(self, post=None, get=()):
        self._post = post
        self._get = list(get)
        self.posted = []
        self.get_calls = 0

    def post(self, url, json=None, timeout=None):
        self.posted.append((url, json))
        return self._post

    def get(self, url, params=None, timeout=None):
        self.get_calls += 1
        item = self._get.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(session, sleeps=None):
    return VideoClient(
        base_url="http://testserver/",
        session=session,
        poll_interval=1.5,
        sleep=(sleeps.append if sleeps is not None else lambda s: None),
    )


def test_submit_sends_camel_case_payload():
    session = FakeSession(post=FakeResponse(payload={"jobId": "abc", "status": "queued"}))

    job = _client(session).submit("a lighthouse in a storm", duration=4, aspect_ratio="9:16", seed=3)

    assert job == {"jobId": "abc", "status": "queued"}
    url, body = session.posted[0]
    assert url == "http://testserver/api/generate"
    assert body == {"prompt": "a lighthouse in a storm", "duration": 4, "aspectRatio": "9:16", "seed": 3}


def test_submit_raises_server_message_on_400():
    session = FakeSession(post=FakeResponse(400, {"error": "Prompt too short"}))

    with pytest.raises(ClientError, match="Prompt too short"):
        _client(session).submit("hi")


def test_poll_stops_at_first_terminal_status():
    session = FakeSession(get=[
        FakeResponse(payload={"status": "queued"}),
        FakeResponse(payload={"status": "processing"}),
        FakeResponse(payload={"status": "completed", "url": "https://example.com/v.mp4"}),
        FakeResponse(payload={"status": "completed", "url": "https://example.com/other.mp4"}),
    ])
    sleeps = []
    updates = []

    result = _client(session, sleeps).poll("abc", on_update=updates.append)

    assert result["url"] == "https://example.com/v.mp4"
    assert session.get_calls == 3
    assert [u["status"] for u in updates] == ["queued", "processing", "completed"]
    # first query is immediate, then one wait per tick
    assert sleeps == [1.5, 1.5]


def test_poll_swallows_transient_errors():
    session = FakeSession(get=[
        requests.ConnectionError("connection refused"),
        FakeResponse(502),
        FakeResponse(200, None),
        FakeResponse(payload={"status": "failed", "error": "Simulated generation failure"}),
    ])

    result = _client(session).poll("abc")

    assert result == {"status": "failed", "error": "Simulated generation failure"}
    assert session.get_calls == 4


def test_poll_treats_unknown_job_as_terminal():
    session = FakeSession(get=[FakeResponse(404, {"status": "failed", "error": "Job not found"})])

    assert _client(session).poll("missing") == {"status": "failed", "error": "Job not found"}


def test_poll_gives_up_after_max_polls():
    session = FakeSession(get=[FakeResponse(payload={"status": "processing"})] * 3)

    with pytest.raises(PollTimeoutError):
        _client(session).poll("abc", max_polls=3)
    assert session.get_calls == 3


def test_generate_against_running_app(client):
    video_client = VideoClient(base_url="http://testserver", session=client, poll_interval=0, sleep=lambda s: None)

    result = video_client.generate("a paper boat drifting downstream", aspect_ratio="1:1", max_polls=500)

    assert result["status"] == "completed"
    assert result["url"] in SAMPLE_VIDEOS["1:1"]


def test_cli_prints_url_on_success(capsys):
    with patch.object(client_module.VideoClient, "submit", return_value={"jobId": "abc", "status": "queued"}), \
         patch.object(client_module.VideoClient, "poll", return_value={"status": "completed", "url": "https://example.com/v.mp4"}):
        code = client_module.main(["a red kite over the hills", "--aspect-ratio", "4:3"])

    assert code == 0
    assert "https://example.com/v.mp4" in capsys.readouterr().out


def test_cli_reports_failure(capsys):
    with patch.object(client_module.VideoClient, "submit", side_effect=ClientError("Prompt too short")):
        code = client_module.main(["hi"])

    assert code == 1
    assert "Prompt too short" in capsys.readouterr().err
