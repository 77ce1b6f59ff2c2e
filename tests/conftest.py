"""Shared fixtures: a recording stand-in for ``requests.Session``."""
from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from apply_portal.models import ApplicationForm, ResumeFile

PDF = "application/pdf"


def make_response(status: int = 200, body: Any = None, text: str | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    if text is None:
        text = json.dumps(body if body is not None else {})
    r._content = text.encode("utf-8")
    r.encoding = "utf-8"
    return r


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *replies: requests.Response | Exception) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, **kwargs})
        if not self.replies:
            raise AssertionError(f"unexpected POST to {url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def graphql_reply(data: Any) -> requests.Response:
    return make_response(200, {"data": data})


@pytest.fixture
def job_record() -> dict[str, Any]:
    return {
        "id": "abc-123",
        "client_id": "c-1",
        "job_role": "Backend Engineer",
        "description": "Build APIs.",
        "location": "Bangalore",
        "ctc": "Competitive",
        "ctc_minimum": 1200000,
        "ctc_maximum": 1800000,
        "experience_minimum_needed": 2,
        "experience_maximum_needed": 5,
        "work_mode": "hybrid",
        "number_of_openings": 3,
        "created_at": "2024-05-01T10:00:00+00:00",
        "status": "active",
    }


@pytest.fixture
def resume() -> ResumeFile:
    return ResumeFile(filename="cv.pdf", content_type=PDF, data=b"%PDF-1.4" + b"0" * 2_000_000)


@pytest.fixture
def form() -> ApplicationForm:
    return ApplicationForm(name="Pat Lee", email="pat@example.com", phone="+91 98765 43210")
