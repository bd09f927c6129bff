"""
tests/conftest.py
~~~~~~~~~~~~~~~~~
Shared pytest fixtures for the sampras test suite.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from sampras.client import ApiClient
from sampras.config import ClientConfig, Config
from sampras.session import JobSession


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> Config:
    return Config(  # type: ignore[call-arg]
        _env_file=None,
        api_url="https://recognition.example.test",
        api_key="test-key",
    )


@pytest.fixture
def client_config(default_config) -> ClientConfig:
    return default_config.get_client_config()


# ---------------------------------------------------------------------------
# Clock / sleep
# ---------------------------------------------------------------------------

class StepClock:
    """Deterministic clock: every call is 10 ms after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 15, 10, 4, 5)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(milliseconds=10)
        return current


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def sleeps() -> list[float]:
    """Record of the delays requested by a PollingController."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def make_response(data: Any, status_code: int = 200) -> MagicMock:
    """Build a mock requests.Response whose .json() returns data."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


@pytest.fixture
def http() -> MagicMock:
    """Stand-in for requests.Session; set http.request.side_effect per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def session(clock) -> JobSession:
    return JobSession(clock=clock)


@pytest.fixture
def api_client(client_config, http) -> ApiClient:
    return ApiClient(client_config, session=http)


# ---------------------------------------------------------------------------
# Service payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def ready_response() -> dict:
    return {
        "meta": {"code": 200, "message": "OK"},
        "data": {
            "shop": {"name": "Big C", "total": 245.5, "date": "2024-03-15"},
            "slip": {"bank": "KBank", "amount": 245.5, "ref": "0043213"},
        },
    }


@pytest.fixture
def pending_response() -> dict:
    return {"meta": {"code": 5031, "message": "result not ready"}}


@pytest.fixture
def respond():
    """Factory fixture: respond(data) -> mock requests.Response."""
    return make_response
