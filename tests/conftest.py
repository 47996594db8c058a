"""Shared fixtures for network and auth tests."""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Union
from unittest import mock

import pytest
import requests


def build_response(
    status_code: int,
    body: Union[bytes, str, dict, None] = b"",
    url: str = "http://localhost:5246/api/auth/login",
) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    response.url = url
    return response


def envelope(status: str = "Success", message: Any = None, data: Any = None) -> dict:
    """Build a response envelope body."""
    return {"status": status, "message": message, "data": data}


@pytest.fixture
def make_response():
    """Factory for requests.Response objects."""
    return build_response


@pytest.fixture
def mock_session():
    """Mocked requests session; configure ``send`` per test."""
    session = mock.Mock(spec=requests.Session)
    session.merge_environment_settings.return_value = {
        "proxies": {},
        "stream": False,
        "verify": True,
        "cert": None,
    }
    return session


NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()
