"""Pytest fixtures and configuration.

Provides shared fixtures for the tool adapter tests. No test talks to the
real Finnhub API: the HTTP session is always a mock.
"""
import sys
from pathlib import Path
from typing import Callable
from unittest.mock import Mock

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from finnhub_tools.config import APIConfig  # noqa: E402

BASE_URL = "https://finnhub.test/api/v1"


@pytest.fixture
def api_config() -> APIConfig:
    """Config pointing at a fake base URL."""
    return APIConfig(base_url=BASE_URL)


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Factory for real requests.Response objects with a preloaded body.

    Example:
        def test_ok(make_response):
            resp = make_response(200, b'{"id": 1}')
    """
    def _make(status: int = 200, body: bytes = b"") -> requests.Response:
        resp = requests.Response()
        resp.status_code = status
        resp._content = body
        # Body is already in memory; close() must not touch the raw stream
        resp._content_consumed = True
        return resp

    return _make


@pytest.fixture
def base_session() -> requests.Session:
    """Real session whose request preparation the mock session delegates to."""
    return requests.Session()


@pytest.fixture
def session(base_session: requests.Session) -> Mock:
    """Mock HTTP session. Set session.send.return_value / side_effect per test.

    Request preparation and environment merging run on a real session, so
    prepared URLs and headers are exactly what requests would send.
    """
    mock = Mock(spec=requests.Session)
    mock.prepare_request.side_effect = base_session.prepare_request
    mock.merge_environment_settings.side_effect = base_session.merge_environment_settings
    return mock
