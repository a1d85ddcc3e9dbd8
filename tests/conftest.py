"""
Shared test fixtures for the Nature Areas Backend test suite.
Provides a fake upstream (httpx.MockTransport), test settings and an API client.
"""
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from nature_areas.clients.http_client import UpstreamHttpClient
from nature_areas.config import Settings
from nature_areas.rate_limit import limiter

UPSTREAM_HOSTS = {
    "nvr": "nvr.test",
    "natura2000": "n2000.test",
    "ramsar": "ramsar.test",
}
API_PREFIX = "/rest/v3"

# Real SWEREF99 TM geometry in central Stockholm, about 18.059 E 59.33 N
STOCKHOLM_SWEREF_WKT = (
    "POLYGON ((674032 6580822, 674532 6580822, 674532 6581322, 674032 6581322, 674032 6580822))"
)


class FakeUpstream:
    """Canned upstream answers keyed by (api, path relative to /rest/v3)."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Dict[str, Any]]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, api: str, path: str, json: Any = None, text: Optional[str] = None, status_code: int = 200):
        body = {"json": json} if text is None else {"text": text}
        self.routes[(api, path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        api = next(name for name, host in UPSTREAM_HOSTS.items() if host == request.url.host)
        path = request.url.path[len(API_PREFIX):]
        if (api, path) not in self.routes:
            return httpx.Response(404, text="Not Found")
        status_code, body = self.routes[(api, path)]
        # A fresh response per request; bodies are single-use
        return httpx.Response(status_code, **body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self, api: str) -> List[str]:
        return [
            r.url.path[len(API_PREFIX):] for r in self.requests if r.url.host == UPSTREAM_HOSTS[api]
        ]


@pytest.fixture
def test_settings():
    """Settings pointing every upstream at a fake host."""
    return Settings(
        APP_ENV="development",
        NVV_API_BASE=f"https://{UPSTREAM_HOSTS['nvr']}{API_PREFIX}",
        N2000_API_BASE=f"https://{UPSTREAM_HOSTS['natura2000']}{API_PREFIX}",
        RAMSAR_API_BASE=f"https://{UPSTREAM_HOSTS['ramsar']}{API_PREFIX}",
        UPSTREAM_TIMEOUT_S=5.0,
    )


@pytest.fixture
def fake_upstream():
    return FakeUpstream()


@pytest.fixture
def make_http(fake_upstream, test_settings):
    """Factory for UpstreamHttpClient instances backed by the fake upstream."""
    clients = []

    def _make(api: str) -> UpstreamHttpClient:
        base_url = {
            "nvr": test_settings.NVV_API_BASE,
            "natura2000": test_settings.N2000_API_BASE,
            "ramsar": test_settings.RAMSAR_API_BASE,
        }[api]
        client = UpstreamHttpClient(api, base_url, timeout=5.0, transport=fake_upstream.transport)
        clients.append(client)
        return client

    return _make


@pytest.fixture
def test_client(fake_upstream, test_settings):
    """API client whose upstream calls all go to the fake upstream."""
    from nature_areas.main import app

    app.state.upstream_transport = fake_upstream.transport
    limiter.reset()
    with patch("nature_areas.main.get_settings", return_value=test_settings):
        with TestClient(app) as client:
            yield client
    app.state.upstream_transport = None


@pytest.fixture(autouse=True)
def suppress_logging():
    """Suppress logging during tests to reduce noise."""
    import logging
    logging.disable(logging.CRITICAL)
    yield
    logging.disable(logging.NOTSET)


def assert_error_response(response, expected_status_code: int, expected_type: str):
    """Assert the standard error envelope."""
    assert response.status_code == expected_status_code
    data = response.json()
    assert data["success"] is False
    assert data["error"]["type"] == expected_type
    assert data["error"]["message"]
