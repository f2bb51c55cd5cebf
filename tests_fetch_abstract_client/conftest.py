"""
Shared fixtures for fetch_abstract_client tests.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

import httpx

from fetch_abstract_client.config import ClientConfig
from fetch_abstract_client.headers import HeaderSet


class RecordingHandler:
    """httpx.MockTransport handler that records every request it sees."""

    def __init__(self, status_code: int = 200, json_body=None):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {"success": True}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def handler():
    """Recording handler returning 200 with a JSON body."""
    return RecordingHandler()


@pytest.fixture
def mock_transport(handler):
    """httpx.MockTransport usable from both sync and async code."""
    return httpx.MockTransport(handler)


@pytest.fixture
def base_address():
    return httpx.URL("https://api.example.com/v1/")


@pytest.fixture
def json_defaults():
    """Default headers holding a single Accept value."""
    return HeaderSet({"Accept": ["application/json"]})


@pytest.fixture
def sample_client_config():
    """Sample ClientConfig for testing."""
    return ClientConfig(
        base_url="https://api.example.com/v1/",
        headers={"Accept": "application/json"},
    )


@pytest.fixture
def mock_async_transport():
    """Mock httpx.AsyncBaseTransport for testing."""
    transport = AsyncMock(spec=httpx.AsyncBaseTransport)
    transport.aclose = AsyncMock()
    return transport


@pytest.fixture
def mock_sync_transport():
    """Mock httpx.BaseTransport for testing."""
    transport = MagicMock(spec=httpx.BaseTransport)
    transport.close = MagicMock()
    return transport
