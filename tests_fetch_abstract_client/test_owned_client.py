"""
Tests for owned_client.py (both async and sync clients)
Logic testing: Decision/Branch, State Transition, Path coverage
"""
import json

import pytest
from unittest.mock import patch

import httpx

from fetch_abstract_client.config import ClientConfig, TimeoutConfig
from fetch_abstract_client.core.owned_client import AsyncOwnedClient, SyncOwnedClient
from fetch_abstract_client.errors import ConfigurationError
from fetch_abstract_client.headers import HeaderSet
from fetch_abstract_client.types import RequestMessage


class TestAsyncOwnedClient:
    """Tests for AsyncOwnedClient class."""

    # Path: constructor config resolution
    def test_init_config_resolution(self, sample_client_config, mock_transport):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        assert str(client.base_address) == "https://api.example.com/v1/"
        assert client.default_headers.get("accept") == "application/json"
        assert client.transport is mock_transport
        assert client.is_closed is False

    # Boundary: default headers start empty
    def test_init_defaults(self, mock_transport):
        client = AsyncOwnedClient(transport=mock_transport)
        assert client.base_address is None
        assert len(client.default_headers) == 0

    # Path: transport created when none is given
    def test_init_creates_transport(self, monkeypatch):
        monkeypatch.delenv("NODE_TLS_REJECT_UNAUTHORIZED", raising=False)
        monkeypatch.delenv("SSL_CERT_VERIFY", raising=False)
        with patch("fetch_abstract_client.core.owned_client.httpx.AsyncHTTPTransport") as transport_cls:
            client = AsyncOwnedClient(ClientConfig(verify=False))
        transport_cls.assert_called_once_with(verify=False)
        assert client.transport is transport_cls.return_value

    # Error Path: invalid config
    def test_init_invalid_config(self):
        with pytest.raises(ValueError, match="Invalid base_url"):
            AsyncOwnedClient(ClientConfig(base_url="users"))

    # Happy Path: relative URL and header merge
    @pytest.mark.asyncio
    async def test_get_normalizes_request(self, sample_client_config, mock_transport, handler):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        response = await client.get("users/5", headers={"Accept": "text/plain"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        sent = handler.last_request
        assert sent.method == "GET"
        assert str(sent.url) == "https://api.example.com/v1/users/5"
        assert sent.headers.get_list("accept") == ["text/plain", "application/json"]

    # Path: response carries the request that was sent
    @pytest.mark.asyncio
    async def test_response_request_attached(self, sample_client_config, mock_transport, handler):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        response = await client.get("users")
        assert response.request is handler.last_request

    # Path: absent URL uses base address
    @pytest.mark.asyncio
    async def test_get_without_url(self, mock_transport, handler):
        client = AsyncOwnedClient(
            ClientConfig(base_url="https://api.example.com/health"),
            transport=mock_transport,
        )
        await client.get()
        assert str(handler.last_request.url) == "https://api.example.com/health"

    # Path: send with a prepared message mutates it
    @pytest.mark.asyncio
    async def test_send_mutates_message(self, sample_client_config, mock_transport):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        message = RequestMessage(method="DELETE", url="users/7")
        await client.send(message)

        assert str(message.url) == "https://api.example.com/v1/users/7"
        assert message.headers.get("accept") == "application/json"

    # Path: post with json body
    @pytest.mark.asyncio
    async def test_post_json(self, sample_client_config, mock_transport, handler):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        await client.post("users", json={"name": "test"})

        sent = handler.last_request
        assert sent.method == "POST"
        assert json.loads(sent.content) == {"name": "test"}

    # Path: method helpers
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["put", "patch", "delete"])
    async def test_method_helpers(self, sample_client_config, mock_transport, handler, method):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        await getattr(client, method)("users/1")
        assert handler.last_request.method == method.upper()

    # Error Path: no base address
    @pytest.mark.asyncio
    async def test_missing_base_address(self, mock_transport, handler):
        client = AsyncOwnedClient(transport=mock_transport)
        with pytest.raises(ConfigurationError):
            await client.get("users")
        assert handler.requests == []

    # Decision: absolute URL needs no base address
    @pytest.mark.asyncio
    async def test_absolute_url_without_base(self, mock_transport, handler):
        client = AsyncOwnedClient(transport=mock_transport)
        await client.get("https://other.example.com/ping")
        assert str(handler.last_request.url) == "https://other.example.com/ping"

    # State: base address changed between calls
    @pytest.mark.asyncio
    async def test_base_address_setter(self, mock_transport, handler):
        client = AsyncOwnedClient(transport=mock_transport)
        client.base_address = "https://eu.example.com/api/"
        await client.get("items")
        assert str(handler.last_request.url) == "https://eu.example.com/api/items"

        client.base_address = None
        assert client.base_address is None

    # Error Path: relative base address rejected
    def test_base_address_setter_invalid(self, mock_transport):
        client = AsyncOwnedClient(transport=mock_transport)
        with pytest.raises(ValueError):
            client.base_address = "relative/path"

    # State: default headers mutated and replaced
    @pytest.mark.asyncio
    async def test_default_headers_mutation(self, sample_client_config, mock_transport, handler):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        client.default_headers.add("X-Trace", "on")
        await client.get("users")
        assert handler.last_request.headers["x-trace"] == "on"

        client.default_headers = {"X-Only": "1"}
        assert isinstance(client.default_headers, HeaderSet)
        await client.get("users")
        assert "x-trace" not in handler.last_request.headers
        assert handler.last_request.headers["x-only"] == "1"

    # Decision: timeout from config forwarded as extension
    @pytest.mark.asyncio
    async def test_default_timeout_extension(self, mock_transport, handler):
        config = ClientConfig(
            base_url="https://api.example.com/",
            timeout=TimeoutConfig(connect=1.0, read=2.0, write=3.0),
        )
        client = AsyncOwnedClient(config, transport=mock_transport)
        await client.get("users")
        assert handler.last_request.extensions["timeout"] == {
            "connect": 1.0,
            "read": 2.0,
            "write": 3.0,
            "pool": 1.0,
        }

    # Decision: per-call timeout overrides config
    @pytest.mark.asyncio
    async def test_call_timeout_extension(self, sample_client_config, mock_transport, handler):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        await client.get("users", timeout=2.5)
        assert handler.last_request.extensions["timeout"] == httpx.Timeout(2.5).as_dict()

    # Error Path: transport errors pass through unchanged
    @pytest.mark.asyncio
    async def test_transport_error_passthrough(self, sample_client_config):
        error = httpx.ConnectError("connection refused")

        def failing_handler(request):
            raise error

        client = AsyncOwnedClient(sample_client_config, transport=httpx.MockTransport(failing_handler))
        with pytest.raises(httpx.ConnectError) as exc_info:
            await client.get("users")
        assert exc_info.value is error

    # Decision: error status is returned, not raised
    @pytest.mark.asyncio
    async def test_error_status_returned(self, sample_client_config):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        client = AsyncOwnedClient(sample_client_config, transport=transport)
        response = await client.get("users")
        assert response.status_code == 503

    # State: close releases the transport once
    @pytest.mark.asyncio
    async def test_close(self, mock_async_transport):
        client = AsyncOwnedClient(transport=mock_async_transport)
        await client.close()
        await client.close()

        assert client.is_closed is True
        mock_async_transport.aclose.assert_awaited_once()

    # State: request on closed client
    @pytest.mark.asyncio
    async def test_request_closed_client(self, sample_client_config, mock_transport):
        client = AsyncOwnedClient(sample_client_config, transport=mock_transport)
        await client.close()
        with pytest.raises(RuntimeError, match="Client has been closed"):
            await client.get("users")

    # State: context manager closes the client
    @pytest.mark.asyncio
    async def test_context_manager(self, mock_async_transport):
        async with AsyncOwnedClient(transport=mock_async_transport) as client:
            assert client.is_closed is False
        assert client.is_closed is True
        mock_async_transport.aclose.assert_awaited_once()

    # Path: verbose prints request and response panels
    @pytest.mark.asyncio
    async def test_verbose(self, mock_transport):
        config = ClientConfig(base_url="https://api.example.com/", verbose=True)
        client = AsyncOwnedClient(config, transport=mock_transport)
        with patch("fetch_abstract_client.core.abstract_client.print_request_panel") as request_panel, \
                patch("fetch_abstract_client.core.abstract_client.print_response_panel") as response_panel:
            await client.get("users")
        request_panel.assert_called_once()
        response_panel.assert_called_once()


class TestSyncOwnedClient:
    """Tests for SyncOwnedClient class."""

    def test_init_defaults(self, mock_transport):
        client = SyncOwnedClient(transport=mock_transport)
        assert client.base_address is None
        assert len(client.default_headers) == 0

    def test_get_normalizes_request(self, sample_client_config, mock_transport, handler):
        client = SyncOwnedClient(sample_client_config, transport=mock_transport)
        response = client.get("users/5", headers={"Accept": "text/plain"})

        assert response.status_code == 200
        sent = handler.last_request
        assert str(sent.url) == "https://api.example.com/v1/users/5"
        assert sent.headers.get_list("accept") == ["text/plain", "application/json"]

    def test_missing_base_address(self, mock_transport, handler):
        client = SyncOwnedClient(transport=mock_transport)
        with pytest.raises(ConfigurationError):
            client.get()
        assert handler.requests == []

    def test_transport_error_passthrough(self, sample_client_config):
        def failing_handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = SyncOwnedClient(sample_client_config, transport=httpx.MockTransport(failing_handler))
        with pytest.raises(httpx.ReadTimeout):
            client.get("users")

    def test_close(self, mock_sync_transport):
        client = SyncOwnedClient(transport=mock_sync_transport)
        client.close()
        client.close()
        mock_sync_transport.close.assert_called_once()

    def test_request_closed_client(self, sample_client_config, mock_transport):
        client = SyncOwnedClient(sample_client_config, transport=mock_transport)
        client.close()
        with pytest.raises(RuntimeError, match="Client has been closed"):
            client.get("users")

    def test_context_manager(self, mock_sync_transport):
        with SyncOwnedClient(transport=mock_sync_transport) as client:
            assert client.is_closed is False
        assert client.is_closed is True
        mock_sync_transport.close.assert_called_once()
