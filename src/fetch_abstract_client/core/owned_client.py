"""
Clients that own their httpx transport.
"""
import logging
from typing import Optional

import httpx

from ..config import ClientConfig, coerce_base_address, resolve_config, to_httpx_timeout
from ..headers import HeaderSet, HeaderSource
from ..types import RequestMessage, URLTypes
from .abstract_client import AsyncAbstractClient, SyncAbstractClient, TimeoutTypes, timeout_extension

logger = logging.getLogger("fetch_abstract_client.owned_client")


class AsyncOwnedClient(AsyncAbstractClient):
    """
    Asynchronous client that owns its transport.

    ``base_address`` and ``default_headers`` are private to this client.
    The transport (created from the config, or passed in) is always closed
    together with the client.

    Example:
        async with AsyncOwnedClient(ClientConfig(base_url="https://api.example.com/v1/")) as client:
            response = await client.get("users/5")
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        resolved = resolve_config(config)
        self._base_address = resolved.base_address
        self._default_headers = resolved.headers
        self._timeout = to_httpx_timeout(resolved.timeout)
        self._verbose = resolved.verbose
        if transport is not None:
            self._transport = transport
        else:
            self._transport = httpx.AsyncHTTPTransport(verify=resolved.verify)
        self._closed = False

    @property
    def base_address(self) -> Optional[httpx.URL]:
        return self._base_address

    @base_address.setter
    def base_address(self, value: Optional[URLTypes]) -> None:
        self._base_address = coerce_base_address(value)

    @property
    def default_headers(self) -> HeaderSet:
        return self._default_headers

    @default_headers.setter
    def default_headers(self, value: HeaderSource) -> None:
        self._default_headers = value if isinstance(value, HeaderSet) else HeaderSet(value)

    @property
    def transport(self) -> httpx.AsyncBaseTransport:
        return self._transport

    async def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        httpx_request = request.to_httpx_request(timeout_extension(timeout, self._timeout))
        self._trace_request(httpx_request)

        response = await self._transport.handle_async_request(httpx_request)
        response.request = httpx_request
        try:
            await response.aread()
        except BaseException:
            await response.aclose()
            raise

        self._trace_response(response)
        return response

    async def _release(self) -> None:
        logger.debug("AsyncOwnedClient.close: closing owned transport")
        await self._transport.aclose()


class SyncOwnedClient(SyncAbstractClient):
    """Synchronous client that owns its transport."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        resolved = resolve_config(config)
        self._base_address = resolved.base_address
        self._default_headers = resolved.headers
        self._timeout = to_httpx_timeout(resolved.timeout)
        self._verbose = resolved.verbose
        if transport is not None:
            self._transport = transport
        else:
            self._transport = httpx.HTTPTransport(verify=resolved.verify)
        self._closed = False

    @property
    def base_address(self) -> Optional[httpx.URL]:
        return self._base_address

    @base_address.setter
    def base_address(self, value: Optional[URLTypes]) -> None:
        self._base_address = coerce_base_address(value)

    @property
    def default_headers(self) -> HeaderSet:
        return self._default_headers

    @default_headers.setter
    def default_headers(self, value: HeaderSource) -> None:
        self._default_headers = value if isinstance(value, HeaderSet) else HeaderSet(value)

    @property
    def transport(self) -> httpx.BaseTransport:
        return self._transport

    def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        httpx_request = request.to_httpx_request(timeout_extension(timeout, self._timeout))
        self._trace_request(httpx_request)

        response = self._transport.handle_request(httpx_request)
        response.request = httpx_request
        try:
            response.read()
        except BaseException:
            response.close()
            raise

        self._trace_response(response)
        return response

    def _release(self) -> None:
        logger.debug("SyncOwnedClient.close: closing owned transport")
        self._transport.close()
