"""
Clients that delegate to an existing httpx client.

The wrapped client's ``base_url`` and ``headers`` are the delegating
client's ``base_address`` and ``default_headers``: nothing is copied, so a
change made through either object is visible through the other.
"""
import logging
from typing import Optional

import httpx

from ..config import coerce_base_address
from ..headers import HeaderSet, HeaderSource
from ..types import RequestMessage, URLTypes
from .abstract_client import AsyncAbstractClient, SyncAbstractClient, TimeoutTypes, timeout_extension

logger = logging.getLogger("fetch_abstract_client.delegating_client")


def _read_base_url(client: httpx.AsyncClient | httpx.Client) -> Optional[httpx.URL]:
    base_url = client.base_url
    return base_url if str(base_url) else None


def _write_base_url(client: httpx.AsyncClient | httpx.Client, value: Optional[URLTypes]) -> None:
    base_address = coerce_base_address(value)
    client.base_url = base_address if base_address is not None else ""


def _apply_client_cookies(client: httpx.AsyncClient | httpx.Client, request: httpx.Request) -> None:
    # httpx only merges the cookie jar in build_request, not in send
    if "cookie" not in request.headers:
        client.cookies.set_cookie_header(request)


class AsyncDelegatingClient(AsyncAbstractClient):
    """
    Asynchronous client forwarding to a caller-supplied httpx.AsyncClient.

    Args:
        client: The httpx client to wrap. When omitted a new one is created
            and owned by this object.
        dispose_client: True to close ``client`` when this object is closed,
            False if the caller keeps using it. Fixed at construction.
        verbose: Print request/response panels.

    Example:
        shared = httpx.AsyncClient(base_url="https://api.example.com/v1/")
        client = AsyncDelegatingClient(shared)
        response = await client.get("users/5")
        await client.close()  # shared stays open
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        dispose_client: bool = False,
        *,
        verbose: bool = False,
    ):
        if client is None:
            client = httpx.AsyncClient()
            dispose_client = True
        self._client = client
        self._dispose_client = dispose_client
        self._verbose = verbose
        self._closed = False

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def owns_client(self) -> bool:
        return self._dispose_client

    @property
    def base_address(self) -> Optional[httpx.URL]:
        return _read_base_url(self._client)

    @base_address.setter
    def base_address(self, value: Optional[URLTypes]) -> None:
        _write_base_url(self._client, value)

    @property
    def default_headers(self) -> HeaderSet:
        return HeaderSet.wrap(self._client.headers)

    @default_headers.setter
    def default_headers(self, value: HeaderSource) -> None:
        self._client.headers = HeaderSet(value).raw

    async def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        httpx_request = request.to_httpx_request(timeout_extension(timeout, self._client.timeout))
        _apply_client_cookies(self._client, httpx_request)
        self._trace_request(httpx_request)

        response = await self._client.send(httpx_request)

        self._trace_response(response)
        return response

    async def _release(self) -> None:
        if self._dispose_client:
            logger.debug("AsyncDelegatingClient.close: closing wrapped httpx client")
            await self._client.aclose()
        else:
            logger.debug("AsyncDelegatingClient.close: leaving wrapped httpx client open")


class SyncDelegatingClient(SyncAbstractClient):
    """Synchronous client forwarding to a caller-supplied httpx.Client."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        dispose_client: bool = False,
        *,
        verbose: bool = False,
    ):
        if client is None:
            client = httpx.Client()
            dispose_client = True
        self._client = client
        self._dispose_client = dispose_client
        self._verbose = verbose
        self._closed = False

    @property
    def client(self) -> httpx.Client:
        return self._client

    @property
    def owns_client(self) -> bool:
        return self._dispose_client

    @property
    def base_address(self) -> Optional[httpx.URL]:
        return _read_base_url(self._client)

    @base_address.setter
    def base_address(self, value: Optional[URLTypes]) -> None:
        _write_base_url(self._client, value)

    @property
    def default_headers(self) -> HeaderSet:
        return HeaderSet.wrap(self._client.headers)

    @default_headers.setter
    def default_headers(self, value: HeaderSource) -> None:
        self._client.headers = HeaderSet(value).raw

    def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        httpx_request = request.to_httpx_request(timeout_extension(timeout, self._client.timeout))
        _apply_client_cookies(self._client, httpx_request)
        self._trace_request(httpx_request)

        response = self._client.send(httpx_request)

        self._trace_response(response)
        return response

    def _release(self) -> None:
        if self._dispose_client:
            logger.debug("SyncDelegatingClient.close: closing wrapped httpx client")
            self._client.close()
        else:
            logger.debug("SyncDelegatingClient.close: leaving wrapped httpx client open")
