"""
Abstract client contract shared by the owned and delegating clients.

A client exposes a mutable ``base_address`` and ``default_headers`` and
normalizes every request against them before handing it to a transport.
Subclasses only decide where that state lives and how a normalized
request is dispatched.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

import httpx

from ..headers import HeaderSet, HeaderSource
from ..printer import print_request_panel, print_response_panel
from ..types import HttpMethod, RequestMessage, URLTypes
from .request_normalizer import normalize_request

logger = logging.getLogger("fetch_abstract_client.abstract_client")

TimeoutTypes = Union[httpx.Timeout, float, None]


def _build_message(
    method: HttpMethod,
    url: Optional[URLTypes],
    headers: Optional[HeaderSource],
    content: Optional[Union[str, bytes]],
    json: Optional[Any],
) -> RequestMessage:
    return RequestMessage(
        method=method,
        url=url,
        headers=HeaderSet(headers).raw,
        content=content,
        json=json,
    )


def timeout_extension(timeout: TimeoutTypes, default: httpx.Timeout) -> Dict[str, Any]:
    """Build the httpx ``timeout`` request extension."""
    effective = default if timeout is None else httpx.Timeout(timeout)
    return {"timeout": effective.as_dict()}


class _ClientState:
    """Closed-state bookkeeping common to every client."""

    _closed: bool = False
    _verbose: bool = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client has been closed")

    def _prepare(
        self,
        request: RequestMessage,
        base_address: Optional[httpx.URL],
        default_headers: HeaderSet,
    ) -> None:
        logger.debug(
            f"{type(self).__name__}.send: method={request.method}, url={request.url!r}, "
            f"base_address={base_address}"
        )
        normalize_request(request, base_address, default_headers)

    def _trace_request(self, request: httpx.Request) -> None:
        if self._verbose:
            print_request_panel(request)

    def _trace_response(self, response: httpx.Response) -> None:
        logger.debug(
            f"{type(self).__name__}.send: {response.status_code} {response.request.url}"
        )
        if self._verbose:
            print_response_panel(response)


class AsyncAbstractClient(_ClientState, ABC):
    """Asynchronous client contract."""

    @property
    @abstractmethod
    def base_address(self) -> Optional[httpx.URL]:
        """Absolute URL used to resolve absent or relative request URLs."""
        ...

    @base_address.setter
    @abstractmethod
    def base_address(self, value: Optional[URLTypes]) -> None:
        ...

    @property
    @abstractmethod
    def default_headers(self) -> HeaderSet:
        """Headers appended to every outgoing request."""
        ...

    @default_headers.setter
    @abstractmethod
    def default_headers(self, value: HeaderSource) -> None:
        ...

    @abstractmethod
    async def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        """Hand a normalized request to the transport."""
        ...

    @abstractmethod
    async def _release(self) -> None:
        """Release whatever this client owns."""
        ...

    async def send(
        self,
        request: RequestMessage,
        *,
        timeout: TimeoutTypes = None,
    ) -> httpx.Response:
        """
        Normalize ``request`` and send it through the transport.

        Raises:
            ConfigurationError: If the request URL cannot be resolved.
            RuntimeError: If the client has been closed.
        """
        self._ensure_open()
        self._prepare(request, self.base_address, self.default_headers)
        return await self._dispatch(request, timeout)

    async def request(
        self,
        method: HttpMethod = "GET",
        url: Optional[URLTypes] = None,
        *,
        headers: Optional[HeaderSource] = None,
        content: Optional[Union[str, bytes]] = None,
        json: Optional[Any] = None,
        timeout: TimeoutTypes = None,
    ) -> httpx.Response:
        """Build a request message and send it."""
        message = _build_message(method, url, headers, content, json)
        return await self.send(message, timeout=timeout)

    async def get(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """POST request."""
        return await self.request("POST", url, **kwargs)

    async def put(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """PUT request."""
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """PATCH request."""
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """DELETE request."""
        return await self.request("DELETE", url, **kwargs)

    async def close(self) -> None:
        """Close the client. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        await self._release()

    async def __aenter__(self):
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()


class SyncAbstractClient(_ClientState, ABC):
    """Synchronous client contract."""

    @property
    @abstractmethod
    def base_address(self) -> Optional[httpx.URL]:
        """Absolute URL used to resolve absent or relative request URLs."""
        ...

    @base_address.setter
    @abstractmethod
    def base_address(self, value: Optional[URLTypes]) -> None:
        ...

    @property
    @abstractmethod
    def default_headers(self) -> HeaderSet:
        """Headers appended to every outgoing request."""
        ...

    @default_headers.setter
    @abstractmethod
    def default_headers(self, value: HeaderSource) -> None:
        ...

    @abstractmethod
    def _dispatch(
        self,
        request: RequestMessage,
        timeout: TimeoutTypes,
    ) -> httpx.Response:
        """Hand a normalized request to the transport."""
        ...

    @abstractmethod
    def _release(self) -> None:
        """Release whatever this client owns."""
        ...

    def send(
        self,
        request: RequestMessage,
        *,
        timeout: TimeoutTypes = None,
    ) -> httpx.Response:
        """
        Normalize ``request`` and send it through the transport.

        Raises:
            ConfigurationError: If the request URL cannot be resolved.
            RuntimeError: If the client has been closed.
        """
        self._ensure_open()
        self._prepare(request, self.base_address, self.default_headers)
        return self._dispatch(request, timeout)

    def request(
        self,
        method: HttpMethod = "GET",
        url: Optional[URLTypes] = None,
        *,
        headers: Optional[HeaderSource] = None,
        content: Optional[Union[str, bytes]] = None,
        json: Optional[Any] = None,
        timeout: TimeoutTypes = None,
    ) -> httpx.Response:
        """Build a request message and send it."""
        message = _build_message(method, url, headers, content, json)
        return self.send(message, timeout=timeout)

    def get(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """GET request."""
        return self.request("GET", url, **kwargs)

    def post(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """POST request."""
        return self.request("POST", url, **kwargs)

    def put(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """PUT request."""
        return self.request("PUT", url, **kwargs)

    def patch(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """PATCH request."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: Optional[URLTypes] = None, **kwargs: Any) -> httpx.Response:
        """DELETE request."""
        return self.request("DELETE", url, **kwargs)

    def close(self) -> None:
        """Close the client. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._release()

    def __enter__(self):
        """Enter sync context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit sync context manager."""
        self.close()
