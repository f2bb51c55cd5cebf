"""
Factory functions for creating owned and delegating clients.
"""
from typing import Any, Callable, Optional

import httpx

from .config import ClientConfig, is_ssl_verify_disabled_by_env, normalize_timeout, to_httpx_timeout
from .core.abstract_client import AsyncAbstractClient, SyncAbstractClient
from .core.delegating_client import AsyncDelegatingClient, SyncDelegatingClient
from .core.owned_client import AsyncOwnedClient, SyncOwnedClient
from .headers import HeaderSet


def compose_transport(
    base: httpx.AsyncBaseTransport,
    *wrappers: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport],
) -> httpx.AsyncBaseTransport:
    """
    Compose transport wrappers around a base transport, innermost first.

    Example:
        transport = compose_transport(
            httpx.AsyncHTTPTransport(),
            lambda inner: LoggingTransport(inner),
        )
        client = AsyncOwnedClient(config, transport=transport)
    """
    transport = base
    for wrapper in wrappers:
        transport = wrapper(transport)
    return transport


def compose_sync_transport(
    base: httpx.BaseTransport,
    *wrappers: Callable[[httpx.BaseTransport], httpx.BaseTransport],
) -> httpx.BaseTransport:
    """Compose sync transport wrappers around a base transport."""
    transport = base
    for wrapper in wrappers:
        transport = wrapper(transport)
    return transport


def create_owned_client(
    config: Optional[ClientConfig] = None,
    *wrappers: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncOwnedClient:
    """
    Create an async client that owns its transport chain.

    Args:
        config: Client configuration (base_url, headers, timeout, verify)
        *wrappers: Transport wrappers applied around the base transport
        transport: Base transport. Default: a new httpx.AsyncHTTPTransport
    """
    config = config or ClientConfig()
    if transport is None:
        verify = False if is_ssl_verify_disabled_by_env() else config.verify is not False
        transport = httpx.AsyncHTTPTransport(verify=verify)
    return AsyncOwnedClient(config, transport=compose_transport(transport, *wrappers))


def create_sync_owned_client(
    config: Optional[ClientConfig] = None,
    *wrappers: Callable[[httpx.BaseTransport], httpx.BaseTransport],
    transport: Optional[httpx.BaseTransport] = None,
) -> SyncOwnedClient:
    """Create a sync client that owns its transport chain."""
    config = config or ClientConfig()
    if transport is None:
        verify = False if is_ssl_verify_disabled_by_env() else config.verify is not False
        transport = httpx.HTTPTransport(verify=verify)
    return SyncOwnedClient(config, transport=compose_sync_transport(transport, *wrappers))


def _httpx_client_kwargs(config: ClientConfig, client_kwargs: dict) -> dict:
    kwargs: dict = {
        "base_url": config.base_url or "",
        "timeout": to_httpx_timeout(normalize_timeout(config.timeout)),
    }
    if config.headers is not None:
        kwargs["headers"] = HeaderSet(config.headers).raw
    if is_ssl_verify_disabled_by_env():
        kwargs["verify"] = False
    elif config.verify is not None:
        kwargs["verify"] = config.verify
    kwargs.update(client_kwargs)
    return kwargs


def create_delegating_client(
    config: Optional[ClientConfig] = None,
    **client_kwargs: Any,
) -> AsyncDelegatingClient:
    """
    Create an httpx.AsyncClient from ``config`` and wrap it.

    The new httpx client is owned by the returned object.

    Args:
        config: Client configuration
        **client_kwargs: Additional arguments for httpx.AsyncClient
    """
    config = config or ClientConfig()
    httpx_client = httpx.AsyncClient(**_httpx_client_kwargs(config, client_kwargs))
    return AsyncDelegatingClient(httpx_client, dispose_client=True, verbose=config.verbose)


def create_sync_delegating_client(
    config: Optional[ClientConfig] = None,
    **client_kwargs: Any,
) -> SyncDelegatingClient:
    """Create an httpx.Client from ``config`` and wrap it."""
    config = config or ClientConfig()
    httpx_client = httpx.Client(**_httpx_client_kwargs(config, client_kwargs))
    return SyncDelegatingClient(httpx_client, dispose_client=True, verbose=config.verbose)


def create_client(
    config: Optional[ClientConfig] = None,
    *,
    httpx_client: Optional[httpx.AsyncClient] = None,
    dispose_client: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncAbstractClient:
    """
    Create an async client.

    Wraps ``httpx_client`` when one is given (``config`` is then ignored,
    the httpx client carries its own base_url and headers); otherwise
    builds an owned client from ``config``.
    """
    if httpx_client is not None:
        verbose = config.verbose if config else False
        return AsyncDelegatingClient(httpx_client, dispose_client, verbose=verbose)
    return create_owned_client(config, transport=transport)


def create_sync_client(
    config: Optional[ClientConfig] = None,
    *,
    httpx_client: Optional[httpx.Client] = None,
    dispose_client: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> SyncAbstractClient:
    """Create a sync client. See create_client."""
    if httpx_client is not None:
        verbose = config.verbose if config else False
        return SyncDelegatingClient(httpx_client, dispose_client, verbose=verbose)
    return create_sync_owned_client(config, transport=transport)
