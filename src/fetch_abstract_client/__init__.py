"""
Request-normalizing HTTP clients on top of httpx.

Every client resolves absent or relative request URLs against a base
address and appends default headers without touching the ones the caller
set. A client either owns its transport (AsyncOwnedClient) or delegates to
an existing httpx client (AsyncDelegatingClient).
"""
from .errors import ConfigurationError
from .types import HttpMethod, RequestMessage
from .headers import HeaderSet, append_header, append_headers
from .config import (
    ClientConfig,
    TimeoutConfig,
    ResolvedConfig,
    resolve_config,
)
from .core.request_normalizer import (
    is_relative_url,
    merge_default_headers,
    normalize_request,
    resolve_request_url,
)
from .core.abstract_client import AsyncAbstractClient, SyncAbstractClient
from .core.owned_client import AsyncOwnedClient, SyncOwnedClient
from .core.delegating_client import AsyncDelegatingClient, SyncDelegatingClient
from .factory import (
    compose_transport,
    compose_sync_transport,
    create_client,
    create_sync_client,
    create_owned_client,
    create_sync_owned_client,
    create_delegating_client,
    create_sync_delegating_client,
)

__all__ = [
    # Errors
    "ConfigurationError",
    # Types
    "HttpMethod",
    "RequestMessage",
    # Headers
    "HeaderSet",
    "append_header",
    "append_headers",
    # Config
    "ClientConfig",
    "TimeoutConfig",
    "ResolvedConfig",
    "resolve_config",
    # Normalization
    "is_relative_url",
    "merge_default_headers",
    "normalize_request",
    "resolve_request_url",
    # Clients
    "AsyncAbstractClient",
    "SyncAbstractClient",
    "AsyncOwnedClient",
    "SyncOwnedClient",
    "AsyncDelegatingClient",
    "SyncDelegatingClient",
    # Factory
    "compose_transport",
    "compose_sync_transport",
    "create_client",
    "create_sync_client",
    "create_owned_client",
    "create_sync_owned_client",
    "create_delegating_client",
    "create_sync_delegating_client",
]

__version__ = "0.1.0"
