"""
Core modules for fetch_abstract_client.
"""
from .abstract_client import AsyncAbstractClient, SyncAbstractClient
from .delegating_client import AsyncDelegatingClient, SyncDelegatingClient
from .owned_client import AsyncOwnedClient, SyncOwnedClient
from .request_normalizer import (
    is_relative_url,
    merge_default_headers,
    normalize_request,
    resolve_request_url,
)

__all__ = [
    "AsyncAbstractClient",
    "SyncAbstractClient",
    "AsyncDelegatingClient",
    "SyncDelegatingClient",
    "AsyncOwnedClient",
    "SyncOwnedClient",
    "is_relative_url",
    "merge_default_headers",
    "normalize_request",
    "resolve_request_url",
]
