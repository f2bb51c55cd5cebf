"""
Request normalization: base-address resolution and default-header merge.
"""
import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from ..config import coerce_base_address
from ..errors import ConfigurationError, MISSING_BASE_ADDRESS
from ..headers import HeaderSet, append_headers, group_raw_headers
from ..types import RequestMessage, URLTypes

logger = logging.getLogger("fetch_abstract_client.request_normalizer")


def is_relative_url(url: URLTypes) -> bool:
    """
    Decide whether ``url`` has to be combined with the base address.

    A URL without a scheme is relative. A file URL whose original text
    starts with "/" is treated as relative as well, since some platforms
    turn a server-relative path like "/users" into "file:///users".
    """
    text = str(url)
    scheme = url.scheme if isinstance(url, httpx.URL) else urlsplit(text).scheme
    if not scheme:
        return True
    return scheme.lower() == "file" and text.startswith("/")


def resolve_request_url(
    url: Optional[URLTypes],
    base_address: Optional[URLTypes],
) -> URLTypes:
    """
    Resolve a request URL against the base address.

    Returns ``url`` itself when it is already absolute, ``base_address``
    when ``url`` is None, and the RFC 3986 combination otherwise.

    Raises:
        ConfigurationError: If the URL needs a base address and none is set.
        ValueError: If ``base_address`` is given but is not an absolute URL.
    """
    base_address = coerce_base_address(base_address)
    if url is None:
        if base_address is None:
            raise ConfigurationError(MISSING_BASE_ADDRESS)
        return base_address

    if is_relative_url(url):
        if base_address is None:
            raise ConfigurationError(MISSING_BASE_ADDRESS)
        return base_address.join(url)

    return url


def merge_default_headers(headers: httpx.Headers, default_headers: Optional[HeaderSet]) -> int:
    """
    Append every default header value to ``headers``.

    Values already on the request are never replaced or removed; the
    defaults are added after them. Returns the number of values appended.
    """
    if default_headers is None:
        return 0

    return append_headers(
        headers,
        [(name, value) for name, values in group_raw_headers(default_headers.raw) for value in values],
    )


def normalize_request(
    request: RequestMessage,
    base_address: Optional[URLTypes],
    default_headers: Optional[HeaderSet],
) -> RequestMessage:
    """
    Normalize ``request`` in place before it is dispatched.

    The URL is resolved first so that a ConfigurationError leaves the
    request untouched.
    """
    original_url = request.url
    resolved_url = resolve_request_url(original_url, base_address)
    if resolved_url is not original_url:
        logger.debug(f"normalize_request: resolved url {original_url!r} -> {resolved_url}")
        request.url = resolved_url

    appended = merge_default_headers(request.headers, default_headers)
    logger.debug(f"normalize_request: appended {appended} default header value(s)")
    return request
