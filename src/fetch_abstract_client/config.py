"""
Configuration for fetch_abstract_client.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlsplit

import httpx

from .headers import HeaderSet, HeaderSource
from .types import URLTypes

logger = logging.getLogger("fetch_abstract_client.config")


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Client configuration."""

    base_url: Optional[str] = None
    headers: Optional[HeaderSource] = None
    timeout: Union[TimeoutConfig, float, None] = None
    verify: Optional[bool] = None
    verbose: bool = False


# Default values
DEFAULT_TIMEOUT = TimeoutConfig()


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, bool):
        raise ValueError(f"Invalid timeout: {timeout!r}")
    if isinstance(timeout, (int, float)):
        if timeout <= 0:
            raise ValueError(f"Invalid timeout: {timeout!r}")
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def to_httpx_timeout(timeout: TimeoutConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


def coerce_base_address(value: Optional[URLTypes]) -> Optional[httpx.URL]:
    """
    Validate a base address and convert it to httpx.URL.

    None and "" clear the base address. Anything else must be absolute.
    """
    if value is None or str(value) == "":
        return None

    text = str(value)
    parsed = urlsplit(text)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid base_url: {text} (must be an absolute URL)")
    return value if isinstance(value, httpx.URL) else httpx.URL(text)


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    coerce_base_address(config.base_url)
    normalize_timeout(config.timeout)


@dataclass
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    base_address: Optional[httpx.URL]
    headers: HeaderSet
    timeout: TimeoutConfig
    verify: bool
    verbose: bool = False


def resolve_config(config: Optional[ClientConfig] = None) -> ResolvedConfig:
    """Resolve client configuration with defaults."""
    config = config or ClientConfig()
    validate_config(config)

    # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 override the config
    if is_ssl_verify_disabled_by_env():
        verify = False
    else:
        verify = True if config.verify is None else config.verify

    resolved = ResolvedConfig(
        base_address=coerce_base_address(config.base_url),
        headers=HeaderSet(config.headers),
        timeout=normalize_timeout(config.timeout),
        verify=verify,
        verbose=config.verbose,
    )
    logger.debug(
        f"resolve_config: base_address={resolved.base_address}, "
        f"headers={len(resolved.headers)}, verify={resolved.verify}"
    )
    return resolved
