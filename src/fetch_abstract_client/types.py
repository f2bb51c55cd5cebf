"""
Type definitions for fetch_abstract_client.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

import httpx

# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

URLTypes = Union[str, httpx.URL]


@dataclass
class RequestMessage:
    """
    Outgoing request envelope.

    ``url`` may be None or relative until the request is normalized
    against a client's base address. ``headers`` is always an
    httpx.Headers so repeated names keep every value.
    """

    method: HttpMethod = "GET"
    url: Optional[URLTypes] = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: Optional[Union[str, bytes]] = None
    json: Optional[Any] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    def to_httpx_request(
        self,
        extensions: Optional[Dict[str, Any]] = None,
    ) -> httpx.Request:
        """Build the httpx.Request handed to the transport."""
        if self.url is None:
            raise ValueError("Request URL has not been resolved")

        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            json=self.json,
            extensions={**self.extensions, **(extensions or {})},
        )
