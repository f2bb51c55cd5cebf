"""
Console output for verbose clients, rendered with Rich.
"""
from typing import Dict, Optional

import httpx
from rich.console import Console
from rich.panel import Panel

console = Console(stderr=True)

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "x-api-key", "cookie", "set-cookie"}
)


def mask_header_value(value: Optional[str], visible_chars: int = 15) -> str:
    """Mask a credential-bearing header value for safe output."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def mask_headers(headers: httpx.Headers) -> Dict[str, str]:
    """Return a dict copy of ``headers`` with sensitive values masked."""
    masked = {}
    for key, value in headers.multi_items():
        if key.lower() in SENSITIVE_HEADERS:
            value = mask_header_value(value)
        masked[key] = f"{masked[key]}, {value}" if key in masked else value
    return masked


def print_request_panel(request: httpx.Request) -> None:
    request_info = f"[bold cyan]{request.method}[/bold cyan] {request.url}"
    console.print(Panel(request_info, title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers(request.headers))


def print_response_panel(response: httpx.Response) -> None:
    status_color = "green" if response.is_success else "red"
    response_info = (
        f"[bold {status_color}]{response.status_code}[/bold {status_color}] "
        f"{response.reason_phrase or ''}"
    )
    console.print(Panel(response_info, title=f"[bold blue]Response[/bold blue] ({response.request.url})"))
    console.print("[bold]Headers:[/bold]", mask_headers(response.headers))
