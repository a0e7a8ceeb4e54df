"""
Console tracing for api_client, built on Rich.

Request/response panels are only printed when a client is created with
``trace=True``. Secrets are masked before anything reaches the console or the
log.
"""
import json
from typing import Any, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "x-api-key", "cookie"}

console = Console(stderr=True)


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """
    Mask sensitive values for logging.

    Args:
        value: Value to mask
        show_chars: Number of characters to show before masking

    Returns:
        str: "<none>" for empty values, fully masked short values,
        otherwise the first ``show_chars`` characters followed by "***"
    """
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_auth_header(value: Optional[str]) -> str:
    """Keep the auth scheme readable, mask the credential part."""
    if not value:
        return "<none>"
    scheme, _, credential = value.partition(" ")
    if not credential:
        return mask_sensitive(value)
    return f"{scheme} {mask_sensitive(credential)}"


def mask_headers(headers: Mapping[str, str]) -> dict:
    """Copy of ``headers`` with credential-bearing values masked."""
    masked = {}
    for name, value in headers.items():
        if name.lower() in SENSITIVE_HEADERS:
            masked[name] = mask_auth_header(value)
        else:
            masked[name] = value
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_request(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
) -> None:
    console.print(
        Panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]")
    )
    console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if body is not None:
        console.print(
            Panel(
                Syntax(format_body(body), "json", theme="monokai"),
                title="[bold]Request Body[/bold]",
            )
        )


def print_response(
    status: int,
    status_text: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
) -> None:
    color = "green" if 200 <= status < 300 else "red"
    console.print(
        Panel(
            f"[bold {color}]{status}[/bold {color}] {status_text}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    console.print("[bold]Headers:[/bold]", dict(headers))
    if body:
        console.print(
            Panel(
                Syntax(format_body(body), "json", theme="monokai"),
                title=f"[bold]Response Body[/bold] (URL: {url})",
            )
        )
