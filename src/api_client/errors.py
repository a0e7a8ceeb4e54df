"""
Error taxonomy for api_client.

ConfigurationError is raised before any network activity, TransportError when
no HTTP response could be obtained. A non-2xx status is not an error unless the
caller asks for one (see NonSuccessResponse).
"""
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import Response


class ApiClientError(Exception):
    """Base class for all api_client errors."""


class ConfigurationError(ApiClientError, ValueError):
    """Missing or invalid credential / client configuration."""


class TransportError(ApiClientError):
    """No HTTP response was obtained (DNS failure, refused connection, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.method = method
        self.url = url


class NonSuccessResponse(ApiClientError):
    """HTTP response received with a status outside 2xx."""

    def __init__(self, response: "Response"):
        self.response = response
        detail = response.error_message or ""
        super().__init__(f"HTTP {response.status}: {detail}".rstrip(": "))
