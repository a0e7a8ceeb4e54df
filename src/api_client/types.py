"""
Type definitions for api_client.
"""
import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Protocol, Union

from .errors import NonSuccessResponse
from .headers import HeaderMap, HeadersLike

# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

Body = Union[str, bytes, Mapping[str, Any], list, None]


def _freeze(params: Optional[Mapping[str, Any]]) -> Mapping[str, str]:
    return MappingProxyType({str(k): str(v) for k, v in (params or {}).items()})


@dataclass(frozen=True)
class RequestSpec:
    """Immutable description of one outgoing HTTP call.

    ``url`` is fully resolved. Every ``with_*`` method returns a new spec;
    a spec is never changed after it has been built.
    """

    method: HttpMethod
    url: str
    headers: HeaderMap = field(default_factory=HeaderMap)
    query_params: Mapping[str, str] = field(default_factory=dict)
    body: Body = None
    content_type: Optional[str] = None
    timeout: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.headers, HeaderMap):
            object.__setattr__(self, "headers", HeaderMap(self.headers))
        if not isinstance(self.query_params, MappingProxyType):
            object.__setattr__(self, "query_params", _freeze(self.query_params))

    def with_header(self, name: str, value: str) -> "RequestSpec":
        return replace(self, headers=self.headers.set(name, value))

    def with_headers(self, headers: HeadersLike) -> "RequestSpec":
        result = self.headers
        for name, value in HeaderMap(headers).items():
            result = result.set(name, value)
        return replace(self, headers=result)

    def with_query_param(self, name: str, value: Any) -> "RequestSpec":
        params = dict(self.query_params)
        params[name] = str(value)
        return replace(self, query_params=params)


@dataclass(frozen=True)
class TransportResponse:
    """Raw response handed back by a Transport."""

    status: int
    headers: Mapping[str, str]
    content: bytes = b""
    reason: str = ""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Response:
    """Normalized response envelope.

    Non-2xx statuses are values, not errors: ``is_successful`` is False and
    the caller decides what to do with it.
    """

    status: int
    body: Any
    headers: HeaderMap = field(default_factory=HeaderMap)
    status_text: str = ""
    url: str = ""

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status < 300

    @property
    def error_message(self) -> Optional[str]:
        if self.is_successful:
            return None
        if isinstance(self.body, Mapping):
            for key in ("message", "error", "detail"):
                value = self.body.get(key)
                if value:
                    return value if isinstance(value, str) else json.dumps(value)
        return self.status_text or None

    def raise_for_status(self) -> "Response":
        """Raise NonSuccessResponse for non-2xx statuses, else return self."""
        if not self.is_successful:
            raise NonSuccessResponse(self)
        return self


class Transport(Protocol):
    """Outbound network capability. Any HTTP stack can satisfy it."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """Send one request; raise TransportError if no response is obtained."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...
