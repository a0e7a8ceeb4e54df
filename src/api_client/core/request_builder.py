"""
Request builder for api_client.

A RequestBuilder is a value: each ``with_*`` call returns a new builder, so two
requests started from the same client (or the same partial builder) never see
each other's headers, parameters or body.
"""
import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional
from urllib.parse import urlencode, urlsplit

from ..config import DEFAULT_CONTENT_TYPE, DefaultSerializer, default_serializer
from ..errors import ConfigurationError
from ..headers import HeaderMap, HeadersLike
from ..types import HTTP_METHODS, Body, HttpMethod, RequestSpec, Response

if TYPE_CHECKING:
    from ..client import ApiClient

logger = logging.getLogger("api_client.request_builder")


def is_absolute_url(endpoint: str) -> bool:
    """True if ``endpoint`` carries its own scheme and host."""
    parts = urlsplit(endpoint)
    return bool(parts.scheme and parts.netloc)


def resolve_url(base_url: str, endpoint: str) -> str:
    """Absolute endpoints are used verbatim, anything else is appended to ``base_url``."""
    if is_absolute_url(endpoint):
        return endpoint
    if not endpoint:
        return base_url
    if endpoint.startswith("?"):
        return f"{base_url}{endpoint}"
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def append_query(url: str, params: Mapping[str, str]) -> str:
    """Append ``params`` to ``url``, keeping any query string already there."""
    if not params:
        return url
    separator = "&" if urlsplit(url).query else ("" if url.endswith("?") else "?")
    return f"{url}{separator}{urlencode(list(params.items()))}"


def build_body(
    body: Body,
    content_type: Optional[str],
    serializer: DefaultSerializer = default_serializer,
) -> Optional[bytes]:
    """Serialize a request body according to its content type."""
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")

    media_type = (content_type or DEFAULT_CONTENT_TYPE).split(";")[0].strip().lower()
    if media_type == "application/x-www-form-urlencoded" and isinstance(body, Mapping):
        return urlencode([(str(k), str(v)) for k, v in body.items()]).encode("utf-8")
    if media_type == "application/json" or media_type.endswith("+json"):
        return serializer.serialize(body).encode("utf-8")
    raise ConfigurationError(
        f"Cannot serialize {type(body).__name__} body as {media_type}; pass str or bytes"
    )


@dataclass(frozen=True)
class RequestBuilder:
    """Accumulates one logical request against a client's base configuration."""

    client: "ApiClient" = field(repr=False, compare=False)
    method: HttpMethod = "GET"
    endpoint: str = ""
    headers: HeaderMap = field(default_factory=HeaderMap)
    query_params: Mapping[str, str] = field(default_factory=dict)
    body: Body = None
    content_type: Optional[str] = None
    timeout: Optional[float] = None
    raise_on_error: bool = False

    def __post_init__(self):
        if not isinstance(self.headers, HeaderMap):
            object.__setattr__(self, "headers", HeaderMap(self.headers))
        if not isinstance(self.query_params, MappingProxyType):
            object.__setattr__(
                self,
                "query_params",
                MappingProxyType({str(k): str(v) for k, v in self.query_params.items()}),
            )

    def with_method(self, method: str) -> "RequestBuilder":
        normalized = method.upper()
        if normalized not in HTTP_METHODS:
            raise ConfigurationError(
                f"Unsupported HTTP method: {method}. Must be one of: {list(HTTP_METHODS)}"
            )
        return replace(self, method=normalized)

    def with_endpoint(self, endpoint: str) -> "RequestBuilder":
        return replace(self, endpoint=endpoint)

    def with_header(self, name: str, value: str) -> "RequestBuilder":
        return replace(self, headers=self.headers.set(name, value))

    def with_headers(self, headers: HeadersLike) -> "RequestBuilder":
        result = self.headers
        for name, value in HeaderMap(headers).items():
            result = result.set(name, value)
        return replace(self, headers=result)

    def with_query_param(self, name: str, value: Any) -> "RequestBuilder":
        params = dict(self.query_params)
        params[name] = str(value)
        return replace(self, query_params=params)

    def with_query_params(self, params: Mapping[str, Any]) -> "RequestBuilder":
        merged = dict(self.query_params)
        merged.update({str(k): str(v) for k, v in params.items()})
        return replace(self, query_params=merged)

    def with_body(self, payload: Body, content_type: str = DEFAULT_CONTENT_TYPE) -> "RequestBuilder":
        return replace(self, body=payload, content_type=content_type)

    def with_timeout(self, timeout: Optional[float]) -> "RequestBuilder":
        if timeout is not None and timeout < 0:
            raise ConfigurationError(f"timeout must not be negative: {timeout}")
        return replace(self, timeout=timeout)

    def fail_on_status_code(self, enabled: bool = True) -> "RequestBuilder":
        """Opt in to NonSuccessResponse being raised for non-2xx responses."""
        return replace(self, raise_on_error=enabled)

    @property
    def url(self) -> str:
        return resolve_url(self.client.base_url, self.endpoint)

    def build(self) -> RequestSpec:
        """Freeze the accumulated state into a RequestSpec."""
        spec = RequestSpec(
            method=self.method,
            url=self.url,
            headers=self.headers,
            query_params=self.query_params,
            body=self.body,
            content_type=self.content_type,
            timeout=self.timeout,
        )
        logger.debug(f"build: method={spec.method}, url={spec.url}, params={dict(spec.query_params)}")
        return spec

    async def execute(self) -> Response:
        """Build the request and run it through the owning client."""
        response = await self.client.execute(self.build())
        if self.raise_on_error:
            response.raise_for_status()
        return response
