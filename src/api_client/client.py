"""
ApiClient facade.

An ApiClient is bound to one base URL for its whole life. Auth and default
header operations return a new client; the original is left as it was, so
switching credentials cannot leak into requests built from an earlier client.
Derived clients share the parent's transport (and its connection pool).
"""
import logging
from typing import Any, Mapping, Optional, Union

import httpx

from .auth.strategies import (
    AuthStrategy,
    BasicAuth,
    BearerAuth,
    NoAuth,
    OAuth1AccessTokenAuth,
    OAuth1RequestTokenAuth,
)
from .config import (
    DEFAULT_CONTENT_TYPE,
    ClientConfig,
    DefaultSerializer,
    TimeoutConfig,
    resolve_config,
)
from .core.executor import RequestExecutor
from .core.request_builder import RequestBuilder
from .headers import HeaderMap, HeadersLike
from .transport import HttpxTransport
from .types import Body, RequestSpec, Response, Transport

logger = logging.getLogger("api_client.client")


class ApiClient:
    """Immutable HTTP client holding base URL, default headers and an auth strategy."""

    __slots__ = ("_base_url", "_default_headers", "_auth", "_executor")

    def __init__(
        self,
        base_url: str,
        default_headers: HeadersLike = None,
        *,
        auth: Optional[AuthStrategy] = None,
        timeout: Union[TimeoutConfig, float, None] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        trace: bool = False,
        verify_ssl: Optional[bool] = None,
        serializer: Optional[DefaultSerializer] = None,
        transport: Optional[Transport] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        config = resolve_config(
            ClientConfig(
                base_url=base_url,
                headers=HeaderMap(default_headers).to_dict(),
                timeout=timeout,
                content_type=content_type,
                trace=trace,
                verify_ssl=verify_ssl,
                serializer=serializer,
            )
        )
        if transport is None:
            transport = HttpxTransport(
                httpx_client,
                timeout=config.timeout,
                verify_ssl=config.verify_ssl,
            )
        self._base_url = config.base_url
        self._default_headers = HeaderMap(config.headers)
        self._auth = auth or NoAuth()
        self._executor = RequestExecutor(
            transport,
            content_type=config.content_type,
            serializer=config.serializer,
            trace=config.trace,
        )
        logger.debug(f"ApiClient: base_url={self._base_url}, auth={self._auth!r}")

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        auth: Optional[AuthStrategy] = None,
        transport: Optional[Transport] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ) -> "ApiClient":
        return cls(
            config.base_url,
            config.headers,
            auth=auth,
            timeout=config.timeout,
            content_type=config.content_type,
            trace=config.trace,
            verify_ssl=config.verify_ssl,
            serializer=config.serializer,
            transport=transport,
            httpx_client=httpx_client,
        )

    def _derive(
        self,
        *,
        auth: Optional[AuthStrategy] = None,
        default_headers: Optional[HeaderMap] = None,
    ) -> "ApiClient":
        clone = object.__new__(ApiClient)
        clone._base_url = self._base_url
        clone._default_headers = self._default_headers if default_headers is None else default_headers
        clone._auth = self._auth if auth is None else auth
        clone._executor = self._executor
        return clone

    # --- state -------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_headers(self) -> HeaderMap:
        return self._default_headers

    @property
    def headers(self) -> dict:
        """Copy of the default headers."""
        return self._default_headers.to_dict()

    @property
    def auth(self) -> AuthStrategy:
        return self._auth

    @property
    def transport(self) -> Transport:
        return self._executor.transport

    # --- auth --------------------------------------------------------------

    def with_auth(self, strategy: Optional[AuthStrategy]) -> "ApiClient":
        return self._derive(auth=strategy or NoAuth())

    def set_basic_authentication(self, username: str, password: str) -> "ApiClient":
        return self.with_auth(BasicAuth(username, password))

    def set_bearer_authentication(self, token: str, scheme: str = "Bearer") -> "ApiClient":
        return self.with_auth(BearerAuth(token, scheme))

    def set_request_token_authentication(
        self, consumer_key: str, consumer_secret: str, **kwargs: Any
    ) -> "ApiClient":
        return self.with_auth(OAuth1RequestTokenAuth(consumer_key, consumer_secret, **kwargs))

    def set_access_token_authentication(
        self,
        consumer_key: str,
        consumer_secret: str,
        oauth_token: str,
        oauth_token_secret: str,
        **kwargs: Any,
    ) -> "ApiClient":
        return self.with_auth(
            OAuth1AccessTokenAuth(
                consumer_key, consumer_secret, oauth_token, oauth_token_secret, **kwargs
            )
        )

    def clear_authentication(self) -> "ApiClient":
        return self.with_auth(NoAuth())

    # --- default headers ---------------------------------------------------

    def with_header(self, name: str, value: str) -> "ApiClient":
        return self._derive(default_headers=self._default_headers.set(name, value))

    def without_header(self, name: str) -> "ApiClient":
        return self._derive(default_headers=self._default_headers.remove(name))

    def clone(self) -> "ApiClient":
        return self._derive()

    # --- requests ----------------------------------------------------------

    def request(self, method: str = "GET", endpoint: str = "") -> RequestBuilder:
        """Start a RequestBuilder bound to this client."""
        return RequestBuilder(self).with_method(method).with_endpoint(endpoint)

    async def execute(self, spec: RequestSpec) -> Response:
        """Run a built RequestSpec with this client's auth and default headers."""
        return await self._executor.execute(spec, self._auth, self._default_headers)

    def _builder(
        self,
        method: str,
        endpoint: str,
        body: Body = None,
        *,
        headers: HeadersLike = None,
        params: Optional[Mapping[str, Any]] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        timeout: Optional[float] = None,
        fail_on_status_code: bool = False,
    ) -> RequestBuilder:
        builder = self.request(method, endpoint)
        if headers:
            builder = builder.with_headers(headers)
        if params:
            builder = builder.with_query_params(params)
        if body is not None:
            builder = builder.with_body(body, content_type)
        return builder.with_timeout(timeout).fail_on_status_code(fail_on_status_code)

    async def get(self, endpoint: str, **options: Any) -> Response:
        """GET request."""
        return await self._builder("GET", endpoint, **options).execute()

    async def post(self, endpoint: str, body: Body = None, **options: Any) -> Response:
        """POST request."""
        return await self._builder("POST", endpoint, body, **options).execute()

    async def put(self, endpoint: str, body: Body = None, **options: Any) -> Response:
        """PUT request."""
        return await self._builder("PUT", endpoint, body, **options).execute()

    async def patch(self, endpoint: str, body: Body = None, **options: Any) -> Response:
        """PATCH request."""
        return await self._builder("PATCH", endpoint, body, **options).execute()

    async def delete(self, endpoint: str, body: Body = None, **options: Any) -> Response:
        """DELETE request."""
        return await self._builder("DELETE", endpoint, body, **options).execute()

    # --- lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        """Close the shared transport (affects every client derived from this one)."""
        await self._executor.transport.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ApiClient(base_url={self._base_url!r}, auth={self._auth!r})"
