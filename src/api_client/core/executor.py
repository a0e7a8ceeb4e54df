"""
Request executor: auth, header merge, transport call, response normalization.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Any, Optional

from ..auth.strategies import AuthStrategy, NoAuth
from ..config import DEFAULT_CONTENT_TYPE, DefaultSerializer, default_serializer
from ..console import mask_headers, print_request, print_response
from ..errors import TransportError
from ..headers import HeaderMap, HeadersLike, merge_headers
from ..types import RequestSpec, Response, Transport, TransportResponse
from .request_builder import append_query, build_body

logger = logging.getLogger("api_client.executor")


class RequestExecutor:
    """Runs RequestSpecs over a Transport.

    Holds no per-request state, so any number of ``execute`` calls may be in
    flight at once. Never retries: a replayed OAuth1 request would need a new
    nonce and timestamp, and retry policy belongs to the caller.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        content_type: str = DEFAULT_CONTENT_TYPE,
        serializer: DefaultSerializer = default_serializer,
        trace: bool = False,
    ):
        self._transport = transport
        self._content_type = content_type
        self._serializer = serializer
        self._trace = trace

    @property
    def transport(self) -> Transport:
        return self._transport

    def prepare_headers(self, spec: RequestSpec, default_headers: HeadersLike = None) -> HeaderMap:
        """Client defaults under request headers; request-level values win."""
        headers = merge_headers(default_headers, spec.headers)
        if spec.body is not None:
            if spec.content_type and "content-type" not in spec.headers:
                headers = headers.set("Content-Type", spec.content_type)
            elif "content-type" not in headers:
                headers = headers.set("Content-Type", self._content_type)
        if "accept" not in headers:
            headers = headers.set("Accept", "application/json")
        return headers

    def parse_body(self, raw: TransportResponse) -> Any:
        if not raw.content:
            return None
        text = raw.text
        try:
            return self._serializer.deserialize(text)
        except ValueError:
            return text

    async def execute(
        self,
        spec: RequestSpec,
        auth: Optional[AuthStrategy] = None,
        default_headers: HeadersLike = None,
    ) -> Response:
        """Send ``spec`` and return a Response for any HTTP status.

        Raises:
            ConfigurationError: the strategy or body could not be applied.
            TransportError: no HTTP response was obtained.
        """
        # Strategies sign against the resolved headers, including Content-Type.
        resolved = replace(spec, headers=self.prepare_headers(spec, default_headers))
        signed = (auth or NoAuth()).apply(resolved)
        headers = signed.headers
        content_type = headers.get("Content-Type", signed.content_type)
        body = build_body(signed.body, content_type, self._serializer)
        url = append_query(signed.url, signed.query_params)

        logger.debug(
            f"execute: method={signed.method}, url={url}, headers={mask_headers(headers)}, "
            f"timeout={signed.timeout}"
        )
        if self._trace:
            print_request(signed.method, url, headers, signed.body)

        try:
            raw = await self._transport.send(
                signed.method, url, headers.to_dict(), body, signed.timeout
            )
        except TransportError as e:
            e.method = e.method or signed.method
            e.url = e.url or url
            logger.warning(f"execute: transport failure for {signed.method} {url}: {e}")
            raise
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning(f"execute: transport failure for {signed.method} {url}: {e!r}")
            raise TransportError(
                f"{signed.method} {url} failed: {e!r}",
                cause=e,
                method=signed.method,
                url=url,
            ) from e

        response = Response(
            status=raw.status,
            body=self.parse_body(raw),
            headers=HeaderMap(raw.headers),
            status_text=raw.reason,
            url=url,
        )
        logger.debug(f"execute: {signed.method} {url} -> {response.status}")
        if self._trace:
            print_response(response.status, response.status_text, url, response.headers, response.body)
        return response
