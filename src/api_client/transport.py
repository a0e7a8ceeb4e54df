"""
httpx-backed Transport.
"""
import logging
from typing import Mapping, Optional

import httpx

from .config import TimeoutConfig, normalize_timeout
from .errors import TransportError
from .types import TransportResponse

logger = logging.getLogger("api_client.transport")


def to_httpx_timeout(timeout: TimeoutConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


class HttpxTransport:
    """Transport over one shared ``httpx.AsyncClient``.

    Connection reuse is whatever httpx's pool provides. Pass ``httpx_client``
    to supply a preconfigured client (proxies, mounts, MockTransport in tests).
    """

    def __init__(
        self,
        httpx_client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: Optional[TimeoutConfig] = None,
        verify_ssl: bool = True,
    ):
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.AsyncClient(
                timeout=to_httpx_timeout(normalize_timeout(timeout)),
                verify=verify_ssl,
            )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        if self._closed:
            raise RuntimeError("Transport has been closed")

        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=dict(headers),
                content=body,
                **kwargs,
            )
        except httpx.TransportError as e:
            raise TransportError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                cause=e,
                method=method,
                url=url,
            ) from e

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            reason=response.reason_phrase or "",
        )

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        self._closed = True
        await self._client.aclose()
