"""
Shared fixtures for api_client tests.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx
import pytest
import respx

from api_client.client import ApiClient
from api_client.types import TransportResponse

FIXED_TIMESTAMP = 1000000000
ZERO_NONCE = "0" * 32


@dataclass
class SentRequest:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]
    timeout: Optional[float]


class RecordingTransport:
    """Transport double that records calls and replays a canned response or error."""

    def __init__(
        self,
        response: Optional[TransportResponse] = None,
        error: Optional[BaseException] = None,
    ):
        self.response = response or TransportResponse(
            status=200,
            headers={"content-type": "application/json"},
            content=b'{"success": true}',
            reason="OK",
        )
        self.error = error
        self.calls: List[SentRequest] = []
        self.closed = False

    async def send(self, method, url, headers, body, timeout=None):
        self.calls.append(SentRequest(method, url, dict(headers), body, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fixed_clock():
    """Clock pinned to a known Unix timestamp."""
    return lambda: float(FIXED_TIMESTAMP)


@pytest.fixture
def zero_bytes():
    """Random-byte source returning zeros, so nonces are predictable."""
    return lambda size: b"\x00" * size


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def sample_client(recording_transport):
    """ApiClient wired to a RecordingTransport."""
    return ApiClient("https://api.example.com", transport=recording_transport)


@pytest.fixture
def respx_router():
    """respx router to mount on an httpx.MockTransport."""
    return respx.MockRouter(assert_all_called=False)


@pytest.fixture
def mock_httpx_client(respx_router):
    """httpx.AsyncClient whose requests are answered by ``respx_router``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(respx_router.async_handler))
