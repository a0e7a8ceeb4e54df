"""
OAuth 1.0 HMAC-SHA1 request signing (RFC 5849, section 3.4).

Everything here is a pure function of its arguments. Nonce and timestamp
generators take their randomness and clock as parameters so callers can pin
them in tests.
"""
import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote, urlsplit, urlunsplit

NONCE_BYTES = 16

Parameters = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: object) -> str:
    """RFC 3986 percent-encoding; only ``A-Za-z0-9-._~`` pass through."""
    return quote(str(value), safe="~")


def percent_decode(value: str) -> str:
    return unquote(value)


def normalize_base_url(url: str) -> str:
    """Base string URI: lowercase scheme and host, no default port, no query/fragment."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if parts.port is not None and _DEFAULT_PORTS.get(scheme) != parts.port:
        netloc = f"{host}:{parts.port}"
    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def normalize_parameters(parameters: Parameters) -> str:
    """Encode, sort by encoded key then encoded value, join with ``&``."""
    pairs = parameters.items() if isinstance(parameters, Mapping) else parameters
    encoded: List[Tuple[str, str]] = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in pairs
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def signature_base_string(method: str, base_url: str, parameters: Parameters) -> str:
    return "&".join(
        [
            method.upper(),
            percent_encode(base_url),
            percent_encode(normalize_parameters(parameters)),
        ]
    )


def signing_key(consumer_secret: str, token_secret: Optional[str] = None) -> str:
    # Request-token phase has no token secret; the key is still "secret&".
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"


def sign(
    method: str,
    base_url: str,
    parameters: Parameters,
    consumer_secret: str,
    token_secret: Optional[str] = None,
) -> str:
    """Return the base64 HMAC-SHA1 signature for one request.

    ``base_url`` must not carry a query string; query parameters belong in
    ``parameters``. ``oauth_signature`` must not be part of ``parameters``.
    """
    base_string = signature_base_string(method, base_url, parameters)
    key = signing_key(consumer_secret, token_secret)
    digest = hmac.new(
        key.encode("utf-8"),
        base_string.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def generate_nonce(
    random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    size: int = NONCE_BYTES,
) -> str:
    """Hex-encoded random nonce, fresh on every call."""
    return random_bytes(size).hex()


def generate_timestamp(clock: Callable[[], float] = time.time) -> str:
    """Unix seconds as a string."""
    return str(int(clock()))
