"""
Configuration for api_client.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from .errors import ConfigurationError

logger = logging.getLogger("api_client.config")

DEFAULT_CONTENT_TYPE = "application/json"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


class DefaultSerializer:
    """Default JSON serializer."""

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        return json.dumps(data)

    def deserialize(self, text: str) -> Any:
        """Deserialize JSON string to data."""
        return json.loads(text)


default_serializer = DefaultSerializer()


@dataclass
class ClientConfig:
    """Client configuration."""

    base_url: str
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Union[TimeoutConfig, float, None] = None
    content_type: str = DEFAULT_CONTENT_TYPE
    trace: bool = False
    verify_ssl: Optional[bool] = None
    serializer: Optional[DefaultSerializer] = None


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def validate_base_url(base_url: str) -> None:
    """Reject empty or non-absolute base URLs."""
    if not base_url:
        raise ConfigurationError("base_url is required")
    parsed = urlparse(base_url)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError(f"Invalid base_url: {base_url}")


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    validate_base_url(config.base_url)

    timeout = normalize_timeout(config.timeout)
    if min(timeout.connect, timeout.read, timeout.write) < 0:
        raise ConfigurationError(f"Timeouts must not be negative: {timeout}")


@dataclass(frozen=True)
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    base_url: str
    timeout: TimeoutConfig
    headers: Mapping[str, str]
    content_type: str
    trace: bool
    verify_ssl: bool
    serializer: DefaultSerializer


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Resolve client configuration with defaults."""
    validate_config(config)

    verify_ssl = config.verify_ssl
    if verify_ssl is None:
        verify_ssl = not is_ssl_verify_disabled_by_env()

    return ResolvedConfig(
        base_url=config.base_url,
        timeout=normalize_timeout(config.timeout),
        headers=dict(config.headers),
        content_type=config.content_type or DEFAULT_CONTENT_TYPE,
        trace=config.trace,
        verify_ssl=verify_ssl,
        serializer=config.serializer or default_serializer,
    )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def load_config_from_env(
    prefix: str = "API_CLIENT_",
    environ: Optional[Mapping[str, str]] = None,
) -> ClientConfig:
    """Build a ClientConfig from ``{prefix}BASE_URL``, ``TIMEOUT``, ``TRACE``, ``VERIFY_SSL``."""
    env = os.environ if environ is None else environ

    base_url = env.get(f"{prefix}BASE_URL", "")
    if not base_url:
        raise ConfigurationError(f"{prefix}BASE_URL is not set")

    timeout: Optional[float] = None
    raw_timeout = env.get(f"{prefix}TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"{prefix}TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from e

    raw_trace = env.get(f"{prefix}TRACE")
    trace = _parse_bool(f"{prefix}TRACE", raw_trace) if raw_trace else False

    raw_verify = env.get(f"{prefix}VERIFY_SSL")
    verify_ssl = _parse_bool(f"{prefix}VERIFY_SSL", raw_verify) if raw_verify else None

    config = ClientConfig(
        base_url=base_url,
        timeout=timeout,
        trace=trace,
        verify_ssl=verify_ssl,
    )
    validate_config(config)
    logger.debug(f"load_config_from_env: base_url={base_url}, timeout={timeout}, trace={trace}")
    return config
