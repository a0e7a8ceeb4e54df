"""
Factory functions for creating API clients.
"""
import logging
import os
from typing import Any, Mapping, Optional

from .auth.credentials import (
    BasicCredentials,
    BearerTokenCredentials,
    Credentials,
    NoCredentials,
    OAuth1AccessCredentials,
    OAuth1RequestCredentials,
)
from .auth.strategies import create_auth_strategy
from .client import ApiClient
from .config import load_config_from_env

logger = logging.getLogger("api_client.factory")


def create_client(
    base_url: str,
    *,
    credentials: Optional[Credentials] = None,
    **kwargs: Any,
) -> ApiClient:
    """
    Create an ApiClient, optionally authenticated from a credentials value.

    Example:
        client = create_client(
            "https://api.example.com",
            credentials=BasicCredentials("user", "pass"),
            timeout=15.0,
        )
    """
    return ApiClient(base_url, auth=create_auth_strategy(credentials), **kwargs)


def credentials_from_env(
    prefix: str = "API_CLIENT_",
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """
    Pick credentials from the environment.

    Precedence: OAuth1 (``CONSUMER_KEY``/``CONSUMER_SECRET``, plus
    ``OAUTH_TOKEN``/``OAUTH_TOKEN_SECRET`` for the access phase), then
    ``BEARER_TOKEN``, then ``USERNAME``/``PASSWORD``. Nothing set means no auth.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        return env.get(f"{prefix}{name}") or None

    if get("CONSUMER_KEY"):
        if get("OAUTH_TOKEN"):
            return OAuth1AccessCredentials(
                get("CONSUMER_KEY"),
                get("CONSUMER_SECRET"),
                get("OAUTH_TOKEN"),
                get("OAUTH_TOKEN_SECRET"),
                realm=get("OAUTH_REALM"),
            )
        return OAuth1RequestCredentials(
            get("CONSUMER_KEY"), get("CONSUMER_SECRET"), realm=get("OAUTH_REALM")
        )
    if get("BEARER_TOKEN"):
        return BearerTokenCredentials(get("BEARER_TOKEN"), get("BEARER_SCHEME") or "Bearer")
    if get("USERNAME"):
        return BasicCredentials(get("USERNAME"), get("PASSWORD"))
    return NoCredentials()


def create_client_from_env(
    prefix: str = "API_CLIENT_",
    environ: Optional[Mapping[str, str]] = None,
    **kwargs: Any,
) -> ApiClient:
    """Create an ApiClient from ``{prefix}*`` environment variables."""
    config = load_config_from_env(prefix, environ)
    credentials = credentials_from_env(prefix, environ)
    logger.info(
        f"create_client_from_env: base_url={config.base_url}, "
        f"credentials={type(credentials).__name__}"
    )
    return ApiClient.from_config(config, auth=create_auth_strategy(credentials), **kwargs)
