"""
Immutable, fluent HTTP client for Python.

Builds requests as values, attaches credentials through pluggable auth
strategies (Basic, Bearer, OAuth 1.0 HMAC-SHA1) and normalizes every HTTP
status into a Response. Uses httpx as the default transport.
"""
from .types import (
    HttpMethod,
    RequestSpec,
    Response,
    Transport,
    TransportResponse,
)
from .headers import HeaderMap, merge_headers
from .errors import (
    ApiClientError,
    ConfigurationError,
    NonSuccessResponse,
    TransportError,
)
from .config import (
    ClientConfig,
    DefaultSerializer,
    TimeoutConfig,
    load_config_from_env,
)
from .auth import (
    AuthStrategy,
    BasicAuth,
    BasicCredentials,
    BearerAuth,
    BearerTokenCredentials,
    Credentials,
    NoAuth,
    NoCredentials,
    OAuth1AccessCredentials,
    OAuth1AccessTokenAuth,
    OAuth1RequestCredentials,
    OAuth1RequestTokenAuth,
    create_auth_strategy,
    sign,
)
from .core.request_builder import RequestBuilder
from .core.executor import RequestExecutor
from .transport import HttpxTransport
from .client import ApiClient
from .factory import create_client, create_client_from_env, credentials_from_env

__all__ = [
    # Types
    "HttpMethod",
    "RequestSpec",
    "Response",
    "Transport",
    "TransportResponse",
    "HeaderMap",
    "merge_headers",
    # Errors
    "ApiClientError",
    "ConfigurationError",
    "NonSuccessResponse",
    "TransportError",
    # Config
    "ClientConfig",
    "DefaultSerializer",
    "TimeoutConfig",
    "load_config_from_env",
    # Auth
    "AuthStrategy",
    "BasicAuth",
    "BasicCredentials",
    "BearerAuth",
    "BearerTokenCredentials",
    "Credentials",
    "NoAuth",
    "NoCredentials",
    "OAuth1AccessCredentials",
    "OAuth1AccessTokenAuth",
    "OAuth1RequestCredentials",
    "OAuth1RequestTokenAuth",
    "create_auth_strategy",
    "sign",
    # Core
    "RequestBuilder",
    "RequestExecutor",
    "HttpxTransport",
    "ApiClient",
    # Factory
    "create_client",
    "create_client_from_env",
    "credentials_from_env",
]

__version__ = "0.1.0"
