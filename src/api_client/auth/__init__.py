"""
Auth strategies, credentials and OAuth1 signing for api_client.
"""
from .credentials import (
    BasicCredentials,
    BearerTokenCredentials,
    Credentials,
    NoCredentials,
    OAuth1AccessCredentials,
    OAuth1RequestCredentials,
)
from .signature import (
    generate_nonce,
    generate_timestamp,
    normalize_base_url,
    normalize_parameters,
    percent_decode,
    percent_encode,
    sign,
    signature_base_string,
    signing_key,
)
from .strategies import (
    AuthStrategy,
    BasicAuth,
    BearerAuth,
    NoAuth,
    OAuth1AccessTokenAuth,
    OAuth1RequestTokenAuth,
    build_oauth_header,
    create_auth_strategy,
    signable_parameters,
)

__all__ = [
    # Credentials
    "BasicCredentials",
    "BearerTokenCredentials",
    "Credentials",
    "NoCredentials",
    "OAuth1AccessCredentials",
    "OAuth1RequestCredentials",
    # Signing
    "generate_nonce",
    "generate_timestamp",
    "normalize_base_url",
    "normalize_parameters",
    "percent_decode",
    "percent_encode",
    "sign",
    "signature_base_string",
    "signing_key",
    # Strategies
    "AuthStrategy",
    "BasicAuth",
    "BearerAuth",
    "NoAuth",
    "OAuth1AccessTokenAuth",
    "OAuth1RequestTokenAuth",
    "build_oauth_header",
    "create_auth_strategy",
    "signable_parameters",
]
