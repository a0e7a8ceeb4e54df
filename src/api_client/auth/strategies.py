"""
Authentication strategies for api_client.

A strategy turns credentials into headers on a RequestSpec. ``apply`` is a pure
transform: it returns a new spec and never touches the one it was given.
"""
import base64
import logging
import secrets
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from ..console import mask_sensitive
from ..errors import ConfigurationError
from ..types import RequestSpec
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
    percent_encode,
    sign,
)

logger = logging.getLogger("api_client.auth")
LOG_PREFIX = "[AUTH]"

AUTHORIZATION = "Authorization"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Clock = Callable[[], float]
RandomBytes = Callable[[int], bytes]


class AuthStrategy(ABC):
    """Auth strategy interface."""

    credentials: Credentials

    @abstractmethod
    def apply(self, spec: RequestSpec) -> RequestSpec:
        """Return ``spec`` with this strategy's credentials attached."""
        ...

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.credentials == other.credentials

    def __hash__(self) -> int:
        return hash((type(self), self.credentials))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.credentials!r})"


class NoAuth(AuthStrategy):
    """Sends requests unauthenticated."""

    def __init__(self):
        self.credentials = NoCredentials()

    def apply(self, spec: RequestSpec) -> RequestSpec:
        return spec


class BasicAuth(AuthStrategy):
    """``Authorization: Basic base64(username:password)``."""

    def __init__(self, username: str, password: str):
        self.credentials = BasicCredentials(username, password)

    def apply(self, spec: RequestSpec) -> RequestSpec:
        raw = f"{self.credentials.username}:{self.credentials.password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        logger.debug(
            f"{LOG_PREFIX} BasicAuth.apply: username={self.credentials.username}, "
            f"password={mask_sensitive(self.credentials.password)}"
        )
        return spec.with_header(AUTHORIZATION, f"Basic {encoded}")


class BearerAuth(AuthStrategy):
    """``Authorization: {scheme} {token}``."""

    def __init__(self, token: str, scheme: str = "Bearer"):
        self.credentials = BearerTokenCredentials(token, scheme)

    def apply(self, spec: RequestSpec) -> RequestSpec:
        logger.debug(
            f"{LOG_PREFIX} BearerAuth.apply: scheme={self.credentials.scheme}, "
            f"token={mask_sensitive(self.credentials.token)}"
        )
        return spec.with_header(
            AUTHORIZATION, f"{self.credentials.scheme} {self.credentials.token}"
        )


def signable_parameters(spec: RequestSpec) -> List[Tuple[str, str]]:
    """Request parameters that take part in the OAuth1 signature.

    Query string already on the URL, the RequestSpec's query parameters and, when
    the Content-Type header is form-encoded, the fields of a mapping body.
    """
    params = parse_qsl(urlsplit(spec.url).query, keep_blank_values=True)
    params.extend(spec.query_params.items())

    content_type = spec.headers.get("Content-Type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPE) and isinstance(spec.body, Mapping):
        params.extend((str(k), str(v)) for k, v in spec.body.items())
    return params


def build_oauth_header(oauth_params: Mapping[str, str], realm: Optional[str] = None) -> str:
    """Serialize ``oauth_*`` parameters as an ``OAuth`` Authorization value."""
    parts = []
    if realm is not None:
        parts.append(f'realm="{percent_encode(realm)}"')
    parts.extend(
        f'{percent_encode(key)}="{percent_encode(value)}"'
        for key, value in sorted(oauth_params.items())
    )
    return "OAuth " + ", ".join(parts)


class _OAuth1Auth(AuthStrategy):
    """Shared HMAC-SHA1 signing for both OAuth1 phases."""

    def __init__(self, clock: Optional[Clock] = None, random_bytes: Optional[RandomBytes] = None):
        self._clock = clock or time.time
        self._random_bytes = random_bytes or secrets.token_bytes

    def _token(self) -> Optional[str]:
        return None

    def _token_secret(self) -> Optional[str]:
        return None

    def oauth_parameters(self) -> Dict[str, str]:
        """Fresh protocol parameters: a new nonce and timestamp on every call."""
        params = {
            "oauth_consumer_key": self.credentials.consumer_key,
            "oauth_nonce": generate_nonce(self._random_bytes),
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": generate_timestamp(self._clock),
            "oauth_version": "1.0",
        }
        token = self._token()
        if token is not None:
            params["oauth_token"] = token
        return params

    def apply(self, spec: RequestSpec) -> RequestSpec:
        oauth_params = self.oauth_parameters()
        base_url = normalize_base_url(spec.url)
        signed = list(oauth_params.items()) + signable_parameters(spec)

        oauth_params["oauth_signature"] = sign(
            spec.method,
            base_url,
            signed,
            self.credentials.consumer_secret,
            self._token_secret(),
        )
        logger.debug(
            f"{LOG_PREFIX} {type(self).__name__}.apply: method={spec.method}, "
            f"base_url={base_url}, nonce={oauth_params['oauth_nonce']}, "
            f"timestamp={oauth_params['oauth_timestamp']}, signed_params={len(signed)}"
        )
        return spec.with_header(
            AUTHORIZATION, build_oauth_header(oauth_params, self.credentials.realm)
        )


class OAuth1RequestTokenAuth(_OAuth1Auth):
    """OAuth1 signing with consumer credentials only."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        *,
        realm: Optional[str] = None,
        clock: Optional[Clock] = None,
        random_bytes: Optional[RandomBytes] = None,
    ):
        super().__init__(clock, random_bytes)
        self.credentials = OAuth1RequestCredentials(consumer_key, consumer_secret, realm)


class OAuth1AccessTokenAuth(_OAuth1Auth):
    """OAuth1 signing that also carries ``oauth_token`` and signs with its secret."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        oauth_token: str,
        oauth_token_secret: str,
        *,
        realm: Optional[str] = None,
        clock: Optional[Clock] = None,
        random_bytes: Optional[RandomBytes] = None,
    ):
        super().__init__(clock, random_bytes)
        self.credentials = OAuth1AccessCredentials(
            consumer_key, consumer_secret, oauth_token, oauth_token_secret, realm
        )

    def _token(self) -> Optional[str]:
        return self.credentials.oauth_token

    def _token_secret(self) -> Optional[str]:
        return self.credentials.oauth_token_secret


def create_auth_strategy(
    credentials: Optional[Credentials],
    *,
    clock: Optional[Clock] = None,
    random_bytes: Optional[RandomBytes] = None,
) -> AuthStrategy:
    """Create auth strategy from credentials."""
    if credentials is None or isinstance(credentials, NoCredentials):
        return NoAuth()
    if isinstance(credentials, BasicCredentials):
        return BasicAuth(credentials.username, credentials.password)
    if isinstance(credentials, BearerTokenCredentials):
        return BearerAuth(credentials.token, credentials.scheme)
    if isinstance(credentials, OAuth1AccessCredentials):
        return OAuth1AccessTokenAuth(
            credentials.consumer_key,
            credentials.consumer_secret,
            credentials.oauth_token,
            credentials.oauth_token_secret,
            realm=credentials.realm,
            clock=clock,
            random_bytes=random_bytes,
        )
    if isinstance(credentials, OAuth1RequestCredentials):
        return OAuth1RequestTokenAuth(
            credentials.consumer_key,
            credentials.consumer_secret,
            realm=credentials.realm,
            clock=clock,
            random_bytes=random_bytes,
        )
    raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")
