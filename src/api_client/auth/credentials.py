"""
Credential value types.

Each credential kind is a frozen dataclass; required fields are checked on
construction so a bad credential fails before any request is built.
"""
from dataclasses import dataclass, fields
from typing import Optional, Tuple, Union

from ..console import mask_sensitive
from ..errors import ConfigurationError


def _require(owner: object, *names: str) -> None:
    for name in names:
        value = getattr(owner, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ConfigurationError(
                f"{type(owner).__name__}.{name} is required and must not be empty"
            )


class _MaskedRepr:
    _secret_fields: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            shown = mask_sensitive(value) if f.name in self._secret_fields else value
            parts.append(f"{f.name}={shown!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


@dataclass(frozen=True, repr=False)
class NoCredentials(_MaskedRepr):
    """Unauthenticated requests."""


@dataclass(frozen=True, repr=False)
class BasicCredentials(_MaskedRepr):
    username: str
    password: str

    _secret_fields = ("password",)

    def __post_init__(self):
        _require(self, "username", "password")


@dataclass(frozen=True, repr=False)
class BearerTokenCredentials(_MaskedRepr):
    token: str
    scheme: str = "Bearer"

    _secret_fields = ("token",)

    def __post_init__(self):
        _require(self, "token", "scheme")


@dataclass(frozen=True, repr=False)
class OAuth1RequestCredentials(_MaskedRepr):
    """Consumer credentials only (request-token phase, two-legged calls)."""

    consumer_key: str
    consumer_secret: str
    realm: Optional[str] = None

    _secret_fields = ("consumer_secret",)

    def __post_init__(self):
        _require(self, "consumer_key", "consumer_secret")


@dataclass(frozen=True, repr=False)
class OAuth1AccessCredentials(_MaskedRepr):
    """Consumer credentials plus an access token and its secret."""

    consumer_key: str
    consumer_secret: str
    oauth_token: str
    oauth_token_secret: str
    realm: Optional[str] = None

    _secret_fields = ("consumer_secret", "oauth_token_secret")

    def __post_init__(self):
        _require(self, "consumer_key", "consumer_secret", "oauth_token", "oauth_token_secret")


Credentials = Union[
    NoCredentials,
    BasicCredentials,
    BearerTokenCredentials,
    OAuth1RequestCredentials,
    OAuth1AccessCredentials,
]
