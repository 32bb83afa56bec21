"""OAuth1 credentials, signing and authentication strategies.

Signing follows RFC 5849 with HMAC-SHA1. The signature base string is built
from the request method, the base string URI and the normalized parameters
(query string, form-encoded body fields and the ``oauth_*`` protocol
parameters), which are percent-encoded and sorted, so signing is independent
of the order parameters were added in.
"""

import base64
import hashlib
import hmac
import secrets
import time
from collections.abc import Callable, Iterable
from typing import Protocol
from urllib.parse import parse_qsl, quote

import httpx
from pydantic import BaseModel, ConfigDict

from .exceptions import ConfigurationError
from .log_config import logger

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Credentials(BaseModel):
    """Application key/secret plus an optional user token pair.

    Immutable once constructed. Requests are user-authenticated only when
    both token fields are set.
    """

    api_key: str
    api_secret: str
    oauth_token: str | None = None
    oauth_token_secret: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_user_token(self) -> bool:
        return bool(self.oauth_token) and bool(self.oauth_token_secret)

    @classmethod
    def from_settings(cls, settings) -> "Credentials":
        """Build credentials from an ``ApiSettings`` instance.

        Raises:
            ConfigurationError: If the API key or secret is missing.
        """
        if not settings.api_key or not settings.api_secret:
            raise ConfigurationError(
                "Credentials require both 'api_key' and 'api_secret'."
            )
        return cls(
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            oauth_token=settings.oauth_token,
            oauth_token_secret=settings.oauth_token_secret,
        )


class RequestToken(BaseModel):
    """Temporary credentials from step one of the handshake."""

    token: str | None = None
    secret: str | None = None
    authorize_url: str | None = None


class AccessToken(BaseModel):
    """Token pair a user granted; persisting it is up to the caller."""

    token: str | None = None
    secret: str | None = None


def percent_encode(value: str) -> str:
    """Percent-encode a value according to RFC 3986.

    Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
    """
    return quote(str(value), safe="~")


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Encode, sort by name then value, and join the request parameters."""
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params)
    return "&".join(f"{k}={v}" for k, v in encoded)


def base_string_uri(url: httpx.URL | str) -> str:
    """Scheme, host, non-default port and path; no query or fragment."""
    url = httpx.URL(url)
    scheme = url.scheme.lower()
    host = (url.host or "").lower()
    port = url.port
    if port is not None and (scheme, port) not in (("http", 80), ("https", 443)):
        host = f"{host}:{port}"
    path = url.raw_path.split(b"?", 1)[0].decode("ascii") or "/"
    return f"{scheme}://{host}{path}"


def signature_base_string(
    method: str, url: httpx.URL | str, params: Iterable[tuple[str, str]]
) -> str:
    """Build the signature base string: METHOD&URI&NORMALIZED_PARAMS."""
    return "&".join(
        [
            method.upper(),
            percent_encode(base_string_uri(url)),
            percent_encode(normalize_parameters(params)),
        ]
    )


def sign_hmac_sha1(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    """Sign the base string using HMAC-SHA1.

    Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)
    """
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(
        key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


def compute_signature(
    method: str,
    url: httpx.URL | str,
    params: Iterable[tuple[str, str]],
    consumer_secret: str,
    token_secret: str | None = None,
) -> str:
    return sign_hmac_sha1(
        signature_base_string(method, url, params), consumer_secret, token_secret or ""
    )


def parse_token_response(text: str) -> tuple[str | None, str | None]:
    """Extract oauth_token and oauth_token_secret from a query-string body.

    Missing keys yield None rather than an error; callers check for it.
    """
    values = dict(parse_qsl(text or "", keep_blank_values=True))
    return values.get("oauth_token"), values.get("oauth_token_secret")


class AuthStrategy(Protocol):
    """Protocol defining the interface for authentication strategies.

    Concrete implementations add authentication information (e.g. an
    Authorization header) to an outgoing HTTP request.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """
        Asynchronously modifies the request to add authentication information.

        Args:
            request: The httpx.Request object to modify.
        """
        ...

    async def async_close(self) -> None:
        """
        Asynchronously closes any underlying resources used by the strategy.
        This method should be idempotent.
        """
        ...


class NoAuth:
    """Implements the AuthStrategy protocol for anonymous requests.

    This strategy makes no modifications to the outgoing request; the API key
    still travels as a default query parameter.
    """

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Does nothing as no authentication is needed."""
        logger.trace("Using NoAuth strategy, no authentication applied.")

    async def async_close(self) -> None:
        """No resources to close for NoAuth, this method is a no-op."""


class OAuth1Auth:
    """Implements AuthStrategy by signing requests with OAuth1 HMAC-SHA1.

    The same class covers the three uses in the handshake: signing the
    request-token call (consumer only), the access-token call (consumer plus
    request token) and protected resource calls (consumer plus access token).

    Attributes:
        _consumer_key: The application API key.
        _consumer_secret: The application API secret.
        _token: The request or access token, if any.
        _token_secret: The secret belonging to ``_token``.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        token: str | None = None,
        token_secret: str | None = None,
        *,
        callback: str | None = None,
        verifier: str | None = None,
        nonce_factory: Callable[[], str] | None = None,
        timestamp_factory: Callable[[], str] | None = None,
    ):
        if not consumer_key or not consumer_secret:
            raise ConfigurationError(
                "OAuth1Auth requires 'consumer_key' and 'consumer_secret'."
            )
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._token = token
        self._token_secret = token_secret
        self._callback = callback
        self._verifier = verifier
        self._nonce_factory = nonce_factory or (lambda: secrets.token_hex(16))
        self._timestamp_factory = timestamp_factory or (lambda: str(int(time.time())))
        logger.debug("OAuth1Auth initialized.")

    @classmethod
    def for_request_token(
        cls, consumer_key: str, consumer_secret: str, callback: str | None = None
    ) -> "OAuth1Auth":
        return cls(consumer_key, consumer_secret, callback=callback)

    @classmethod
    def for_access_token(
        cls,
        consumer_key: str,
        consumer_secret: str,
        token: str | None,
        token_secret: str | None,
        verifier: str | None = None,
    ) -> "OAuth1Auth":
        return cls(consumer_key, consumer_secret, token, token_secret, verifier=verifier)

    @classmethod
    def for_protected_resource(cls, credentials: Credentials) -> "OAuth1Auth":
        return cls(
            credentials.api_key,
            credentials.api_secret,
            credentials.oauth_token,
            credentials.oauth_token_secret,
        )

    def oauth_parameters(self) -> dict[str, str]:
        """Protocol parameters for one request, without the signature."""
        params = {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": self._nonce_factory(),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": self._timestamp_factory(),
            "oauth_version": OAUTH_VERSION,
        }
        if self._token:
            params["oauth_token"] = self._token
        if self._callback:
            params["oauth_callback"] = self._callback
        if self._verifier:
            params["oauth_verifier"] = self._verifier
        return params

    def sign(
        self,
        method: str,
        url: httpx.URL | str,
        params: Iterable[tuple[str, str]] = (),
    ) -> dict[str, str]:
        """Return the protocol parameters including ``oauth_signature``."""
        oauth_params = self.oauth_parameters()
        all_params = list(params) + list(oauth_params.items())
        oauth_params["oauth_signature"] = compute_signature(
            method, url, all_params, self._consumer_secret, self._token_secret
        )
        return oauth_params

    async def async_authenticate(self, request: httpx.Request) -> None:
        """Signs the request and sets the 'Authorization: OAuth ...' header."""
        logger.trace("Authenticating request using OAuth1Auth.")
        params = list(request.url.params.multi_items())
        content_type = request.headers.get("Content-Type", "")
        if content_type.startswith(_FORM_CONTENT_TYPE):
            params.extend(parse_qsl(request.read().decode("utf-8"), keep_blank_values=True))

        oauth_params = self.sign(request.method, request.url, params)
        request.headers["Authorization"] = authorization_header(oauth_params)

    async def async_close(self) -> None:
        """No resources to close for OAuth1Auth, this method is a no-op."""


def authorization_header(oauth_params: dict[str, str]) -> str:
    """Build the header value: OAuth oauth_consumer_key="...", ..."""
    parts = [
        f'{percent_encode(k)}="{percent_encode(v)}"'
        for k, v in sorted(oauth_params.items())
    ]
    return "OAuth " + ", ".join(parts)
