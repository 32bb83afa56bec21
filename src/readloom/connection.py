"""Transport layer of the readloom client.

This module provides the ``Connection`` class, which sends requests described
by a ``RequestSpec`` to the remote service and returns either the raw result
or a typed object graph produced by the parsing framework. It also drives the
three-legged OAuth1 handshake.

There are no retries, no caching and no rate limiting: whatever the service
or the network does is surfaced to the caller.
"""

import ssl
from http import HTTPStatus
from typing import Any, Self, TypeVar
from urllib.parse import urlencode

import certifi
import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .auth import (
    AccessToken,
    AuthStrategy,
    Credentials,
    NoAuth,
    OAuth1Auth,
    RequestToken,
    parse_token_response,
)
from .config import ApiSettings, get_settings
from .constants import (
    ACCESS_TOKEN_PATH,
    API_KEY_PARAM,
    AUTHORIZE_PATH,
    FORMAT_PARAM,
    REQUEST_TOKEN_PATH,
)
from .exceptions import APIError, AuthError, NotFoundError, ParseError
from .log_config import logger
from .parsing import parse_document
from .types import RawResult, RequestData, RequestSpec

T = TypeVar("T")
JsonModel = TypeVar("JsonModel", bound=BaseModel)


class Connection:
    """Asynchronous connection to the remote bibliographic service.

    Credentials are fixed at construction and decide how requests are
    authenticated: with a user token pair every request is OAuth1-signed,
    otherwise requests are anonymous. Either way the API key and the response
    format travel as default query parameters.

    Attributes:
        _settings: Configuration settings for the connection.
        _credentials: Application and (optional) user credentials.
        _base_url: The origin all endpoint paths are relative to.
        _default_params: Query parameters added to every resource request.
        _auth_strategy: Authentication strategy for resource requests.
        _http_client: The underlying httpx.AsyncClient for making requests.
        _should_close_client: Flag indicating if this instance owns the _http_client.
    """

    def __init__(
        self,
        settings: ApiSettings | None = None,
        credentials: Credentials | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the Connection.

        Args:
            settings: Configuration settings. If None, global settings are
                loaded via `readloom.config.get_settings()`.
            credentials: Credentials to use. If None, they are built from
                `settings` and a missing key or secret raises ConfigurationError.
            auth_strategy: Optional explicit strategy for resource requests.
                If None, OAuth1 signing is used when the credentials carry a
                user token pair, NoAuth otherwise.
            base_url: Optional override of `settings.base_url`.
            http_client: Optional pre-configured httpx.AsyncClient instance.
        """
        self._settings: ApiSettings = settings or get_settings()
        self._credentials: Credentials = credentials or Credentials.from_settings(
            self._settings
        )
        self._base_url: str = (base_url or self._settings.base_url).rstrip("/")
        self._default_params: list[tuple[str, str]] = [
            (API_KEY_PARAM, self._credentials.api_key),
            (FORMAT_PARAM, self._settings.response_format),
        ]

        if auth_strategy is not None:
            self._auth_strategy: AuthStrategy = auth_strategy
        elif self._credentials.has_user_token:
            self._auth_strategy = OAuth1Auth.for_protected_resource(self._credentials)
        else:
            self._auth_strategy = NoAuth()
        logger.info(
            f"Using authentication strategy: {type(self._auth_strategy).__name__}"
        )

        self._should_close_client = http_client is None
        self._http_client = http_client or self._create_default_http_client()
        logger.debug("Connection initialized.")

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def base_url(self) -> str:
        return self._base_url

    def _create_default_http_client(self) -> httpx.AsyncClient:
        """Create a default httpx.AsyncClient with configured settings.

        Returns:
            httpx.AsyncClient: Configured HTTP client with SSL verification,
                timeout settings, and user agent header.
        """
        try:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            verify_ssl: ssl.SSLContext | bool = ssl_context
            logger.debug("Using certifi SSL context.")
        except Exception:
            verify_ssl = True
            logger.warning(
                "certifi not found or failed to load. Using default SSL verification."
            )

        return httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            headers={"User-Agent": self._settings.user_agent},
        )

    def _url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _run_post_request_hooks(self, response: httpx.Response, parsed: Any) -> None:
        for hook in self._settings.post_request_hooks:
            try:
                hook(response, parsed)
            except Exception as e:
                logger.error(
                    f"Error executing post-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                )

    async def _send(
        self, spec: RequestSpec, *, include_format: bool = True
    ) -> httpx.Response:
        """Build, authenticate and send the request described by ``spec``.

        Raises:
            ValidationError: If the endpoint template and the URL segment
                parameters do not match. Raised before anything is sent.
            httpx.TransportError: On network failures, unmodified.
        """
        default_params = [
            (name, value)
            for name, value in self._default_params
            if include_format or name != FORMAT_PARAM
        ]
        content = spec.xml_body()
        headers = {"Content-Type": "application/xml"} if content is not None else {}
        request_data = RequestData(
            method=spec.method,
            url=self._url_for(spec.render_path()),
            params=default_params + spec.query_params(),
            content=content,
            headers=headers,
        )

        # --- Pre-Request Hooks ---
        if self._settings.pre_request_hooks:
            hook_params = list(request_data.params or [])
            hook_headers = httpx.Headers(request_data.headers)
            logger.debug(
                f"Executing {len(self._settings.pre_request_hooks)} pre-request hooks "
                f"for {request_data.method} {request_data.url}"
            )
            for hook in self._settings.pre_request_hooks:
                try:
                    hook(request_data.method, request_data.url, hook_params, hook_headers)
                except Exception as e:
                    logger.error(
                        f"Error executing pre-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                    )
            request_data.params = hook_params
            request_data.headers = {k: v for k, v in hook_headers.items()}

        request = request_data.build_request()
        await self._auth_strategy.async_authenticate(request)

        logger.debug(f"Sending request: {request.method} {request.url}")
        logger.trace(f"Request Headers: {request.headers}")
        if request.content:
            logger.trace(f"Request Body: {request.content.decode()}")

        try:
            response = await self._http_client.send(request)
        except httpx.TransportError as e:
            logger.error(f"{type(e).__name__} for {request.method} {request.url}: {e}")
            raise

        logger.debug(f"Received response: {response.status_code} for {request.url}")
        logger.trace(f"Response Headers: {response.headers}")
        return response

    async def execute_raw(self, spec: RequestSpec) -> RawResult:
        """Send the request and return status and body text untouched.

        Used for endpoints whose body is not XML (bare comma-separated ids)
        and for actions whose only outcome is the status code.
        """
        response = await self._send(spec)
        self._run_post_request_hooks(response, None)
        return RawResult.from_response(response)

    async def execute_typed(self, model: type[T], spec: RequestSpec) -> T:
        """Send the request and parse the body into ``model``.

        The body is parsed whatever the status, since some error responses
        still carry a usable root. When the expected root cannot be found:

        * on a 2xx response, ``model()`` (the zero value) is returned. This
          is how "not found" surfaces for most resources, which makes it
          indistinguishable from a resource that has no data.
        * on any other status, APIError (NotFoundError for 404) is raised
          with the response attached.
        """
        response = await self._send(spec)
        parsed = parse_document(model, response.content, spec.expected_root)

        if parsed is None:
            if not response.is_success:
                error_cls = (
                    NotFoundError
                    if response.status_code == HTTPStatus.NOT_FOUND
                    else APIError
                )
                raise error_cls(
                    f"API request failed with status {response.status_code}",
                    response=response,
                    request=response.request,
                )
            logger.warning(
                f"Expected root '{spec.expected_root}' not found in response from "
                f"{response.request.url}; returning an empty {model.__name__}"
            )
            parsed = model()

        self._run_post_request_hooks(response, parsed)
        return parsed

    async def execute_json(self, model: type[JsonModel], spec: RequestSpec) -> JsonModel:
        """Send the request to a JSON endpoint and validate the body into ``model``.

        The ``format`` default parameter is not sent; the endpoint path
        selects JSON.
        """
        response = await self._send(spec, include_format=False)
        if not response.is_success:
            raise APIError(
                f"API request failed with status {response.status_code}",
                response=response,
                request=response.request,
            )
        try:
            parsed = model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"Response model validation failed for {response.request.url}: {e}")
            raise ParseError(
                f"Could not decode response into {model.__name__}: {e}",
                response=response,
            ) from e

        self._run_post_request_hooks(response, parsed)
        return parsed

    # --- OAuth1 handshake ---

    def build_authorize_url(self, oauth_token: str | None, callback_url: str | None = None) -> str:
        """URL the user visits to grant access to ``oauth_token``."""
        params = {"oauth_token": oauth_token or ""}
        if callback_url:
            params["oauth_callback"] = callback_url
        return f"{self._url_for(AUTHORIZE_PATH)}?{urlencode(params)}"

    async def _handshake(self, path: str, auth: OAuth1Auth) -> httpx.Response:
        request = httpx.Request("POST", self._url_for(path))
        await auth.async_authenticate(request)
        logger.info(f"Requesting OAuth1 credentials from {request.url}")
        try:
            response = await self._http_client.send(request)
        except httpx.TransportError as e:
            logger.error(f"{type(e).__name__} during OAuth1 handshake at {request.url}: {e}")
            raise

        if not response.is_success:
            logger.error(
                f"OAuth1 handshake failed: {response.status_code} - {response.text}"
            )
            raise AuthError(
                f"OAuth1 handshake at {path} failed with status {response.status_code}",
                response=response,
                request=request,
            )
        return response

    async def begin_authorization(self, callback_url: str | None = None) -> RequestToken:
        """Step one: obtain a request token and the URL to authorize it at.

        The token fields are None when the service's answer lacks them;
        callers must check before continuing.

        Raises:
            AuthError: If the service answers with a non-2xx status.
        """
        auth = OAuth1Auth.for_request_token(
            self._credentials.api_key, self._credentials.api_secret
        )
        response = await self._handshake(REQUEST_TOKEN_PATH, auth)
        token, secret = parse_token_response(response.text)
        if token is None or secret is None:
            logger.warning("Request token response lacked oauth_token or oauth_token_secret")
        else:
            logger.info("Obtained OAuth1 request token.")
        return RequestToken(
            token=token,
            secret=secret,
            authorize_url=self.build_authorize_url(token, callback_url),
        )

    async def complete_authorization(
        self, request_token: RequestToken, verifier: str | None = None
    ) -> AccessToken:
        """Step three: exchange an authorized request token for an access token.

        Raises:
            AuthError: If the service answers with a non-2xx status.
        """
        auth = OAuth1Auth.for_access_token(
            self._credentials.api_key,
            self._credentials.api_secret,
            request_token.token,
            request_token.secret,
            verifier=verifier,
        )
        response = await self._handshake(ACCESS_TOKEN_PATH, auth)
        token, secret = parse_token_response(response.text)
        if token is None or secret is None:
            logger.warning("Access token response lacked oauth_token or oauth_token_secret")
        else:
            logger.info("Obtained OAuth1 access token.")
        return AccessToken(token=token, secret=secret)

    async def aclose(self) -> None:
        """Close the underlying HTTP client and the auth strategy."""
        if self._should_close_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug(f"Connection HTTP client closed. Connection ID: {id(self)}.")
        await self._auth_strategy.async_close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.aclose()
