"""Tests for the Connection transport and the ReadloomClient facade."""

from unittest.mock import MagicMock

import httpx
import pytest
from pydantic import BaseModel

from readloom.auth import NoAuth, OAuth1Auth, RequestToken
from readloom.client import ReadloomClient
from readloom.config import ApiSettings
from readloom.connection import Connection
from readloom.exceptions import (
    APIError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from readloom.models import Book
from readloom.resources import BooksClient, GroupsClient, SeriesClient
from readloom.types import build_request_spec, url_segment

BOOK_BODY = "<book><id>1</id><title>Dune</title></book>"


def book_spec(book_id=1):
    return build_request_spec(
        "book/show/{book_id}.xml", [url_segment("book_id", book_id)], expected_root="book"
    )


class Counts(BaseModel):
    total: int = 0


# --- Construction ---


def test_connection_requires_api_key_and_secret():
    with pytest.raises(ConfigurationError):
        Connection(settings=ApiSettings(_env_file=None, api_key="k"))


@pytest.mark.asyncio
async def test_connection_picks_auth_from_credentials(settings, user_settings):
    anonymous = Connection(settings=settings)
    signed = Connection(settings=user_settings)
    try:
        assert isinstance(anonymous._auth_strategy, NoAuth)
        assert isinstance(signed._auth_strategy, OAuth1Auth)
    finally:
        await anonymous.aclose()
        await signed.aclose()


@pytest.mark.asyncio
async def test_explicit_auth_strategy_wins(user_settings):
    strategy = NoAuth()
    conn = Connection(settings=user_settings, auth_strategy=strategy)
    assert conn._auth_strategy is strategy
    await conn.aclose()


# --- Typed requests ---


@pytest.mark.asyncio
async def test_execute_typed_adds_default_params(connection, httpx_mock, envelope):
    httpx_mock.add_response(content=envelope(BOOK_BODY))

    book = await connection.execute_typed(Book, book_spec(1))

    assert book.title == "Dune"
    request = httpx_mock.get_request()
    assert request.method == "GET"
    assert request.url.path == "/book/show/1.xml"
    assert request.url.params["key"] == "test-key"
    assert request.url.params["format"] == "xml"
    assert "Authorization" not in request.headers


@pytest.mark.asyncio
async def test_execute_typed_missing_root_returns_default(connection, httpx_mock, envelope):
    httpx_mock.add_response(content=envelope("<error>book not found</error>"))

    book = await connection.execute_typed(Book, book_spec(404))

    assert book == Book()
    assert book.id == 0
    assert book.authors is None


@pytest.mark.asyncio
async def test_execute_typed_non_2xx_without_root_raises(connection, httpx_mock):
    httpx_mock.add_response(status_code=500, text="Internal error")

    with pytest.raises(APIError) as exc_info:
        await connection.execute_typed(Book, book_spec())

    assert exc_info.value.status_code == 500
    assert "Status: 500" in str(exc_info.value)


@pytest.mark.asyncio
async def test_execute_typed_404_raises_not_found(connection, httpx_mock):
    httpx_mock.add_response(status_code=404, text="<html>Not found</html>")

    with pytest.raises(NotFoundError):
        await connection.execute_typed(Book, book_spec())


@pytest.mark.asyncio
async def test_execute_typed_non_2xx_with_root_is_parsed(connection, httpx_mock, envelope):
    httpx_mock.add_response(status_code=401, content=envelope(BOOK_BODY))

    book = await connection.execute_typed(Book, book_spec())

    assert book.id == 1


@pytest.mark.asyncio
async def test_missing_placeholder_sends_nothing(connection, httpx_mock):
    spec = build_request_spec("book/show/{book_id}.xml", [], expected_root="book")

    with pytest.raises(ValidationError):
        await connection.execute_typed(Book, spec)

    assert httpx_mock.get_requests() == []


@pytest.mark.asyncio
async def test_transport_error_propagates_unchanged(connection, httpx_mock):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    with pytest.raises(httpx.ConnectError):
        await connection.execute_raw(book_spec())


@pytest.mark.asyncio
async def test_signed_request_carries_oauth_header(user_settings, httpx_mock, envelope):
    httpx_mock.add_response(content=envelope(BOOK_BODY))

    async with Connection(settings=user_settings) as conn:
        await conn.execute_typed(Book, book_spec())

    header = httpx_mock.get_request().headers["Authorization"]
    assert header.startswith("OAuth ")
    assert 'oauth_token="user-token"' in header
    assert 'oauth_consumer_key="test-key"' in header
    assert "oauth_signature=" in header


@pytest.mark.asyncio
async def test_post_with_body_sends_xml(connection, httpx_mock):
    httpx_mock.add_response(status_code=201)
    spec = build_request_spec(
        "review", method="POST", body={"review": {"rating": 5}}
    )

    result = await connection.execute_raw(spec)

    assert result.status_code == 201
    request = httpx_mock.get_request()
    assert request.headers["Content-Type"] == "application/xml"
    assert b"<rating>5</rating>" in request.content


# --- Raw and JSON requests ---


@pytest.mark.asyncio
async def test_execute_raw_returns_text_whatever_the_status(connection, httpx_mock):
    httpx_mock.add_response(status_code=422, text="nope")

    result = await connection.execute_raw(book_spec())

    assert result.status_code == 422
    assert result.text == "nope"
    assert not result.is_success


@pytest.mark.asyncio
async def test_execute_json_omits_format(connection, httpx_mock):
    httpx_mock.add_response(json={"total": 3})

    counts = await connection.execute_json(Counts, build_request_spec("book/review_counts.json"))

    assert counts.total == 3
    request = httpx_mock.get_request()
    assert "format" not in request.url.params
    assert request.url.params["key"] == "test-key"


@pytest.mark.asyncio
async def test_execute_json_invalid_body_raises_parse_error(connection, httpx_mock):
    httpx_mock.add_response(text="<xml/>")

    with pytest.raises(ParseError):
        await connection.execute_json(Counts, build_request_spec("book/review_counts.json"))


@pytest.mark.asyncio
async def test_execute_json_non_2xx_raises(connection, httpx_mock):
    httpx_mock.add_response(status_code=403, json={"error": "forbidden"})

    with pytest.raises(APIError):
        await connection.execute_json(Counts, build_request_spec("book/review_counts.json"))


# --- Hooks ---


@pytest.mark.asyncio
async def test_request_hooks(settings, httpx_mock, envelope):
    def add_tracking(method, url, params, headers):
        params.append(("trace", "1"))
        headers["X-Trace"] = "on"

    def failing_hook(method, url, params, headers):
        raise RuntimeError("ignored")

    post_hook = MagicMock()
    hooked = settings.model_copy(
        update={
            "pre_request_hooks": [failing_hook, add_tracking],
            "post_request_hooks": [post_hook],
        }
    )
    httpx_mock.add_response(content=envelope(BOOK_BODY))

    async with Connection(settings=hooked) as conn:
        book = await conn.execute_typed(Book, book_spec())

    request = httpx_mock.get_request()
    assert request.url.params["trace"] == "1"
    assert request.headers["X-Trace"] == "on"
    post_hook.assert_called_once()
    response, parsed = post_hook.call_args.args
    assert response.status_code == 200
    assert parsed is book


# --- OAuth1 handshake ---


@pytest.mark.asyncio
async def test_begin_authorization(connection, httpx_mock):
    httpx_mock.add_response(text="oauth_token=req-token&oauth_token_secret=req-secret")

    request_token = await connection.begin_authorization("https://app.example/cb")

    assert request_token.token == "req-token"
    assert request_token.secret == "req-secret"
    authorize_url = httpx.URL(request_token.authorize_url)
    assert authorize_url.path == "/oauth/authorize"
    assert authorize_url.params["oauth_token"] == "req-token"
    assert authorize_url.params["oauth_callback"] == "https://app.example/cb"

    request = httpx_mock.get_request()
    assert request.method == "POST"
    assert request.url.path == "/oauth/request_token"
    assert "oauth_token=" not in request.headers["Authorization"]


@pytest.mark.asyncio
async def test_begin_authorization_missing_token(connection, httpx_mock):
    httpx_mock.add_response(text="oauth_problem=unknown")

    request_token = await connection.begin_authorization()

    assert request_token.token is None
    assert request_token.secret is None
    assert "oauth_callback" not in request_token.authorize_url


@pytest.mark.asyncio
async def test_complete_authorization(connection, httpx_mock):
    httpx_mock.add_response(text="oauth_token=access&oauth_token_secret=access-secret")
    request_token = RequestToken(token="req-token", secret="req-secret", authorize_url="")

    access_token = await connection.complete_authorization(request_token, verifier="v1")

    assert access_token.token == "access"
    assert access_token.secret == "access-secret"
    request = httpx_mock.get_request()
    assert request.url.path == "/oauth/access_token"
    assert 'oauth_token="req-token"' in request.headers["Authorization"]
    assert 'oauth_verifier="v1"' in request.headers["Authorization"]


@pytest.mark.asyncio
async def test_handshake_failure_raises_auth_error(connection, httpx_mock):
    httpx_mock.add_response(status_code=401, text="Invalid OAuth Request")

    with pytest.raises(AuthError) as exc_info:
        await connection.begin_authorization()

    assert exc_info.value.status_code == 401


# --- Lifecycle ---


@pytest.mark.asyncio
async def test_aclose_closes_internal_http_client(settings):
    conn = Connection(settings=settings)
    assert not conn._http_client.is_closed
    await conn.aclose()
    assert conn._http_client.is_closed


@pytest.mark.asyncio
async def test_aclose_does_not_close_external_http_client(settings):
    external = httpx.AsyncClient()
    conn = Connection(settings=settings, http_client=external)

    await conn.aclose()

    assert not external.is_closed
    await external.aclose()


@pytest.mark.asyncio
async def test_base_url_override(settings, httpx_mock, envelope):
    httpx_mock.add_response(content=envelope(BOOK_BODY))

    async with Connection(settings=settings, base_url="https://other.example.org/api/") as conn:
        await conn.execute_typed(Book, book_spec())

    assert str(httpx_mock.get_request().url).startswith(
        "https://other.example.org/api/book/show/1.xml?"
    )


# --- ReadloomClient ---


@pytest.mark.asyncio
async def test_client_exposes_resource_clients(settings):
    async with ReadloomClient(settings=settings) as client:
        assert isinstance(client.books, BooksClient)
        assert isinstance(client.groups, GroupsClient)
        assert isinstance(client.series, SeriesClient)
        assert client.books is client.books


@pytest.mark.asyncio
async def test_client_direct_credentials_override_settings(settings):
    async with ReadloomClient(
        settings=settings, oauth_token="t", oauth_token_secret="ts"
    ) as client:
        assert client.credentials.api_key == "test-key"
        assert client.credentials.has_user_token
        assert isinstance(client._auth_strategy, OAuth1Auth)
    assert settings.oauth_token is None


def test_client_without_credentials_raises():
    with pytest.raises(ConfigurationError):
        ReadloomClient(settings=ApiSettings(_env_file=None))
