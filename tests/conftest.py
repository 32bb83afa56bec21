# tests/conftest.py
import pytest
import pytest_asyncio

from readloom.auth import Credentials
from readloom.config import ApiSettings
from readloom.connection import Connection

BASE_URL = "https://api.example.com"


@pytest.fixture
def settings() -> ApiSettings:
    """Settings with application credentials only."""
    return ApiSettings(
        _env_file=None,
        api_key="test-key",
        api_secret="test-secret",
        base_url=BASE_URL,
    )


@pytest.fixture
def user_settings(settings: ApiSettings) -> ApiSettings:
    """Settings that also carry a user access token pair."""
    return settings.model_copy(
        update={"oauth_token": "user-token", "oauth_token_secret": "user-secret"}
    )


@pytest.fixture
def credentials(settings: ApiSettings) -> Credentials:
    return Credentials.from_settings(settings)


@pytest_asyncio.fixture
async def connection(settings: ApiSettings):
    """An anonymous Connection, closed after the test."""
    conn = Connection(settings=settings)
    yield conn
    await conn.aclose()


def wrap_in_envelope(body: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<GoodreadsResponse><Request><authentication>true</authentication></Request>{body}</GoodreadsResponse>"
    ).encode()


@pytest.fixture
def envelope():
    """Wrap an XML fragment in the service's response envelope."""
    return wrap_in_envelope
