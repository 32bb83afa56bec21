# readloom/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_BASE_URL, DEFAULT_RESPONSE_FORMAT, DEFAULT_USER_AGENT
from .types import PostRequestHook, PreRequestHook


class ApiSettings(BaseSettings):
    """
    Manages user-configurable settings for the readloom client, primarily
    loaded from environment variables (prefixed with 'READLOOM_') or a .env file.

    The API key/secret identify the application; the OAuth token pair, once
    obtained through the three-legged handshake, lets requests act on behalf
    of a user.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "secrets.env"),
        env_file_encoding="utf-8",
        env_prefix="READLOOM_",
        extra="ignore",
        case_sensitive=False,
        arbitrary_types_allowed=True,  # Allow hook callables
    )

    # --- Credentials ---
    api_key: str | None = Field(default=None, description="Application API key")
    api_secret: str | None = Field(
        default=None, description="Application API secret"
    )
    oauth_token: str | None = Field(
        default=None, description="User OAuth access token (optional)"
    )
    oauth_token_secret: str | None = Field(
        default=None, description="User OAuth access token secret (optional)"
    )

    # --- Client Behavior Settings ---
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Origin all endpoints are relative to"
    )
    response_format: str = Field(
        default=DEFAULT_RESPONSE_FORMAT,
        description="Value of the 'format' query parameter sent with every request",
    )
    request_timeout: float = Field(
        default=30.0, description="Default request timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests",
    )

    # --- Hook Settings ---
    pre_request_hooks: list[PreRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call before a request is made.",
    )
    post_request_hooks: list[PostRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call after a response is received and parsed.",
    )


@lru_cache
def get_settings() -> ApiSettings:
    """
    Provides access to the application settings.

    Settings are loaded from environment variables (prefixed with 'READLOOM_')
    or .env/secrets.env files. The instance is cached for performance.

    Returns:
        ApiSettings: The application settings instance.
    """
    return ApiSettings()
