"""Readloom: an asynchronous client for the Goodreads API.

This package signs requests with OAuth1, sends them over httpx and maps the
service's irregular XML responses onto typed domain models.
"""

__version__ = "0.1.0"

from . import auth, config, endpoints, exceptions, log_config, models, parsing, resources, types
from .auth import AccessToken, Credentials, OAuth1Auth, RequestToken
from .client import ReadloomClient
from .config import ApiSettings, get_settings
from .connection import Connection
from .exceptions import (
    APIError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    ParseError,
    ReadloomError,
    ValidationError,
)

__all__ = [
    "__version__",
    "APIError",
    "AccessToken",
    "ApiSettings",
    "AuthError",
    "ConfigurationError",
    "Connection",
    "Credentials",
    "NotFoundError",
    "OAuth1Auth",
    "ParseError",
    "ReadloomClient",
    "ReadloomError",
    "RequestToken",
    "ValidationError",
    "auth",
    "config",
    "endpoints",
    "exceptions",
    "get_settings",
    "log_config",
    "models",
    "parsing",
    "resources",
    "types",
]
