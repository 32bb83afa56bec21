"""Custom exception classes for the readloom library."""

import httpx


class ReadloomError(Exception):
    """Base exception class for all readloom errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    @property
    def status_code(self) -> int | None:
        """The HTTP status of the attached response, if any."""
        if self.response is None:
            return None
        return self.response.status_code

    def __str__(self) -> str:
        if self.response is not None:
            url_info = getattr(getattr(self.response, "request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


class APIError(ReadloomError):
    """A typed request got a non-2xx status and no usable payload."""


class NotFoundError(APIError):
    """Represents a resource not found error (404 Not Found)."""


class ValidationError(ReadloomError):
    """Represents a caller contract violation.

    Raised on the client side before any request is sent, e.g. a path
    placeholder without a matching parameter, or an operation that needs
    either a book id or an ISBN and received neither.
    """


class ConfigurationError(ReadloomError):
    """Represents an error in the library's configuration."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


class AuthError(ReadloomError):
    """Raised when a step of the OAuth1 handshake fails.

    The failed response is attached, so callers can inspect
    ``error.status_code``.
    """


class ParseError(ReadloomError):
    """Raised when a JSON response cannot be decoded into the expected model."""
