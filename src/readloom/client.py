import httpx

from .auth import AuthStrategy, Credentials
from .config import ApiSettings, get_settings
from .connection import Connection
from .log_config import logger
from .resources import (
    BooksClient,
    GroupsClient,
    OwnedBooksClient,
    QuotesClient,
    SeriesClient,
    TopicsClient,
    UpdatesClient,
)


class ReadloomClient(Connection):
    """Asynchronous client for the Goodreads API.

    This client bundles one resource client per area of the API on top of a
    single `Connection`, which handles request building, OAuth1 signing and
    response parsing.

    Credentials passed directly to this constructor take precedence over
    those in `settings`. With only an API key and secret the client is
    anonymous: public resources work, user actions (joining groups, adding
    quotes, owned books) fail with a non-2xx status. Use
    `begin_authorization` and `complete_authorization` to obtain a user token
    pair, then build a new client with it.

    Typical usage:
    ```python
    async with ReadloomClient(api_key="...", api_secret="...") as client:
        book = await client.books.get_by_isbn("0441172717")
        print(book.title)
    ```

    Attributes:
        books (BooksClient): Client for book endpoints.
        groups (GroupsClient): Client for group endpoints.
        owned_books (OwnedBooksClient): Client for owned book endpoints.
        quotes (QuotesClient): Client for quote endpoints.
        topics (TopicsClient): Client for topic endpoints.
        updates (UpdatesClient): Client for the update feed.
        series (SeriesClient): Client for series endpoints.
    """

    def __init__(
        self,
        settings: ApiSettings | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        api_key: str | None = None,
        api_secret: str | None = None,
        oauth_token: str | None = None,
        oauth_token_secret: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initializes the ReadloomClient.

        Args:
            settings: An optional `ApiSettings` instance. If `None`, global settings
                are loaded via `readloom.config.get_settings()`.
            auth_strategy: An optional explicit `AuthStrategy` instance. If provided,
                it overrides automatic authentication resolution.
            api_key: The application's API key. Takes precedence over
                `settings.api_key`.
            api_secret: The application's API secret. Takes precedence over
                `settings.api_secret`.
            oauth_token: A user access token. Takes precedence over
                `settings.oauth_token`.
            oauth_token_secret: The user access token secret. Takes precedence
                over `settings.oauth_token_secret`.
            base_url: Optional override of the API origin.
            http_client: Optional pre-configured httpx.AsyncClient instance.

        Raises:
            ConfigurationError: If no API key or secret is available.
        """
        settings = settings or get_settings()
        overrides = {
            "api_key": api_key,
            "api_secret": api_secret,
            "oauth_token": oauth_token,
            "oauth_token_secret": oauth_token_secret,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            logger.debug(f"Credential overrides passed directly: {sorted(overrides)}")
            settings = settings.model_copy(update=overrides)

        super().__init__(
            settings=settings,
            credentials=Credentials.from_settings(settings),
            auth_strategy=auth_strategy,
            base_url=base_url,
            http_client=http_client,
        )

        self._books = BooksClient(self)
        self._groups = GroupsClient(self)
        self._owned_books = OwnedBooksClient(self)
        self._quotes = QuotesClient(self)
        self._topics = TopicsClient(self)
        self._updates = UpdatesClient(self)
        self._series = SeriesClient(self)

        logger.debug("ReadloomClient initialized successfully.")

    @property
    def books(self) -> BooksClient:
        return self._books

    @property
    def groups(self) -> GroupsClient:
        return self._groups

    @property
    def owned_books(self) -> OwnedBooksClient:
        return self._owned_books

    @property
    def quotes(self) -> QuotesClient:
        return self._quotes

    @property
    def topics(self) -> TopicsClient:
        return self._topics

    @property
    def updates(self) -> UpdatesClient:
        return self._updates

    @property
    def series(self) -> SeriesClient:
        return self._series
