# readloom/resources/books_client.py
"""Client for the book lookup, search and id-mapping endpoints.

Most calls return typed models parsed from the XML response. Two lookups
answer with something simpler (a bare comma-separated list, or a tiny XML
document of ids) and are parsed here directly, and review statistics are
only available as JSON.
"""

from typing import TYPE_CHECKING

from ..endpoints import (
    BOOK_BY_ID,
    BOOK_BY_ISBN,
    BOOK_BY_TITLE,
    BOOK_ID_TO_WORK_ID,
    BOOK_SEARCH,
    BOOKS_BY_AUTHOR,
    ISBN_TO_BOOK_ID,
    REVIEW_COUNTS,
    BookSearchField,
    query_parameter,
)
from ..log_config import logger
from ..models import Book, PaginatedList, ReviewStats, ReviewStatsContainer, Work
from ..parsing import locate_root, parse_xml
from ..types import build_request_spec, query_string, url_segment
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


def _parse_id(text: str) -> int | None:
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        logger.debug(f"Ignoring unparseable id '{text}'")
        return None


class BooksClient(BaseResourceClient):
    """Client for book endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("BooksClient initialized.")

    async def get_by_isbn(self, isbn: str) -> Book:
        """Fetch a book by ISBN. An unknown ISBN yields an empty Book."""
        spec = build_request_spec(
            BOOK_BY_ISBN, [url_segment("isbn", isbn)], expected_root="book"
        )
        return await self._connection.execute_typed(Book, spec)

    async def get_by_book_id(self, book_id: int) -> Book:
        """Fetch a book by its id. An unknown id yields an empty Book."""
        spec = build_request_spec(
            BOOK_BY_ID, [url_segment("book_id", book_id)], expected_root="book"
        )
        return await self._connection.execute_typed(Book, spec)

    async def get_by_title(
        self, title: str, author: str | None = None, rating: int | None = None
    ) -> Book:
        """Fetch the best match for a title, optionally narrowed by author.

        Args:
            title: The title to look up.
            author: Optional author name.
            rating: Optional minimum average rating.
        """
        parameters = [query_string("title", title)]
        if author:
            parameters.append(query_string("author", author))
        if rating is not None:
            parameters.append(query_string("rating", rating))
        spec = build_request_spec(BOOK_BY_TITLE, parameters, expected_root="book")
        return await self._connection.execute_typed(Book, spec)

    async def get_list_by_author_id(self, author_id: int, page: int = 1) -> PaginatedList[Book]:
        """Fetch one page of an author's books."""
        spec = build_request_spec(
            BOOKS_BY_AUTHOR,
            [url_segment("author_id", author_id), query_string("page", page)],
            expected_root="author/books",
        )
        return await self._connection.execute_typed(PaginatedList[Book], spec)

    async def search(
        self,
        search_term: str,
        page: int = 1,
        search_field: BookSearchField = BookSearchField.ALL,
    ) -> PaginatedList[Work]:
        """Search books by title, author or genre.

        Returns:
            A page of works, each carrying its best-known edition.
        """
        spec = build_request_spec(
            BOOK_SEARCH,
            [
                query_string("q", search_term),
                query_string("page", page),
                query_parameter(search_field),
            ],
            expected_root="search",
        )
        return await self._connection.execute_typed(PaginatedList[Work], spec)

    async def get_book_id_for_isbn(self, isbn: str) -> int | None:
        book_ids = await self.get_book_ids_for_isbns([isbn])
        return book_ids[0] if book_ids else None

    async def get_book_ids_for_isbns(self, isbns: list[str]) -> list[int | None] | None:
        """Map ISBNs to book ids in a single call.

        The endpoint answers with a bare comma-separated list, one entry per
        ISBN in request order, where an unknown ISBN leaves an empty entry.

        Returns:
            A list the same length as the answer with None for unknown ISBNs,
            or None if the request failed or the body was blank.
        """
        spec = build_request_spec(
            ISBN_TO_BOOK_ID, [query_string("isbn", ",".join(isbns))]
        )
        result = await self._connection.execute_raw(spec)
        if not result.is_success or not result.text.strip():
            logger.debug(f"No book ids resolved for {len(isbns)} ISBN(s)")
            return None
        return [_parse_id(entry) for entry in result.text.split(",")]

    async def get_work_ids_for_book_ids(self, book_ids: list[int]) -> list[int | None] | None:
        """Map book ids to the ids of their works.

        Returns:
            One entry per ``item`` of the answer (None where blank), or None
            if the request failed or the body was not usable XML.
        """
        spec = build_request_spec(
            BOOK_ID_TO_WORK_ID,
            [url_segment("book_ids", ",".join(str(b) for b in book_ids))],
        )
        result = await self._connection.execute_raw(spec)
        if not result.is_success or not result.text.strip():
            return None
        work_ids = locate_root(parse_xml(result.text), "work-ids")
        if work_ids is None:
            return []
        return [_parse_id(item.text or "") for item in work_ids.iterfind("item")]

    async def get_review_stats_for_isbns(self, isbns: list[str]) -> list[ReviewStats]:
        """Fetch rating and review counts for each ISBN."""
        spec = build_request_spec(
            REVIEW_COUNTS, [query_string("isbns", ",".join(isbns))]
        )
        container = await self._connection.execute_json(ReviewStatsContainer, spec)
        return container.books
