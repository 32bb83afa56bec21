# readloom/resources/owned_books_client.py
"""Client for listing, adding and removing books a user owns."""

from datetime import date
from http import HTTPStatus
from typing import TYPE_CHECKING

from ..endpoints import (
    OWNED_BOOK_ADD,
    OWNED_BOOK_DELETE,
    OWNED_BOOK_INFO,
    OWNED_BOOKS_BY_USER,
)
from ..log_config import logger
from ..models import OwnedBook, OwnedBookSummary, PaginatedList
from ..types import build_request_spec, query_string, url_segment
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class OwnedBooksClient(BaseResourceClient):
    """Client for owned book endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("OwnedBooksClient initialized.")

    async def get_owned_books(self, user_id: int, page: int = 1) -> PaginatedList[OwnedBook]:
        spec = build_request_spec(
            OWNED_BOOKS_BY_USER,
            [query_string("id", user_id), query_string("page", page)],
            expected_root="owned_books",
        )
        return await self._connection.execute_typed(PaginatedList[OwnedBook], spec)

    async def get_owned_book_info(self, owned_book_id: int) -> OwnedBook:
        # The record is nested one level deeper than its name suggests.
        spec = build_request_spec(
            OWNED_BOOK_INFO,
            [url_segment("owned_book_id", owned_book_id)],
            expected_root="owned_book/owned_book",
        )
        return await self._connection.execute_typed(OwnedBook, spec)

    async def add_owned_book(
        self,
        book_id: int,
        condition_code: int,
        description: str | None = None,
        purchase_date: date | None = None,
        purchase_location: str | None = None,
        unique_code: int | None = None,
    ) -> OwnedBookSummary:
        """Record that the authorized user owns a copy of a book.

        Args:
            book_id: The book owned.
            condition_code: The service's condition code (10 unspecified,
                20 new, down to 60 poor).
            description: Optional free-text condition description.
            purchase_date: Optional date of purchase.
            purchase_location: Optional place of purchase.
            unique_code: Optional BookCrossing id.

        Returns:
            The created record as echoed back by the service.
        """
        parameters = [
            query_string("owned_book[book_id]", book_id),
            query_string("owned_book[condition_code]", condition_code),
        ]
        if description:
            parameters.append(query_string("owned_book[condition_description]", description))
        if purchase_date is not None:
            parameters.append(query_string("owned_book[original_purchase_date]", purchase_date))
        if purchase_location:
            parameters.append(
                query_string("owned_book[original_purchase_location]", purchase_location)
            )
        if unique_code is not None:
            parameters.append(query_string("owned_book[unique_code]", unique_code))

        spec = build_request_spec(
            OWNED_BOOK_ADD, parameters, method="POST", expected_root="owned-book"
        )
        return await self._connection.execute_typed(OwnedBookSummary, spec)

    async def delete_owned_book(self, owned_book_id: int) -> bool:
        """Remove an owned book.

        Returns:
            True only if the service answered 204 No Content.
        """
        spec = build_request_spec(
            OWNED_BOOK_DELETE,
            [url_segment("owned_book_id", owned_book_id)],
            method="POST",
        )
        result = await self._connection.execute_raw(spec)
        return result.status_code == HTTPStatus.NO_CONTENT
