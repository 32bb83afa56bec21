# readloom/resources/quotes_client.py
"""Client for adding quotes."""

from http import HTTPStatus
from typing import TYPE_CHECKING

from ..endpoints import QUOTE_ADD
from ..exceptions import ValidationError
from ..log_config import logger
from ..types import build_request_spec, query_string
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class QuotesClient(BaseResourceClient):
    """Client for quote endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("QuotesClient initialized.")

    async def add(
        self,
        author_id: int,
        author_name: str,
        quote: str,
        book_id: int | None = None,
        isbn: str | None = None,
    ) -> bool:
        """Add a quote for the authorized user.

        Either ``book_id`` or ``isbn`` must identify the book quoted.

        Returns:
            True only if the service answered 201 Created.

        Raises:
            ValidationError: If neither ``book_id`` nor ``isbn`` is given.
                Nothing is sent in that case.
        """
        if book_id is None and not (isbn and isbn.strip()):
            raise ValidationError("Either book_id or isbn must be given to add a quote.")

        parameters = [
            query_string("quote[author_name]", author_name),
            query_string("quote[author_id]", author_id),
            query_string("quote[body]", quote),
        ]
        if book_id is not None:
            parameters.append(query_string("quote[book_id]", book_id))
        if isbn and isbn.strip():
            parameters.append(query_string("isbn", isbn))

        spec = build_request_spec(QUOTE_ADD, parameters, method="POST")
        result = await self._connection.execute_raw(spec)
        return result.status_code == HTTPStatus.CREATED
