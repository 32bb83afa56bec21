# readloom/resources/updates_client.py
"""Client for the friend update feed."""

from typing import TYPE_CHECKING

from ..endpoints import FRIENDS_UPDATES, UpdateFilter, UpdateType, query_parameter
from ..log_config import logger
from ..models import PaginatedList, Update
from ..types import build_request_spec, query_string
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class UpdatesClient(BaseResourceClient):
    """Client for update feed endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("UpdatesClient initialized.")

    async def get_friends_updates(
        self,
        update_type: UpdateType | None = None,
        update_filter: UpdateFilter | None = None,
        max_updates: int | None = None,
    ) -> list[Update]:
        """Fetch the authorized user's friend updates.

        Returns:
            The updates, or an empty list when the feed has none.
        """
        parameters = []
        if update_type is not None:
            parameters.append(query_parameter(update_type))
        if update_filter is not None:
            parameters.append(query_parameter(update_filter))
        if max_updates is not None:
            parameters.append(query_string("max_updates", max_updates))

        spec = build_request_spec(FRIENDS_UPDATES, parameters, expected_root="updates")
        page = await self._connection.execute_typed(PaginatedList[Update], spec)
        return page.items
