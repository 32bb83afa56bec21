# readloom/resources/series_client.py
"""Client for book series."""

from typing import TYPE_CHECKING

from ..endpoints import SERIES_BY_WORK, SERIES_INFO
from ..log_config import logger
from ..models import Series, SeriesWorks
from ..types import build_request_spec, url_segment
from .base_client import BaseResourceClient

if TYPE_CHECKING:
    from ..connection import Connection


class SeriesClient(BaseResourceClient):
    """Client for series endpoints."""

    def __init__(self, connection: "Connection"):
        super().__init__(connection)
        logger.debug("SeriesClient initialized.")

    async def get_by_series_id(self, series_id: int) -> Series:
        """Fetch a series with its works, each carrying its position in the series."""
        spec = build_request_spec(
            SERIES_INFO, [url_segment("series_id", series_id)], expected_root="series"
        )
        return await self._connection.execute_typed(Series, spec)

    async def get_list_by_work_id(self, work_id: int) -> SeriesWorks:
        """Fetch every series a work belongs to."""
        spec = build_request_spec(
            SERIES_BY_WORK, [url_segment("work_id", work_id)], expected_root="series_works"
        )
        return await self._connection.execute_typed(SeriesWorks, spec)
