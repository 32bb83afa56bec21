# readloom/resources/base_client.py
"""Defines the base class for all resource clients in the readloom library."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..connection import Connection


class BaseResourceClient:
    """
    Base class for all resource clients.
    """

    def __init__(self, connection: "Connection"):
        """
        Initialize the base resource client.

        Args:
            connection: The connection requests are executed through.
        """
        self._connection = connection
