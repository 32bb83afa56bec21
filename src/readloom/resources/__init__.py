# readloom/resources/__init__.py
"""Exposes the resource client classes."""

from .base_client import BaseResourceClient
from .books_client import BooksClient
from .groups_client import GroupsClient
from .owned_books_client import OwnedBooksClient
from .quotes_client import QuotesClient
from .series_client import SeriesClient
from .topics_client import TopicsClient
from .updates_client import UpdatesClient

__all__ = [
    "BaseResourceClient",
    "BooksClient",
    "GroupsClient",
    "OwnedBooksClient",
    "QuotesClient",
    "SeriesClient",
    "TopicsClient",
    "UpdatesClient",
]
