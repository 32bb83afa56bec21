"""Domain models hydrated from the service's responses."""

from .base import ApiResponse, PaginatedList
from .book import Book, BookLink, BookSummary, Work
from .group import Group, GroupFolder, GroupSummary, GroupUser
from .owned_book import OwnedBook, OwnedBookSummary
from .people import AuthorSummary, UserSummary
from .review_stats import ReviewStats, ReviewStatsContainer
from .series import Series, SeriesWorks
from .topic import Comment, Topic
from .update import Update

__all__ = [
    "ApiResponse",
    "AuthorSummary",
    "Book",
    "BookLink",
    "BookSummary",
    "Comment",
    "Group",
    "GroupFolder",
    "GroupSummary",
    "GroupUser",
    "OwnedBook",
    "OwnedBookSummary",
    "PaginatedList",
    "ReviewStats",
    "ReviewStatsContainer",
    "Series",
    "SeriesWorks",
    "Topic",
    "Update",
    "UserSummary",
    "Work",
]
