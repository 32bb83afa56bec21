"""Models for discussion topics and their comments."""

from datetime import datetime

from ..parsing import (
    Element,
    element_as_datetime,
    element_as_int,
    element_as_string,
    parse_optional,
    require_element,
)
from .base import ApiResponse, PaginatedList
from .group import GroupFolder
from .people import UserSummary


class Comment(ApiResponse):
    xml_name = "comment"

    id: int = 0
    body: str = ""
    user: UserSummary | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Comment")
        self.id = element_as_int(element, "id")
        self.body = element_as_string(element, "body", trim=True)
        self.user = parse_optional(element, "user", UserSummary)
        self.created_at = element_as_datetime(element, "created_at")
        self.updated_at = element_as_datetime(element, "updated_at")


class Topic(ApiResponse):
    """A discussion topic, attached to a group or a book.

    Attributes:
        subject_type: What the topic is about, e.g. "Group" or "Book".
        comments: The first page of comments, when the response includes it.
    """

    xml_name = "topic"

    id: int = 0
    title: str = ""
    subject_type: str = ""
    subject_id: int = 0
    author_user_id: int = 0
    author: UserSummary | None = None
    comments_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_comment_at: datetime | None = None
    folder: GroupFolder | None = None
    comments: PaginatedList[Comment] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Topic")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.subject_type = element_as_string(element, "subject_type")
        self.subject_id = element_as_int(element, "subject_id")
        self.author_user_id = element_as_int(element, "author_user_id")
        self.author = parse_optional(element, "author", UserSummary)
        self.comments_count = element_as_int(element, "comments_count")
        self.created_at = element_as_datetime(element, "created_at")
        self.updated_at = element_as_datetime(element, "updated_at")
        self.last_comment_at = element_as_datetime(element, "last_comment_at")
        self.folder = parse_optional(element, "folder", GroupFolder)
        self.comments = parse_optional(element, "comments", PaginatedList[Comment])
