"""Models for books a user physically owns."""

from datetime import datetime

from ..parsing import (
    Element,
    element_as_bool,
    element_as_datetime,
    element_as_int,
    element_as_string,
    parse_optional,
    require_element,
)
from .base import ApiResponse
from .book import BookSummary


class OwnedBook(ApiResponse):
    """An owned copy of a book, as listed for a user."""

    xml_name = "owned_book"

    id: int = 0
    owner_id: int = 0
    current_owner_id: int = 0
    current_owner_name: str = ""
    original_purchase_date: datetime | None = None
    original_purchase_location: str = ""
    condition: str = ""
    traded_count: int = 0
    link: str = ""
    book: BookSummary | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "OwnedBook")
        self.id = element_as_int(element, "id")
        self.owner_id = element_as_int(element, "owner_id")
        self.current_owner_id = element_as_int(element, "current_owner_id")
        self.current_owner_name = element_as_string(element, "current_owner_name")
        self.original_purchase_date = element_as_datetime(
            element, "original_purchase_date"
        )
        self.original_purchase_location = element_as_string(
            element, "original_purchase_location"
        )
        self.condition = element_as_string(element, "condition")
        self.traded_count = element_as_int(element, "traded_count")
        self.link = element_as_string(element, "link", trim=True)
        self.book = parse_optional(element, "book", BookSummary)


class OwnedBookSummary(ApiResponse):
    """The record the service echoes back after adding an owned book.

    Unlike the rest of the API this response uses hyphenated element names.
    """

    xml_name = "owned-book"

    id: int = 0
    book_id: int = 0
    user_id: int = 0
    work_id: int = 0
    review_id: int = 0
    condition_code: int = 0
    condition_description: str = ""
    original_purchase_date: datetime | None = None
    original_purchase_location: str = ""
    unique_code: str = ""
    is_available_for_swap: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "OwnedBookSummary")
        self.id = element_as_int(element, "id")
        self.book_id = element_as_int(element, "book-id")
        self.user_id = element_as_int(element, "user-id")
        self.work_id = element_as_int(element, "work-id")
        self.review_id = element_as_int(element, "review-id")
        self.condition_code = element_as_int(element, "condition-code")
        self.condition_description = element_as_string(element, "condition-description")
        self.original_purchase_date = element_as_datetime(
            element, "original-purchase-date"
        )
        self.original_purchase_location = element_as_string(
            element, "original-purchase-location"
        )
        self.unique_code = element_as_string(element, "unique-code")
        self.is_available_for_swap = element_as_bool(element, "available-for-swap")
        self.created_at = element_as_datetime(element, "created-at")
        self.updated_at = element_as_datetime(element, "updated-at")
