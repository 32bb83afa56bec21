"""Summaries of authors and users, embedded in most other responses."""

from ..parsing import (
    Element,
    element_as_float,
    element_as_int,
    element_as_string,
    require_element,
)
from .base import ApiResponse


class AuthorSummary(ApiResponse):
    """An author as listed on a book or work."""

    xml_name = "author"

    id: int = 0
    name: str = ""
    role: str = ""
    image_url: str = ""
    small_image_url: str = ""
    link: str = ""
    average_rating: float = 0.0
    ratings_count: int = 0
    text_reviews_count: int = 0

    def parse(self, element: Element) -> None:
        element = require_element(element, "AuthorSummary")
        self.id = element_as_int(element, "id")
        self.name = element_as_string(element, "name")
        self.role = element_as_string(element, "role")
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.small_image_url = element_as_string(element, "small_image_url", trim=True)
        self.link = element_as_string(element, "link", trim=True)
        self.average_rating = element_as_float(element, "average_rating")
        self.ratings_count = element_as_int(element, "ratings_count")
        self.text_reviews_count = element_as_int(element, "text_reviews_count")


class UserSummary(ApiResponse):
    xml_name = "user"

    id: int = 0
    name: str = ""
    user_name: str = ""
    link: str = ""
    image_url: str = ""
    small_image_url: str = ""

    def parse(self, element: Element) -> None:
        element = require_element(element, "UserSummary")
        self.id = element_as_int(element, "id")
        self.name = element_as_string(element, "name")
        self.user_name = element_as_string(element, "user_name")
        self.link = element_as_string(element, "link", trim=True)
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.small_image_url = element_as_string(element, "small_image_url", trim=True)
