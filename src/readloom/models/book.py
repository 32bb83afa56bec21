"""Models for books, their editions' shared work, and related links."""

from datetime import date

from ..parsing import (
    Element,
    element_as_bool,
    element_as_date_parts,
    element_as_float,
    element_as_int,
    element_as_long,
    element_as_string,
    parse_count_map,
    parse_list,
    parse_optional,
    require_element,
)
from .base import ApiResponse
from .people import AuthorSummary


class BookLink(ApiResponse):
    """A library or store link for a book.

    The service returns links that only work once the owning book's id is
    appended, so the parent ``Book`` stamps its id onto every link after the
    list has been parsed (see ``fix_book_link``).
    """

    xml_name = "book_link"

    id: int = 0
    name: str = ""
    link: str = ""
    book_id: int = 0

    def parse(self, element: Element) -> None:
        element = require_element(element, "BookLink")
        self.id = element_as_int(element, "id")
        self.name = element_as_string(element, "name")
        self.link = element_as_string(element, "link", trim=True)

    def fix_book_link(self, book_id: int) -> None:
        self.book_id = book_id
        if self.link and "book_id=" not in self.link:
            separator = "&" if "?" in self.link else "?"
            self.link = f"{self.link}{separator}book_id={book_id}"


class BookSummary(ApiResponse):
    """Abbreviated book information, as found in lists and nested results."""

    xml_name = "book"

    id: int = 0
    title: str = ""
    title_without_series: str = ""
    link: str = ""
    image_url: str = ""
    small_image_url: str = ""
    num_pages: int = 0
    isbn: str = ""
    isbn13: str = ""
    average_rating: float = 0.0
    ratings_count: int = 0
    publication_date: date | None = None
    authors: list[AuthorSummary] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "BookSummary")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.title_without_series = element_as_string(element, "title_without_series")
        self.link = element_as_string(element, "link", trim=True)
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.small_image_url = element_as_string(element, "small_image_url", trim=True)
        self.num_pages = element_as_int(element, "num_pages")
        self.isbn = element_as_string(element, "isbn")
        self.isbn13 = element_as_string(element, "isbn13")
        self.average_rating = element_as_float(element, "average_rating")
        self.ratings_count = element_as_int(element, "ratings_count")
        self.publication_date = element_as_date_parts(element, "publication")

        self.authors = parse_list(element, "authors", "author", AuthorSummary)
        if self.authors is None:
            # Search results carry a single <author> instead of a list
            author = parse_optional(element, "author", AuthorSummary)
            if author is not None:
                self.authors = [author]


class Work(ApiResponse):
    """The aggregate of all editions of a book.

    ``user_position`` does not come from the ``<work>`` element itself: in
    series listings it is a field of the surrounding ``<series_work>``
    wrapper, and ``Series`` copies it in via ``set_user_position``.
    """

    xml_name = "work"

    id: int = 0
    books_count: int = 0
    best_book_id: int = 0
    best_book: BookSummary | None = None
    reviews_count: int = 0
    ratings_sum: int = 0
    ratings_count: int = 0
    text_reviews_count: int = 0
    average_rating: float = 0.0
    original_publication_date: date | None = None
    original_title: str = ""
    original_language_id: int = 0
    media_type: str = ""
    rating_distribution: str = ""
    user_position: str = ""

    def parse(self, element: Element) -> None:
        element = require_element(element, "Work")
        self.id = element_as_long(element, "id")
        self.books_count = element_as_int(element, "books_count")
        self.best_book = parse_optional(element, "best_book", BookSummary)
        self.best_book_id = element_as_long(element, "best_book_id")
        if not self.best_book_id and self.best_book is not None:
            self.best_book_id = self.best_book.id
        self.reviews_count = element_as_int(element, "reviews_count")
        self.ratings_sum = element_as_int(element, "ratings_sum")
        self.ratings_count = element_as_int(element, "ratings_count")
        self.text_reviews_count = element_as_int(element, "text_reviews_count")
        self.average_rating = element_as_float(element, "average_rating")
        self.original_publication_date = element_as_date_parts(
            element, "original_publication"
        )
        self.original_title = element_as_string(element, "original_title")
        self.original_language_id = element_as_int(element, "original_language_id")
        self.media_type = element_as_string(element, "media_type")
        self.rating_distribution = element_as_string(element, "rating_dist")

    def set_user_position(self, user_position: str) -> None:
        self.user_position = user_position


class Book(ApiResponse):
    """A single book (one edition) with its work, authors and links.

    Attributes:
        popular_shelves: Shelf name -> number of users who shelved the book
            there. None when the response has no ``popular_shelves`` element.
        book_links: Libraries the book can be borrowed from.
        buy_links: Third-party stores the book can be bought from.
    """

    xml_name = "book"

    id: int = 0
    title: str = ""
    description: str = ""
    isbn: str = ""
    isbn13: str = ""
    asin: str = ""
    kindle_asin: str = ""
    marketplace_id: str = ""
    country_code: str = ""
    image_url: str = ""
    small_image_url: str = ""
    publication_date: date | None = None
    publisher: str = ""
    language_code: str = ""
    is_ebook: bool = False
    average_rating: float = 0.0
    pages: int = 0
    format: str = ""
    edition_information: str = ""
    ratings_count: int = 0
    text_reviews_count: int = 0
    url: str = ""
    work: Work | None = None
    authors: list[AuthorSummary] | None = None
    popular_shelves: dict[str, int] | None = None
    book_links: list[BookLink] | None = None
    buy_links: list[BookLink] | None = None
    similar_books: list[BookSummary] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Book")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.isbn = element_as_string(element, "isbn")
        self.isbn13 = element_as_string(element, "isbn13")
        self.asin = element_as_string(element, "asin")
        self.kindle_asin = element_as_string(element, "kindle_asin")
        self.marketplace_id = element_as_string(element, "marketplace_id")
        self.country_code = element_as_string(element, "country_code")
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.small_image_url = element_as_string(element, "small_image_url", trim=True)
        self.publication_date = element_as_date_parts(element, "publication")
        self.publisher = element_as_string(element, "publisher")
        self.language_code = element_as_string(element, "language_code")
        self.is_ebook = element_as_bool(element, "is_ebook")
        self.description = element_as_string(element, "description")
        self.average_rating = element_as_float(element, "average_rating")
        self.pages = element_as_int(element, "num_pages")
        self.format = element_as_string(element, "format")
        self.edition_information = element_as_string(element, "edition_information")
        self.ratings_count = element_as_int(element, "ratings_count")
        self.text_reviews_count = element_as_int(element, "text_reviews_count")
        self.url = element_as_string(element, "url", trim=True)

        self.work = parse_optional(element, "work", Work)
        self.authors = parse_list(element, "authors", "author", AuthorSummary)
        self.popular_shelves = parse_count_map(element, "popular_shelves", "shelf")
        self.book_links = parse_list(element, "book_links", "book_link", BookLink)
        self.buy_links = parse_list(element, "buy_links", "buy_link", BookLink)
        self.similar_books = parse_list(element, "similar_books", "book", BookSummary)

        for link in (self.book_links or []) + (self.buy_links or []):
            link.fix_book_link(self.id)
