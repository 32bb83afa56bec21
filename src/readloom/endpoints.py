"""Endpoint paths, expected response roots and enum query parameters.

Paths are relative to the configured base URL and may contain ``{name}``
placeholders filled from URL segment parameters. Each enum below is sent as a
single query parameter whose key is given by ``QUERY_PARAMETER_KEYS``.
"""

from enum import Enum

from .types import Parameter, query_string

# --- Books ---
BOOK_BY_ISBN = "book/isbn/{isbn}.xml"
BOOK_BY_ID = "book/show/{book_id}.xml"
BOOK_BY_TITLE = "book/title.xml"
BOOKS_BY_AUTHOR = "author/list/{author_id}"
BOOK_SEARCH = "search"
ISBN_TO_BOOK_ID = "book/isbn_to_id"
BOOK_ID_TO_WORK_ID = "book/id_to_work_id/{book_ids}"
REVIEW_COUNTS = "book/review_counts.json"

# --- Groups ---
GROUP_JOIN = "group/join"
GROUPS_BY_USER = "group/list/{user_id}"
GROUP_SEARCH = "group/search"
GROUP_INFO = "group/show/{group_id}"
GROUP_MEMBERS = "group/members/{group_id}"

# --- Owned books ---
OWNED_BOOKS_BY_USER = "owned_books/user"
OWNED_BOOK_INFO = "owned_books/show/{owned_book_id}"
OWNED_BOOK_ADD = "owned_books"
OWNED_BOOK_DELETE = "owned_books/destroy/{owned_book_id}"

# --- Quotes ---
QUOTE_ADD = "quotes"

# --- Topics ---
TOPIC_INFO = "topic/show?id={topic_id}"
TOPICS_BY_FOLDER = "topic/group_folder/{folder_id}"
UNREAD_TOPICS = "topic/unread_group/{group_id}"
TOPIC_CREATE = "topic"

# --- Updates ---
FRIENDS_UPDATES = "updates/friends"

# --- Series ---
SERIES_INFO = "series/{series_id}"
SERIES_BY_WORK = "series/work/{work_id}"


# --- Enum query parameters ---


class BookSearchField(Enum):
    ALL = "all"
    TITLE = "title"
    AUTHOR = "author"
    GENRE = "genre"


class SortGroupList(Enum):
    MY_ACTIVITY = "my_activity"
    MEMBERS = "members"
    LAST_ACTIVITY = "last_activity"
    TITLE = "title"


class SortGroupInfo(Enum):
    UPDATED_AT = "updated_at"
    COMMENTS_COUNT = "comments_count"
    TITLE = "title"
    VIEWS = "views"


class SortGroupMember(Enum):
    LAST_ONLINE = "last_online"
    NUM_COMMENTS = "num_comments"
    DATE_JOINED = "date_joined"
    NUM_BOOKS = "num_books"
    FIRST_NAME = "first_name"


class OrderInfo(Enum):
    ASC = "a"
    DESC = "d"


class GroupFolderSort(Enum):
    COMMENTS_COUNT = "comments_count"
    TITLE = "title"
    UPDATED_AT = "updated_at"
    VIEWS = "views"


class TopicSubjectType(Enum):
    BOOK = "Book"
    GROUP = "Group"


class UpdateType(Enum):
    BOOKS = "books"
    REVIEWS = "reviews"
    STATUSES = "statuses"


class UpdateFilter(Enum):
    FRIENDS = "friends"
    FOLLOWING = "following"
    TOP_FRIENDS = "top_friends"


QUERY_PARAMETER_KEYS: dict[type[Enum], str] = {
    BookSearchField: "search[field]",
    SortGroupList: "sort",
    SortGroupInfo: "sort",
    SortGroupMember: "sort",
    OrderInfo: "order",
    GroupFolderSort: "sort",
    TopicSubjectType: "topic[subject_type]",
    UpdateType: "update",
    UpdateFilter: "update_filter",
}


def query_parameter(value: Enum) -> Parameter:
    """Build the query string parameter an enum member is sent as.

    Raises:
        KeyError: If the enum has no registered query key.
    """
    return query_string(QUERY_PARAMETER_KEYS[type(value)], value.value)
