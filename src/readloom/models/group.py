"""Models for groups, their folders and members."""

from datetime import datetime

from ..parsing import (
    Element,
    element_as_bool,
    element_as_datetime,
    element_as_int,
    element_as_string,
    parse_list,
    parse_optional,
    require_element,
)
from .base import ApiResponse
from .people import UserSummary


class GroupSummary(ApiResponse):
    """A group as listed in search results and a user's group list."""

    xml_name = "group"

    id: int = 0
    title: str = ""
    access: str = ""
    users_count: int = 0
    image_url: str = ""
    last_activity_at: datetime | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "GroupSummary")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.access = element_as_string(element, "access")
        self.users_count = element_as_int(element, "users_count")
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.last_activity_at = element_as_datetime(element, "last_activity_at")


class GroupFolder(ApiResponse):
    xml_name = "folder"

    id: int = 0
    name: str = ""
    items_count: int = 0
    sub_items_count: int = 0
    updated_at: datetime | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "GroupFolder")
        self.id = element_as_int(element, "id")
        self.name = element_as_string(element, "name")
        self.items_count = element_as_int(element, "items_count")
        self.sub_items_count = element_as_int(element, "sub_items_count")
        self.updated_at = element_as_datetime(element, "updated_at")


class GroupUser(ApiResponse):
    """Membership of a user in a group."""

    xml_name = "group_user"

    id: int = 0
    title: str = ""
    comments_count: int = 0
    created_at: datetime | None = None
    last_active_at: datetime | None = None
    user: UserSummary | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "GroupUser")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.comments_count = element_as_int(element, "comments_count")
        self.created_at = element_as_datetime(element, "created_at")
        self.last_active_at = element_as_datetime(element, "last_active_at")
        self.user = parse_optional(element, "user", UserSummary)


class Group(ApiResponse):
    """Full information about a single group."""

    xml_name = "group"

    id: int = 0
    title: str = ""
    access: str = ""
    location: str = ""
    description: str = ""
    category: str = ""
    subcategory: str = ""
    rules: str = ""
    image_url: str = ""
    users_count: int = 0
    display_folder_count: int = 0
    display_topics_per_folder_count: int = 0
    is_bookshelves_public: bool = False
    is_add_books_allowed: bool = False
    is_add_events_allowed: bool = False
    is_polls_allowed: bool = False
    is_discussion_public: bool = False
    is_real_world: bool = False
    is_accepting_new_members: bool = False
    last_activity_at: datetime | None = None
    folders: list[GroupFolder] | None = None
    moderators: list[GroupUser] | None = None
    members: list[GroupUser] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Group")
        self.id = element_as_int(element, "id")
        self.title = element_as_string(element, "title")
        self.access = element_as_string(element, "access")
        self.location = element_as_string(element, "location")
        self.description = element_as_string(element, "description", trim=True)
        self.category = element_as_string(element, "category")
        self.subcategory = element_as_string(element, "subcategory")
        self.rules = element_as_string(element, "rules", trim=True)
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.users_count = element_as_int(element, "users_count")
        self.display_folder_count = element_as_int(element, "display_folder_count")
        self.display_topics_per_folder_count = element_as_int(
            element, "display_topics_per_folder_count"
        )
        self.is_bookshelves_public = element_as_bool(element, "bookshelves_public_flag")
        self.is_add_books_allowed = element_as_bool(element, "add_books_flag")
        self.is_add_events_allowed = element_as_bool(element, "add_events_flag")
        self.is_polls_allowed = element_as_bool(element, "polls_flag")
        self.is_discussion_public = element_as_bool(element, "discussion_public_flag")
        self.is_real_world = element_as_bool(element, "real_world_flag")
        self.is_accepting_new_members = element_as_bool(
            element, "accepting_new_members_flag"
        )
        self.last_activity_at = element_as_datetime(element, "last_activity_at")
        self.folders = parse_list(element, "folders", "folder", GroupFolder)
        self.moderators = parse_list(element, "moderators", "group_user", GroupUser)
        self.members = parse_list(element, "members", "group_user", GroupUser)
