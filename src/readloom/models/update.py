"""Models for the friend update feed."""

from datetime import datetime

from ..parsing import (
    Element,
    attribute_as_string,
    element_as_datetime,
    element_as_string,
    parse_optional,
    require_element,
)
from .base import ApiResponse
from .people import UserSummary


class Update(ApiResponse):
    """One entry of the update feed (a review, a status, a rating...)."""

    xml_name = "update"

    update_type: str = ""
    action_type: str = ""
    action_text: str = ""
    link: str = ""
    image_url: str = ""
    actor: UserSummary | None = None
    updated_at: datetime | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Update")
        self.update_type = attribute_as_string(element, "type")
        self.action_type = attribute_as_string(element.find("action"), "type")
        self.action_text = element_as_string(element, "action_text", trim=True)
        self.link = element_as_string(element, "link", trim=True)
        self.image_url = element_as_string(element, "image_url", trim=True)
        self.actor = parse_optional(element, "actor", UserSummary)
        self.updated_at = element_as_datetime(element, "updated_at")
