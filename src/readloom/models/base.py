"""Base models for readloom domain objects.

Every domain object is a pydantic model whose fields all have defaults, so a
bare ``Model()`` is that type's zero value. The connection returns exactly
that when the expected root of a response cannot be found. Population from
XML happens through ``parse(element)``, the ``Parseable`` capability the
generic parsing driver relies on.
"""

from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..parsing import Element, attribute_as_int, element_as_int, require_element

ItemType = TypeVar("ItemType", bound="ApiResponse")


class ApiResponse(BaseModel):
    """Base class for every object hydrated from an XML response.

    Attributes:
        xml_name: Tag name of the element this model is parsed from when it
            appears as an item in a list.
    """

    xml_name: ClassVar[str] = ""

    model_config = ConfigDict(extra="allow")

    def parse(self, element: Element) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not implement parse()")


class PaginatedList(ApiResponse, Generic[ItemType]):
    """A page of results plus its position in the full result set.

    Most list responses carry ``start``, ``end`` and ``total`` attributes on
    the list element itself; search responses use ``results-start``,
    ``results-end`` and ``total-results`` children and nest the items in a
    ``results`` element. The item count is not checked against
    ``end - start + 1``.

    Attributes:
        items: The parsed items, in document order.
        start: 1-based index of the first item on this page.
        end: Index of the last item on this page.
        total: Total number of items across all pages.
    """

    items: list[ItemType] = Field(default_factory=list)
    start: int = 0
    end: int = 0
    total: int = 0

    @classmethod
    def item_type(cls) -> type[ApiResponse]:
        args = cls.__pydantic_generic_metadata__["args"]
        if not args:
            raise TypeError(
                "PaginatedList must be parametrized with an item type, e.g. PaginatedList[Book]"
            )
        return args[0]

    def parse(self, element: Element) -> None:
        element = require_element(element, "PaginatedList")
        item_type = self.item_type()

        if element.get("start") is not None or element.get("total") is not None:
            self.start = attribute_as_int(element, "start")
            self.end = attribute_as_int(element, "end")
            self.total = attribute_as_int(element, "total")
        else:
            self.start = element_as_int(element, "results-start")
            self.end = element_as_int(element, "results-end")
            self.total = element_as_int(element, "total-results")

        container = element.find("results")
        if container is None:
            container = element

        items = []
        for node in container.iterchildren(item_type.xml_name):
            item = item_type()
            item.parse(node)
            items.append(item)
        self.items = items
