"""Models for book series."""

from ..parsing import (
    Element,
    element_as_bool,
    element_as_int,
    element_as_long,
    element_as_string,
    require_element,
)
from .base import ApiResponse
from .book import Work


class Series(ApiResponse):
    """A book series and, when the response includes them, its works.

    The service splits a series entry over two elements: a ``<series_work>``
    wrapper holding the user-facing position in the series, and the
    ``<work>`` it wraps. ``works`` merges the two by copying the wrapper's
    ``user_position`` into each ``Work``.
    """

    xml_name = "series"

    id: int = 0
    title: str = ""
    description: str = ""
    note: str = ""
    series_works_count: int = 0
    primary_works_count: int = 0
    is_numbered: bool = False
    works: list[Work] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "Series")
        self.id = element_as_long(element, "id")
        self.title = element_as_string(element, "title", trim=True)
        self.description = element_as_string(element, "description", trim=True)
        self.note = element_as_string(element, "note", trim=True)
        self.series_works_count = element_as_int(element, "series_works_count")
        self.primary_works_count = element_as_int(element, "primary_work_count")
        self.is_numbered = element_as_bool(element, "numbered")

        series_works = element.find("series_works")
        if series_works is None:
            # Listed by work, the series sits inside
            # <series_works><series_work><series>, so the works are two
            # levels up.
            parent = element.getparent()
            series_works = parent.getparent() if parent is not None else None

        self.works = None
        if series_works is not None:
            self._parse_series_works(series_works)

    def _parse_series_works(self, series_works: Element) -> None:
        works = []
        for series_work in series_works.iter("series_work"):
            work = Work()
            work.set_user_position(element_as_string(series_work, "user_position"))
            work_element = series_work.find("work")
            if work_element is not None:
                work.parse(work_element)
            works.append(work)
        if works:
            self.works = works


class SeriesWorks(ApiResponse):
    """The series a work belongs to, from a ``<series_works>`` listing."""

    xml_name = "series_works"

    series: list[Series] | None = None

    def parse(self, element: Element) -> None:
        element = require_element(element, "SeriesWorks")
        series = []
        for series_work in element.iterchildren("series_work"):
            series_element = series_work.find("series")
            if series_element is None:
                continue
            item = Series()
            item.parse(series_element)
            series.append(item)
        self.series = series
