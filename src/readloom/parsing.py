# readloom/parsing.py
"""Response parsing framework for the readloom client.

Responses are irregular XML documents wrapped in a ``GoodreadsResponse``
envelope. The framework locates the element a typed payload starts at (the
"expected root", a slash-delimited path such as ``group_folder/topics``) and
hands it to the target type's own ``parse`` method. Every domain model
implements the ``Parseable`` protocol, so the driver never needs to know
which type it is filling in.

The readers in this module are forgiving: absent elements and
malformed text yield type-appropriate defaults instead of failing the whole
parse. Lists follow a null-vs-empty convention: an absent wrapper element
gives ``None``, a present wrapper gives a list, possibly empty.
"""

from collections.abc import Callable
from datetime import date, datetime
from typing import Any, Protocol, TypeVar, runtime_checkable

from lxml import etree

from .constants import RESPONSE_ENVELOPE
from .log_config import logger

_XML_PARSER = etree.XMLParser(
    remove_blank_text=True, recover=True, resolve_entities=False
)
GOODREADS_DATETIME_FORMAT = "%a %b %d %H:%M:%S %z %Y"

Element = etree._Element
P = TypeVar("P", bound="Parseable")


@runtime_checkable
class Parseable(Protocol):
    """Capability of every domain model: populate itself from an element."""

    def parse(self, element: Element) -> None:
        """Populate the instance from ``element``.

        Must be idempotent, must not raise for missing optional data, and
        may raise only when ``element`` itself is None.
        """
        ...


def parse_xml(content: bytes | str | None) -> Element | None:
    """Parse a response body, returning None for empty or unreadable input."""
    if not content:
        return None
    if isinstance(content, str):
        content = content.encode("utf-8")
    try:
        return etree.fromstring(content, parser=_XML_PARSER)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Response body is not XML: {e}")
        return None


def locate_root(document: Element | None, path: str | None) -> Element | None:
    """Descend the named children of ``document`` one path segment at a time.

    The path is relative to the response envelope. If the document's own
    root element already is the first segment (no envelope), descent starts
    there. Returns None as soon as a segment is absent.
    """
    if document is None:
        return None
    segments = [s for s in (path or "").split("/") if s]
    if not segments:
        return document

    current = document
    if document.tag != RESPONSE_ENVELOPE and document.tag == segments[0]:
        if document.find(segments[0]) is None:
            segments = segments[1:]

    for segment in segments:
        child = current.find(segment)
        if child is None:
            logger.debug(f"Segment '{segment}' of root path '{path}' not found")
            return None
        current = child
    return current


def parse_document(model: type[P], content: bytes | str | None, root_path: str | None) -> P | None:
    """Parse ``content`` into a new ``model`` instance scoped to ``root_path``.

    All-or-nothing: returns a fully parsed instance, or None if the document
    is unreadable or the root cannot be located.
    """
    root = locate_root(parse_xml(content), root_path)
    if root is None:
        return None
    instance = model()
    instance.parse(root)
    return instance


def _child_text(element: Element | None, name: str) -> str | None:
    if element is None:
        return None
    child = element.find(name)
    if child is None:
        return None
    return child.text


def element_as_string(element: Element | None, name: str, trim: bool = False) -> str:
    """Text of child ``name``; absent or empty element gives ''."""
    text = _child_text(element, name) or ""
    return text.strip() if trim else text


def _to_int(text: str | None) -> int:
    if text is None:
        return 0
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        logger.debug(f"Could not parse '{text}' as an integer, defaulting to 0")
        return 0


def element_as_int(element: Element | None, name: str) -> int:
    """Integer value of child ``name``; absent or malformed gives 0."""
    return _to_int(_child_text(element, name))


# Python ints are unbounded; ids that the remote service types as 64-bit
# read through the same helper.
element_as_long = element_as_int


def element_as_float(element: Element | None, name: str) -> float:
    """Float value of child ``name``; absent or malformed gives 0.0."""
    text = (_child_text(element, name) or "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Could not parse '{text}' as a number, defaulting to 0.0")
        return 0.0


def element_as_bool(element: Element | None, name: str) -> bool:
    """'true' or '1' (any case) give True; everything else gives False."""
    text = (_child_text(element, name) or "").strip().lower()
    return text in ("true", "1")


def parse_datetime(text: str | None) -> datetime | None:
    """Parse the service's timestamp format, falling back to ISO 8601."""
    if not text or not text.strip():
        return None
    text = text.strip()
    try:
        return datetime.strptime(text, GOODREADS_DATETIME_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unrecognised timestamp '{text}'")
        return None


def element_as_datetime(element: Element | None, name: str) -> datetime | None:
    return parse_datetime(_child_text(element, name))


def element_as_date_parts(element: Element | None, prefix: str) -> date | None:
    """Combine ``<prefix>_year``, ``<prefix>_month`` and ``<prefix>_day``.

    All parts missing gives None. A year alone gives January 1st of that
    year, a year and month give the first of that month. Without a year, or
    when the parts do not form a valid date, the result is None.
    """
    year = element_as_int(element, f"{prefix}_year")
    month = element_as_int(element, f"{prefix}_month")
    day = element_as_int(element, f"{prefix}_day")
    if not year:
        return None
    try:
        return date(year, month or 1, day or 1)
    except (ValueError, OverflowError):
        logger.debug(f"Invalid date parts for '{prefix}': {year}-{month}-{day}")
        return None


def attribute_as_string(element: Element | None, name: str) -> str:
    if element is None:
        return ""
    return element.get(name) or ""


def attribute_as_int(element: Element | None, name: str) -> int:
    if element is None:
        return 0
    return _to_int(element.get(name))


def parse_optional(element: Element | None, name: str, model: type[P]) -> P | None:
    """Parse child ``name`` into ``model``, or None when it is absent."""
    if element is None:
        return None
    child = element.find(name)
    if child is None:
        return None
    instance = model()
    instance.parse(child)
    return instance


def parse_children(
    wrapper: Element, child: str, model: type[P] | Callable[[], P]
) -> list[P]:
    """Parse each direct child named ``child`` of ``wrapper``, in document order."""
    items = []
    for node in wrapper.iterchildren(child):
        item = model()
        item.parse(node)
        items.append(item)
    return items


def parse_list(
    element: Element | None, wrapper: str, child: str, model: type[P]
) -> list[P] | None:
    """Parse ``<wrapper><child/>...</wrapper>`` into a list.

    Returns None when the wrapper is absent and a list (possibly empty)
    when it is present.
    """
    if element is None:
        return None
    wrapper_element = element.find(wrapper)
    if wrapper_element is None:
        return None
    return parse_children(wrapper_element, child, model)


def parse_count_map(
    element: Element | None, wrapper: str, child: str = "shelf"
) -> dict[str, int] | None:
    """Parse sibling ``<child name="..." count="..."/>`` elements into a dict.

    Duplicated names are not deduplicated: the last one wins. Entries without
    a name are skipped; a malformed count gives 0.
    """
    if element is None:
        return None
    wrapper_element = element.find(wrapper)
    if wrapper_element is None:
        return None
    counts: dict[str, int] = {}
    for node in wrapper_element.iterchildren(child):
        name = node.get("name")
        if not name:
            logger.debug(f"Skipping <{child}> without a name attribute")
            continue
        counts[name] = attribute_as_int(node, "count")
    return counts


def require_element(element: Any, model_name: str) -> Element:
    """Guard for ``parse``: a None element is structurally impossible input."""
    if element is None:
        raise ValueError(f"{model_name}.parse() requires an element, got None")
    return element
