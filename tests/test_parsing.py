"""Tests for the XML parsing helpers."""

from datetime import date, datetime, timedelta

import pytest
from lxml import etree

from readloom.models import AuthorSummary, Book, PaginatedList
from readloom.parsing import (
    Parseable,
    attribute_as_int,
    element_as_bool,
    element_as_date_parts,
    element_as_datetime,
    element_as_float,
    element_as_int,
    element_as_string,
    locate_root,
    parse_count_map,
    parse_document,
    parse_list,
    parse_optional,
    parse_xml,
    require_element,
)


def xml(text: str):
    return etree.fromstring(text)


def test_parse_xml_unreadable_input():
    assert parse_xml(None) is None
    assert parse_xml(b"") is None
    assert parse_xml("1,2,3") is None


def test_locate_root_inside_envelope(envelope):
    document = parse_xml(envelope("<author><books><book/></books></author>"))
    root = locate_root(document, "author/books")
    assert root is not None
    assert root.tag == "books"


def test_locate_root_without_envelope():
    document = parse_xml("<book><id>1</id></book>")
    assert locate_root(document, "book") is document


def test_locate_root_missing_segment(envelope):
    document = parse_xml(envelope("<author><name>X</name></author>"))
    assert locate_root(document, "author/books") is None
    assert locate_root(None, "author") is None


def test_parse_document_missing_root_returns_none(envelope):
    assert parse_document(AuthorSummary, envelope("<book/>"), "author") is None


def test_parse_document_populates_model(envelope):
    author = parse_document(
        AuthorSummary, envelope("<author><id>7</id><name>Frank Herbert</name></author>"), "author"
    )
    assert author.id == 7
    assert author.name == "Frank Herbert"


def test_scalar_readers_default_when_absent():
    element = xml("<x><empty/></x>")
    assert element_as_string(element, "missing") == ""
    assert element_as_string(element, "empty") == ""
    assert element_as_int(element, "missing") == 0
    assert element_as_float(element, "missing") == 0.0
    assert element_as_bool(element, "missing") is False
    assert element_as_datetime(element, "missing") is None


def test_scalar_readers_default_when_malformed():
    element = xml("<x><n>abc</n><f>4.x</f><d>yesterday</d></x>")
    assert element_as_int(element, "n") == 0
    assert element_as_float(element, "f") == 0.0
    assert element_as_datetime(element, "d") is None


@pytest.mark.parametrize("text", ["1e999", "inf", "-inf", "nan"])
def test_element_as_int_out_of_range_defaults_to_zero(text):
    assert element_as_int(xml(f"<x><n>{text}</n></x>"), "n") == 0


def test_scalar_readers_parse_values():
    element = xml(
        "<x><s>  padded  </s><n> 12 </n><r>3.5</r><f>4.25</f><b>TRUE</b><one>1</one></x>"
    )
    assert element_as_string(element, "s") == "  padded  "
    assert element_as_string(element, "s", trim=True) == "padded"
    assert element_as_int(element, "n") == 12
    assert element_as_int(element, "r") == 3
    assert element_as_float(element, "f") == 4.25
    assert element_as_bool(element, "b") is True
    assert element_as_bool(element, "one") is True


def test_element_as_datetime_service_format():
    element = xml("<x><at>Tue Mar 05 14:20:01 -0800 2019</at></x>")
    value = element_as_datetime(element, "at")
    assert value == datetime(2019, 3, 5, 14, 20, 1, tzinfo=value.tzinfo)
    assert value.utcoffset() == timedelta(hours=-8)


def test_element_as_datetime_iso_fallback():
    element = xml("<x><at>2020-01-02T03:04:05+00:00</at></x>")
    assert element_as_datetime(element, "at").year == 2020


@pytest.mark.parametrize(
    "body, expected",
    [
        ("<p_year>1965</p_year><p_month>8</p_month><p_day>1</p_day>", date(1965, 8, 1)),
        ("<p_year>1965</p_year>", date(1965, 1, 1)),
        ("<p_year>1965</p_year><p_month>8</p_month>", date(1965, 8, 1)),
        ("<p_month>8</p_month><p_day>1</p_day>", None),
        ("", None),
        ("<p_year>1965</p_year><p_month>13</p_month>", None),
        ("<p_year>99999999999999999999</p_year>", None),
        ("<p_year>1965</p_year><p_month>99999999999999999999</p_month>", None),
    ],
)
def test_element_as_date_parts(body, expected):
    assert element_as_date_parts(xml(f"<x>{body}</x>"), "p") == expected


def test_attribute_as_int():
    element = xml('<list start="1" end="x"/>')
    assert attribute_as_int(element, "start") == 1
    assert attribute_as_int(element, "end") == 0
    assert attribute_as_int(element, "total") == 0


def test_parse_list_absent_wrapper_is_none():
    assert parse_list(xml("<book/>"), "authors", "author", AuthorSummary) is None


def test_parse_list_empty_wrapper_is_empty_list():
    assert parse_list(xml("<book><authors/></book>"), "authors", "author", AuthorSummary) == []


def test_parse_list_keeps_document_order():
    element = xml(
        "<book><authors><author><id>2</id></author><author><id>1</id></author></authors></book>"
    )
    authors = parse_list(element, "authors", "author", AuthorSummary)
    assert [a.id for a in authors] == [2, 1]


def test_parse_optional():
    element = xml("<book><author><name>A</name></author></book>")
    assert parse_optional(element, "author", AuthorSummary).name == "A"
    assert parse_optional(element, "work", AuthorSummary) is None


def test_parse_count_map_last_write_wins():
    element = xml(
        "<book><popular_shelves>"
        '<shelf name="to-read" count="10"/>'
        '<shelf name="sci-fi" count="3"/>'
        '<shelf name="to-read" count="12"/>'
        '<shelf count="99"/>'
        "</popular_shelves></book>"
    )
    assert parse_count_map(element, "popular_shelves") == {"to-read": 12, "sci-fi": 3}


def test_parse_count_map_out_of_range_count():
    element = xml(
        '<book><popular_shelves><shelf name="x" count="inf"/>'
        '<shelf name="y" count="1e999"/></popular_shelves></book>'
    )
    assert parse_count_map(element, "popular_shelves") == {"x": 0, "y": 0}


def test_book_with_huge_publication_year_has_no_date(envelope):
    body = "<book><id>1</id><publication_year>99999999999999999999</publication_year></book>"
    book = parse_document(Book, envelope(body), "book")
    assert book.id == 1
    assert book.publication_date is None


def test_parse_count_map_absent_wrapper():
    assert parse_count_map(xml("<book/>"), "popular_shelves") is None


def test_require_element_rejects_none():
    with pytest.raises(ValueError):
        require_element(None, "Book")


def test_models_are_parseable():
    assert isinstance(Book(), Parseable)
    assert isinstance(PaginatedList[AuthorSummary](), Parseable)
