# readloom/types.py
"""Request building blocks for the readloom client.

An endpoint call site describes its request as a ``RequestSpec``: an endpoint
template with ``{placeholder}`` segments, a list of typed ``Parameter``
objects, an HTTP verb, the slash-delimited path of the element the typed
payload starts at, and an optional body object. The connection turns the RequestSpec
into ``RequestData`` (adding the default query parameters) and finally into an
``httpx.Request``. Path segment values are percent-encoded when substituted;
query values are left for httpx to encode at send time.
"""

import re
from collections.abc import Callable, Mapping
from datetime import date
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl, quote

import httpx
from lxml import etree
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ValidationError
from .log_config import logger

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ParameterType(Enum):
    """Where a parameter ends up in the outgoing request."""

    URL_SEGMENT = "url_segment"
    QUERY_STRING = "query_string"
    BODY = "body"


def stringify(value: Any) -> str:
    """Render a parameter value the way the remote service expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, date):
        return value.strftime("%Y/%m/%d")
    return str(value)


class Parameter(BaseModel):
    """A single named request parameter."""

    name: str
    value: Any
    type: ParameterType = ParameterType.QUERY_STRING

    @property
    def text(self) -> str:
        return stringify(self.value)


def url_segment(name: str, value: Any) -> Parameter:
    return Parameter(name=name, value=value, type=ParameterType.URL_SEGMENT)


def query_string(name: str, value: Any) -> Parameter:
    return Parameter(name=name, value=value, type=ParameterType.QUERY_STRING)


def body_field(name: str, value: Any) -> Parameter:
    return Parameter(name=name, value=value, type=ParameterType.BODY)


class RequestSpec(BaseModel):
    """Everything needed to issue one call against a resource endpoint.

    Built once per call and not reused. Validation of the template against
    the parameters is deferred to ``render_path``, which the connection calls
    right before sending.
    """

    endpoint: str
    parameters: list[Parameter] = Field(default_factory=list)
    method: str = "GET"
    expected_root: str | None = None
    body: Any | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def _split_endpoint(self) -> tuple[str, list[tuple[str, str]]]:
        path_template, _, query_template = self.endpoint.partition("?")
        segments = self._segments()
        path = _PLACEHOLDER.sub(
            lambda m: quote(segments[m.group(1)].text, safe=","), path_template
        )
        embedded = [
            (name, _PLACEHOLDER.sub(lambda m: segments[m.group(1)].text, value))
            for name, value in parse_qsl(query_template, keep_blank_values=True)
        ]
        return path, embedded

    def _segments(self) -> dict[str, Parameter]:
        segments = {
            p.name: p for p in self.parameters if p.type is ParameterType.URL_SEGMENT
        }
        template = self.endpoint
        placeholders = _PLACEHOLDER.findall(template)

        missing = [name for name in placeholders if name not in segments]
        if missing:
            raise ValidationError(
                f"No URL segment parameter for placeholder(s) {missing} in '{template}'"
            )
        unused = [name for name in segments if name not in placeholders]
        if unused:
            raise ValidationError(
                f"URL segment parameter(s) {unused} match no placeholder in '{template}'"
            )
        duplicated = {name for name in placeholders if placeholders.count(name) > 1}
        if duplicated:
            raise ValidationError(
                f"Placeholder(s) {sorted(duplicated)} appear more than once in '{template}'"
            )
        return segments

    def render_path(self) -> str:
        """Return the endpoint path with every placeholder substituted.

        Segment values are percent-encoded (commas excepted), so a value can
        never end the path or start a query string.

        Raises:
            ValidationError: If a placeholder has no URL segment parameter, or
                a URL segment parameter matches no placeholder.
        """
        path, _ = self._split_endpoint()
        return path

    def query_params(self) -> list[tuple[str, str]]:
        """Query string pairs: any embedded in the template, then the parameters."""
        _, embedded = self._split_endpoint()
        return embedded + [
            (p.name, p.text)
            for p in self.parameters
            if p.type is ParameterType.QUERY_STRING
        ]

    def xml_body(self) -> bytes | None:
        """Serialize the body object (plus BODY parameters) for write verbs.

        Returns None for GET requests and when there is no body object; BODY
        parameters are dropped in that case.
        """
        fields = [p for p in self.parameters if p.type is ParameterType.BODY]
        if self.method.upper() == "GET" or self.body is None:
            if fields:
                logger.debug(
                    f"Dropping {len(fields)} body parameter(s) for "
                    f"{self.method} {self.endpoint}: no body object"
                )
            return None

        data = _body_as_mapping(self.body)
        data.update({p.name: p.value for p in fields})
        return serialize_xml(data, _body_root_name(self.body))


def build_request_spec(
    endpoint: str,
    parameters: list[Parameter] | None = None,
    method: str = "GET",
    expected_root: str | None = None,
    body: Any | None = None,
) -> RequestSpec:
    """Assemble a RequestSpec. Does not validate the template."""
    return RequestSpec(
        endpoint=endpoint,
        parameters=list(parameters or []),
        method=method.upper(),
        expected_root=expected_root,
        body=body,
    )


def _body_as_mapping(body: Any) -> dict[str, Any]:
    if isinstance(body, BaseModel):
        return body.model_dump(exclude_none=True)
    if isinstance(body, Mapping):
        return dict(body)
    raise TypeError(f"Unsupported request body type: {type(body).__name__}")


def _body_root_name(body: Any) -> str:
    xml_name = getattr(type(body), "xml_name", None)
    if isinstance(xml_name, str):
        return xml_name
    if isinstance(body, Mapping):
        return "request"
    return _CAMEL_BOUNDARY.sub("_", type(body).__name__).lower()


def serialize_xml(data: Mapping[str, Any], root_name: str) -> bytes:
    """Serialize a (possibly nested) mapping into an XML document."""
    root = etree.Element(root_name)
    _append_children(root, data)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")


def _append_children(parent: etree._Element, data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        if value is None:
            continue
        items = value if isinstance(value, list | tuple) else [value]
        for item in items:
            child = etree.SubElement(parent, key)
            if isinstance(item, Mapping):
                _append_children(child, item)
            elif isinstance(item, BaseModel):
                _append_children(child, item.model_dump(exclude_none=True))
            else:
                child.text = stringify(item)


class RequestData(BaseModel):
    """Encapsulates data for a single HTTP request."""

    method: str
    url: str
    params: list[tuple[str, str]] | None = None
    content: bytes | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def build_request(self) -> httpx.Request:
        """Builds an httpx.Request object from the stored data."""
        return httpx.Request(
            method=self.method,
            url=self.url,
            params=self.params,
            content=self.content,
            headers=self.headers,
        )


class RawResult(BaseModel):
    """Status and body of a response, without any parsed structure."""

    status_code: int
    content_type: str | None = None
    text: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RawResult":
        return cls(
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type"),
            text=response.text,
        )


PreRequestHook = Callable[[str, str, list[tuple[str, str]] | None, httpx.Headers], None]
"""Type alias for a pre-request hook.

Pre-request hooks are called before the request is signed and sent.

Args:
    method (str): The HTTP method of the request (e.g., "GET", "POST").
    url (str): The full URL of the request, without query string.
    params (list[tuple[str, str]] | None): A mutable list of query parameter
        pairs. Hooks can modify this list in place.
    headers (httpx.Headers): A mutable `httpx.Headers` object.
Return:
    None: Hooks are expected to modify arguments in-place or perform side effects.
"""

PostRequestHook = Callable[[httpx.Response, Any], None]
"""Type alias for a post-request hook.

Args:
    response (httpx.Response): The raw `httpx.Response` object.
    parsed (Any): The object the response was parsed into, or `None` for raw
        requests.
Return:
    None: Hooks are expected to perform side effects.
"""
