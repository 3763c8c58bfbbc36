"""Typed enumerations and conversions for client/domain choices."""

from __future__ import annotations

from enum import StrEnum

from simple_search.errors import UnsupportedOperationError


class UrlScheme(StrEnum):
    """Represent supported URL schemes for the search service."""

    HTTP = "http"
    HTTPS = "https"


class HttpMethod(StrEnum):
    """Represent HTTP methods issued by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


class LogEvent(StrEnum):
    """Represent request lifecycle events offered to the request logger."""

    ARGS = "args"
    REQUEST = "request"
    RESPONSE = "response"


class RequestFormat(StrEnum):
    """Represent rendering styles for logged requests."""

    PLAIN = "plain"
    CURL = "curl"


# Methods that always carry a body on the wire, even an empty one.
BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE})


def parse_http_method(value: str | None) -> HttpMethod:
    """Parse one HTTP method string, defaulting to GET.

    Accepts the short ``del`` spelling used by callers that avoid the keyword.

    Args:
        value (str | None): Raw method value.

    Raises:
        UnsupportedOperationError: If the method is not supported.

    Returns:
        HttpMethod: Parsed method.

    """
    if value is None or not str(value).strip():
        return HttpMethod.GET

    normalized = str(value).strip().upper()
    if normalized == "DEL":
        return HttpMethod.DELETE
    try:
        return HttpMethod(normalized)
    except ValueError as exc:
        supported = ", ".join(item.value for item in HttpMethod)
        raise UnsupportedOperationError(name=str(value), supported=supported) from exc


def parse_request_format(value: str | None) -> RequestFormat:
    """Parse one request formatter name, defaulting to plain.

    Args:
        value (str | None): Raw formatter name.

    Raises:
        UnsupportedOperationError: If the formatter is not supported.

    Returns:
        RequestFormat: Parsed formatter.

    """
    if value is None:
        return RequestFormat.PLAIN
    try:
        return RequestFormat(str(value).strip().lower())
    except ValueError as exc:
        supported = ", ".join(item.value for item in RequestFormat)
        raise UnsupportedOperationError(name=str(value), supported=supported) from exc


class CommandName(StrEnum):
    """Represent supported CLI subcommands."""

    STATUS = "status"
    REFRESH = "refresh"
    CREATE_INDEX = "create-index"
    DELETE_INDEX = "delete-index"
    GET_MAPPING = "get-mapping"
    PUT_MAPPING = "put-mapping"
    DELETE_MAPPING = "delete-mapping"
    INDEX = "index"
    GET = "get"
    DELETE = "delete"
    SEARCH = "search"
    SCROLL = "scroll"
    REQUEST = "request"
