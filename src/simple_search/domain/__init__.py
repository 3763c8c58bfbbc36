"""Domain contracts for simple-search-client."""

from simple_search.domain.contracts import (
    BasicAuth,
    ClientConfig,
    LoggingOptions,
    OperationResult,
    RequestDescriptor,
    RequestFormatters,
    SearchResult,
    TransportResponse,
)
from simple_search.domain.enums import (
    BODY_METHODS,
    CommandName,
    HttpMethod,
    LogEvent,
    RequestFormat,
    UrlScheme,
    parse_http_method,
    parse_request_format,
)

__all__ = [
    "BODY_METHODS",
    "BasicAuth",
    "ClientConfig",
    "CommandName",
    "HttpMethod",
    "LogEvent",
    "LoggingOptions",
    "OperationResult",
    "RequestDescriptor",
    "RequestFormat",
    "RequestFormatters",
    "SearchResult",
    "TransportResponse",
    "UrlScheme",
    "parse_http_method",
    "parse_request_format",
]
