"""Client library for a document-oriented HTTP search service."""

from simple_search.aio import AsyncSearchClient
from simple_search.client import SearchClient
from simple_search.config import load_config_from_env
from simple_search.domain import (
    BasicAuth,
    ClientConfig,
    LoggingOptions,
    OperationResult,
    RequestDescriptor,
    RequestFormatters,
    SearchResult,
)
from simple_search.errors import (
    ArgumentError,
    ResponseParseError,
    ServiceError,
    SimpleSearchError,
    TransportError,
    TransportTimeoutError,
)

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "AsyncSearchClient",
    "BasicAuth",
    "ClientConfig",
    "LoggingOptions",
    "OperationResult",
    "RequestDescriptor",
    "RequestFormatters",
    "ResponseParseError",
    "SearchClient",
    "SearchResult",
    "ServiceError",
    "SimpleSearchError",
    "TransportError",
    "TransportTimeoutError",
    "__version__",
    "load_config_from_env",
]
