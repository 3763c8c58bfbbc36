"""Domain contracts shared by the client facades, transports and loggers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from simple_search.domain.enums import HttpMethod, LogEvent, RequestFormat, UrlScheme
from simple_search.errors import ArgumentError
from simple_search.paths import append_query

_DEFAULT_REQUEST_LOGGER_NAME = "simple_search.requests"


class BasicAuth(BaseModel):
    """Represent HTTP Basic credentials."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str


class RequestFormatters(BaseModel):
    """Represent per-event rendering choices for the request logger."""

    model_config = ConfigDict(frozen=True)

    request: RequestFormat = RequestFormat.PLAIN


class LoggingOptions(BaseModel):
    """Represent request logging options.

    Args:
        logger: Sink exposing one method per severity level (``debug``, ``info``...).
        level: Severity method used for every message.
        events: Lifecycle events that produce a message.
        formatters: Rendering choices per event.

    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: Any = Field(default_factory=lambda: logging.getLogger(_DEFAULT_REQUEST_LOGGER_NAME))
    level: str = "debug"
    events: frozenset[LogEvent] = frozenset(LogEvent)
    formatters: RequestFormatters = Field(default_factory=RequestFormatters)


class ClientConfig(BaseModel):
    """Store immutable connection settings for one client instance."""

    model_config = ConfigDict(frozen=True)

    protocol: UrlScheme = UrlScheme.HTTP
    host: str = "localhost"
    port: int = 9200
    auth: BasicAuth | None = None
    index: str | None = None
    logging: LoggingOptions | None = None
    timeout_ms: int | None = None
    verify_certs: bool = True

    @property
    def base_url(self) -> str:
        """Return the service root URL without a trailing slash."""
        return f"{self.protocol.value}://{self.host}:{self.port}"


class RequestDescriptor(BaseModel):
    """Represent one fully built HTTP request, before it reaches a transport."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod = HttpMethod.GET
    path: str = "/"
    params: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    auth: BasicAuth | None = None

    @property
    def target(self) -> str:
        """Return the path with query parameters applied."""
        return append_query(self.path, self.params)

    def encoded_body(self) -> str | None:
        """Return the wire form of the body: strings as-is, anything else as JSON.

        Raises:
            ArgumentError: If the body cannot be encoded as JSON.

        """
        if self.body is None:
            return None
        if isinstance(self.body, str):
            return self.body
        try:
            return json.dumps(self.body, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise ArgumentError.unserializable_body(exc) from exc


class SearchResult(BaseModel):
    """Represent the normalized projection of a search response."""

    ids: list[str | None] = Field(default_factory=list)
    objects: list[Any] = Field(default_factory=list)
    total: Any = 0
    max_score: float | None = None
    scroll_id: str | None = None


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw response handed back by a transport."""

    status_code: int
    text: str


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Shaped result of one operation alongside the untransformed body."""

    result: Any
    raw: str | None
