"""Render request/response diagnostics and hand them to an injected sink."""

from __future__ import annotations

import json
import logging
import shlex
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from simple_search.domain import LogEvent, RequestFormat

if TYPE_CHECKING:
    from simple_search.domain import BasicAuth, LoggingOptions, RequestDescriptor, TransportResponse

_logger = logging.getLogger(__name__)
_REQUEST_PREFIX = "Search request:"
_RESPONSE_PREFIX = "Search response:"
_ARGS_PREFIX = "Search args:"


def render_plain_request(descriptor: RequestDescriptor, base_url: str) -> str:
    """Render a human-readable request line.

    Args:
        descriptor (RequestDescriptor): Built request.
        base_url (str): Service root URL.

    Returns:
        str: Message such as ``Search request: GET http://localhost:9200/_status``.

    """
    message = f"{_REQUEST_PREFIX} {descriptor.method.value} {base_url}{descriptor.target}"
    body = descriptor.encoded_body()
    if body:
        message += f" body: {body}"
    return message


def render_curl_request(
    descriptor: RequestDescriptor,
    base_url: str,
    auth: BasicAuth | None = None,
) -> str:
    """Render a reproducible curl invocation for a request.

    The password is masked.

    Args:
        descriptor (RequestDescriptor): Built request.
        base_url (str): Service root URL.
        auth (BasicAuth | None): Credentials used by the request.

    Returns:
        str: Shell command line.

    """
    parts = ["curl", "-X", descriptor.method.value, shlex.quote(f"{base_url}{descriptor.target}")]
    credentials = descriptor.auth or auth
    if credentials is not None:
        parts.extend(["-u", shlex.quote(f"{credentials.username}:***")])
    body = descriptor.encoded_body()
    if body:
        parts.extend(["-H", shlex.quote("Content-Type: application/json"), "-d", shlex.quote(body)])
    return " ".join(parts)


def render_response(response: TransportResponse) -> str:
    """Render a response line with status code and raw body."""
    return f"{_RESPONSE_PREFIX} {response.status_code} {response.text}"


def render_args(operation: str, args: Mapping[str, Any] | None) -> str:
    """Render the call arguments of one operation."""
    return f"{_ARGS_PREFIX} {operation} {json.dumps(args, ensure_ascii=False, default=str)}"


class RequestLogger:
    """Offer built requests and raw responses to a configurable logging sink.

    Logging is a side channel: sink failures are reported on the module logger and
    never reach the operation that triggered them.
    """

    def __init__(
        self,
        options: LoggingOptions | None,
        *,
        base_url: str,
        auth: BasicAuth | None = None,
    ) -> None:
        self.options = options
        self.base_url = base_url
        self.auth = auth

    @property
    def enabled(self) -> bool:
        """Return whether any event is logged."""
        return self.options is not None and bool(self.options.events)

    def wants(self, event: LogEvent) -> bool:
        """Return whether ``event`` produces a message."""
        return self.options is not None and event in self.options.events

    def log_args(self, operation: str, args: Mapping[str, Any] | None) -> None:
        """Log the caller-supplied arguments of one operation."""
        if self.wants(LogEvent.ARGS):
            self._emit(render_args(operation, args))

    def log_request(self, descriptor: RequestDescriptor) -> None:
        """Log a request before it reaches the transport."""
        if not self.wants(LogEvent.REQUEST):
            return
        if self.options.formatters.request is RequestFormat.CURL:  # type: ignore[union-attr]
            self._emit(render_curl_request(descriptor, self.base_url, self.auth))
        else:
            self._emit(render_plain_request(descriptor, self.base_url))

    def log_response(self, response: TransportResponse) -> None:
        """Log a raw response once the transport returns."""
        if self.wants(LogEvent.RESPONSE):
            self._emit(render_response(response))

    def _sink(self) -> Any:
        level = self.options.level.lower()  # type: ignore[union-attr]
        target = self.options.logger  # type: ignore[union-attr]
        if isinstance(target, Mapping):
            return target.get(level)
        return getattr(target, level, None)

    def _emit(self, message: str) -> None:
        sink = self._sink()
        if sink is None:
            _logger.warning("Request logger has no sink for level '%s'.", self.options.level)  # type: ignore[union-attr]
            return
        try:
            sink(message)
        except Exception:
            _logger.exception("Request logger sink failed.")
