"""Blocking client facade."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from simple_search.api import CoreApi, IndicesApi
from simple_search.completion import Completion
from simple_search.domain import ClientConfig, OperationResult
from simple_search.errors import SimpleSearchError
from simple_search.operations import build_operation
from simple_search.request_logger import RequestLogger
from simple_search.response import parse_response
from simple_search.transport import HttpTransport

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from types import TracebackType

    from simple_search.completion import Callback
    from simple_search.domain import SearchResult
    from simple_search.operations import Operation
    from simple_search.transport import Transport

_logger = logging.getLogger(__name__)


def resolve_config(config: ClientConfig | None, options: dict[str, Any]) -> ClientConfig:
    """Build the immutable configuration from a config object and/or keyword options.

    Keyword options override fields of ``config``.
    """
    if config is None:
        return ClientConfig(**options)
    if not options:
        return config
    return ClientConfig.model_validate({**dict(config), **options})


def deliver(completion: Completion, error: SimpleSearchError) -> None:
    """Settle a completion with an error and whatever body/result it carries."""
    completion.settle(error, getattr(error, "result", None), getattr(error, "raw", None))


class _ClientBase:
    """Configuration and logging shared by both facades."""

    def __init__(self, config: ClientConfig | None, options: dict[str, Any]) -> None:
        self.config = resolve_config(config, options)
        self.request_logger = RequestLogger(
            self.config.logging,
            base_url=self.config.base_url,
            auth=self.config.auth,
        )
        self.indices = IndicesApi(self)
        self.core = CoreApi(self)

    @property
    def base_url(self) -> str:
        """Return the service root URL."""
        return self.config.base_url

    def _prepare(self, name: str, args: Mapping[str, Any] | None) -> Operation:
        self.request_logger.log_args(name, args)
        operation = build_operation(name, args, self.config)
        self.request_logger.log_request(operation.descriptor)
        return operation


class SearchClient(_ClientBase):
    """Blocking client for a document-oriented HTTP search service.

    Operations are grouped under ``indices`` (with ``indices.mappings``) and ``core``,
    plus the ``request`` escape hatch. Each returns an `OperationResult` and raises a
    `SimpleSearchError` subclass on failure, or, when ``callback`` is given, calls
    ``callback(error, result, raw)`` exactly once instead.

    Example:
        >>> client = SearchClient(host="localhost", port=9200, index="books")
        >>> client.core.get({"type": "book", "id": "1"}).result

    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, options)
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport.from_config(self.config)

    def execute(self, name: str, args: Mapping[str, Any] | None = None) -> OperationResult:
        """Run one operation and return its shaped result.

        Args:
            name (str): Operation name, e.g. ``core.get``.
            args (Mapping[str, Any] | None): Call arguments.

        Raises:
            ArgumentError: If arguments are missing; no request is sent.
            TransportError: If the round trip fails.
            ResponseParseError: If the body is not JSON.
            ServiceError: If the service reports a recognized error.

        Returns:
            OperationResult: Shaped result and raw body.

        """
        operation = self._prepare(name, args)
        response = self.transport.request(operation.descriptor)
        self.request_logger.log_response(response)
        parsed = parse_response(response.text)
        return OperationResult(result=operation.shape(parsed, response.text), raw=response.text)

    def call(
        self,
        name: str,
        args: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> OperationResult | None:
        """Run one operation in return/raise style, or deliver it to ``callback``."""
        if callback is None:
            return self.execute(name, args)

        completion = Completion(callback)
        try:
            outcome = self.execute(name, args)
        except SimpleSearchError as exc:
            _logger.debug("Operation %s failed: %s", name, exc)
            deliver(completion, exc)
            return None
        completion.settle(None, outcome.result, outcome.raw)
        return None

    def request(self, args: Mapping[str, Any] | None, callback: Callback | None = None) -> OperationResult | None:
        """Send a caller-specified ``method``/``path``/``params``/``body`` request."""
        return self.call("request", args, callback=callback)

    def scroll_pages(self, args: Mapping[str, Any] | None = None) -> Iterator[SearchResult]:
        """Open a scan cursor and yield pages until the first empty page.

        Args:
            args (Mapping[str, Any] | None): Scan search arguments (``index``, ``type``,
                ``search``, ``scroll_ttl``).

        Yields:
            SearchResult: One non-empty page at a time.

        """
        scroll_ttl = (args or {}).get("scroll_ttl")
        cursor = self.execute("core.scan_search", args).result
        while cursor:
            page = self.execute("core.scroll_search", {"scroll_id": cursor, "scroll_ttl": scroll_ttl}).result
            if not page:
                return
            yield page
            cursor = page.scroll_id or cursor

    def close(self) -> None:
        """Close the transport when this client created it."""
        if self._owns_transport:
            self.transport.close()  # type: ignore[attr-defined]

    def __enter__(self) -> SearchClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
