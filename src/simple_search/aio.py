"""Async client facade sharing request builders with `SearchClient`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from simple_search.client import _ClientBase, deliver
from simple_search.completion import Completion
from simple_search.domain import OperationResult
from simple_search.errors import SimpleSearchError
from simple_search.response import parse_response
from simple_search.transport import AsyncHttpTransport

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping
    from types import TracebackType

    from simple_search.completion import Callback
    from simple_search.domain import ClientConfig, SearchResult
    from simple_search.transport import AsyncTransport

_logger = logging.getLogger(__name__)


class AsyncSearchClient(_ClientBase):
    """Non-blocking counterpart of `SearchClient`; every operation is awaitable.

    Concurrent calls share nothing but the immutable configuration.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: AsyncTransport | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, options)
        self._owns_transport = transport is None
        self.transport = transport or AsyncHttpTransport.from_config(self.config)

    async def execute(self, name: str, args: Mapping[str, Any] | None = None) -> OperationResult:
        """Run one operation and return its shaped result.

        Raises:
            ArgumentError: If arguments are missing; no request is sent.
            TransportError: If the round trip fails.
            ResponseParseError: If the body is not JSON.
            ServiceError: If the service reports a recognized error.

        Returns:
            OperationResult: Shaped result and raw body.

        """
        operation = self._prepare(name, args)
        response = await self.transport.request(operation.descriptor)
        self.request_logger.log_response(response)
        parsed = parse_response(response.text)
        return OperationResult(result=operation.shape(parsed, response.text), raw=response.text)

    async def call(
        self,
        name: str,
        args: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> OperationResult | None:
        """Run one operation in return/raise style, or deliver it to ``callback``."""
        if callback is None:
            return await self.execute(name, args)

        completion = Completion(callback)
        try:
            outcome = await self.execute(name, args)
        except SimpleSearchError as exc:
            _logger.debug("Operation %s failed: %s", name, exc)
            deliver(completion, exc)
            return None
        completion.settle(None, outcome.result, outcome.raw)
        return None

    async def request(
        self,
        args: Mapping[str, Any] | None,
        callback: Callback | None = None,
    ) -> OperationResult | None:
        """Send a caller-specified ``method``/``path``/``params``/``body`` request."""
        return await self.call("request", args, callback=callback)

    async def scroll_pages(self, args: Mapping[str, Any] | None = None) -> AsyncIterator[SearchResult]:
        """Open a scan cursor and yield pages until the first empty page."""
        scroll_ttl = (args or {}).get("scroll_ttl")
        cursor = (await self.execute("core.scan_search", args)).result
        while cursor:
            page = (await self.execute("core.scroll_search", {"scroll_id": cursor, "scroll_ttl": scroll_ttl})).result
            if not page:
                return
            yield page
            cursor = page.scroll_id or cursor

    async def aclose(self) -> None:
        """Close the transport when this client created it."""
        if self._owns_transport:
            await self.transport.aclose()  # type: ignore[attr-defined]

    async def __aenter__(self) -> AsyncSearchClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()
