"""Protocols for transports used by the client facades."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from simple_search.domain import RequestDescriptor, TransportResponse


class Transport(Protocol):
    """Define the blocking network capability consumed by `SearchClient`."""

    def request(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Perform one HTTP round trip.

        Args:
            descriptor (RequestDescriptor): Fully built request.

        Raises:
            TransportError: If the round trip fails.

        Returns:
            TransportResponse: Status code and raw body text.

        """


class AsyncTransport(Protocol):
    """Define the non-blocking network capability consumed by `AsyncSearchClient`."""

    async def request(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Perform one HTTP round trip without blocking the event loop.

        Args:
            descriptor (RequestDescriptor): Fully built request.

        Raises:
            TransportError: If the round trip fails.

        Returns:
            TransportResponse: Status code and raw body text.

        """
