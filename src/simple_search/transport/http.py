"""Transports implemented on top of httpx."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from simple_search.domain import BODY_METHODS, TransportResponse
from simple_search.errors import TransportError, TransportTimeoutError

if TYPE_CHECKING:
    from types import TracebackType

    from simple_search.domain import ClientConfig, RequestDescriptor

_logger = logging.getLogger(__name__)
_JSON_CONTENT_TYPE = "application/json"
_TRANSPORT_ERROR = "{method} {url} failed: {error}"


def wire_auth(descriptor: RequestDescriptor) -> httpx.BasicAuth | None:
    """Return the httpx Basic auth handler for a request, if it carries credentials."""
    if descriptor.auth is None:
        return None
    return httpx.BasicAuth(descriptor.auth.username, descriptor.auth.password)


def build_wire_request(descriptor: RequestDescriptor) -> tuple[dict[str, str], bytes | None]:
    """Compute headers and content bytes for one request.

    JSON headers and an explicit ``Content-Length`` are set when a body is present or
    the method is POST/PUT/DELETE; a missing body then goes out as zero bytes.

    Args:
        descriptor (RequestDescriptor): Built request.

    Returns:
        tuple[dict[str, str], bytes | None]: Headers and content.

    """
    headers: dict[str, str] = {}
    content: bytes | None = None

    body = descriptor.encoded_body()
    if body is not None or descriptor.method in BODY_METHODS:
        content = (body or "").encode("utf-8")
        headers["Content-Type"] = _JSON_CONTENT_TYPE
        headers["Content-Length"] = str(len(content))
    return headers, content


def _timeout(timeout_ms: int | None) -> httpx.Timeout:
    return httpx.Timeout(None if timeout_ms is None else timeout_ms / 1000)


def _translate_error(
    exc: httpx.HTTPError,
    *,
    descriptor: RequestDescriptor,
    url: str,
    timeout_ms: int | None,
) -> TransportError:
    if isinstance(exc, httpx.TimeoutException) and timeout_ms is not None:
        return TransportTimeoutError(timeout_ms)
    return TransportError(
        _TRANSPORT_ERROR.format(
            method=descriptor.method.value,
            url=url,
            error=f"{exc.__class__.__name__}: {exc}",
        ),
    )


class HttpTransport:
    """Blocking transport backed by `httpx.Client`."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_ms: int | None = None,
        verify_certs: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=_timeout(timeout_ms), verify=verify_certs)

    @classmethod
    def from_config(cls, config: ClientConfig) -> HttpTransport:
        """Build a transport from client settings."""
        return cls(config.base_url, timeout_ms=config.timeout_ms, verify_certs=config.verify_certs)

    def request(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Perform one HTTP round trip.

        Raises:
            TransportError: On connection failures and other httpx errors.
            TransportTimeoutError: When the configured timeout elapses.

        Returns:
            TransportResponse: Status code and body text.

        """
        url = f"{self.base_url}{descriptor.target}"
        headers, content = build_wire_request(descriptor)
        _logger.debug("Sending %s %s", descriptor.method.value, url)
        try:
            response = self._client.request(
                descriptor.method.value,
                url,
                headers=headers,
                content=content,
                auth=wire_auth(descriptor),
                timeout=_timeout(self.timeout_ms),
            )
        except httpx.HTTPError as exc:
            raise _translate_error(exc, descriptor=descriptor, url=url, timeout_ms=self.timeout_ms) from exc
        return TransportResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class AsyncHttpTransport:
    """Non-blocking transport backed by `httpx.AsyncClient`."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_ms: int | None = None,
        verify_certs: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=_timeout(timeout_ms), verify=verify_certs)

    @classmethod
    def from_config(cls, config: ClientConfig) -> AsyncHttpTransport:
        """Build a transport from client settings."""
        return cls(config.base_url, timeout_ms=config.timeout_ms, verify_certs=config.verify_certs)

    async def request(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Perform one HTTP round trip without blocking the event loop.

        Raises:
            TransportError: On connection failures and other httpx errors.
            TransportTimeoutError: When the configured timeout elapses.

        Returns:
            TransportResponse: Status code and body text.

        """
        url = f"{self.base_url}{descriptor.target}"
        headers, content = build_wire_request(descriptor)
        _logger.debug("Sending %s %s", descriptor.method.value, url)
        try:
            response = await self._client.request(
                descriptor.method.value,
                url,
                headers=headers,
                content=content,
                auth=wire_auth(descriptor),
                timeout=_timeout(self.timeout_ms),
            )
        except httpx.HTTPError as exc:
            raise _translate_error(exc, descriptor=descriptor, url=url, timeout_ms=self.timeout_ms) from exc
        return TransportResponse(status_code=response.status_code, text=response.text)

    async def aclose(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()
