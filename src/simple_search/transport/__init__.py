"""Transport interfaces and httpx-backed implementations."""

from simple_search.transport.http import AsyncHttpTransport, HttpTransport, build_wire_request, wire_auth
from simple_search.transport.protocols import AsyncTransport, Transport

__all__ = [
    "AsyncHttpTransport",
    "AsyncTransport",
    "HttpTransport",
    "Transport",
    "build_wire_request",
    "wire_auth",
]
