from __future__ import annotations

import asyncio
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from simple_search import SearchClient
from simple_search.domain import BasicAuth, ClientConfig, HttpMethod, RequestDescriptor
from simple_search.errors import ArgumentError, TransportError, TransportTimeoutError
from simple_search.transport import AsyncHttpTransport, HttpTransport

_BASE_URL = "http://search.test:9200"
_NOT_FOUND = 404
_TIMEOUT_MS = 50
_SERVER_DELAY_SECONDS = 0.5


def _capturing_transport(
    seen: list[httpx.Request],
    *,
    status_code: int = 200,
    text: str = '{"ok": true}',
    **options: object,
) -> HttpTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        seen.append(request)
        return httpx.Response(status_code, text=text)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpTransport(_BASE_URL, client=client, **options)


def test_query_string_and_path_reach_the_wire() -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen)

    transport.request(RequestDescriptor(path="/mypath", params={"foo": "bar"}))

    assert seen[0].method == "GET"
    assert str(seen[0].url) == "http://search.test:9200/mypath?foo=bar"


@pytest.mark.parametrize("method", [HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE])
def test_body_methods_send_explicit_zero_content_length(method: HttpMethod) -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen)

    transport.request(RequestDescriptor(method=method, path="/books"))

    assert seen[0].headers["Content-Length"] == "0"
    assert seen[0].content == b""


def test_get_without_body_sends_no_content_length() -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen)

    transport.request(RequestDescriptor(method=HttpMethod.GET, path="/_status"))

    assert "Content-Length" not in seen[0].headers
    assert seen[0].content == b""


def test_object_body_is_json_and_string_body_is_verbatim() -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen)

    transport.request(RequestDescriptor(method=HttpMethod.PUT, path="/books", body={"settings": {}}))
    transport.request(RequestDescriptor(method=HttpMethod.POST, path="/books/_search", body="match everything"))

    assert seen[0].content == b'{"settings": {}}'
    assert seen[0].headers["Content-Type"] == "application/json"
    assert seen[1].content == b"match everything"


def test_basic_auth_header_is_sent() -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen)

    transport.request(RequestDescriptor(path="/", auth=BasicAuth(username="foo", password="bar")))

    assert seen[0].headers["Authorization"] == "Basic Zm9vOmJhcg=="


def test_reserved_characters_in_document_id_stay_in_the_path() -> None:
    seen: list[httpx.Request] = []
    client = SearchClient(transport=_capturing_transport(seen, text='{"found": true, "_source": {}}'))

    result = client.core.get({"index": "books", "type": "book", "id": "a?b#c"})

    assert result.result == {}
    assert seen[0].url.raw_path == b"/books/book/a%3Fb%23c"
    assert not seen[0].url.params


def test_unserializable_body_is_reported_before_sending() -> None:
    seen: list[httpx.Request] = []
    client = SearchClient(transport=_capturing_transport(seen))

    with pytest.raises(ArgumentError):
        client.core.index({"index": "books", "type": "book", "id": "1", "doc": {"at": {1, 2}}})

    assert seen == []


def test_non_success_status_still_returns_body() -> None:
    seen: list[httpx.Request] = []
    transport = _capturing_transport(seen, status_code=_NOT_FOUND, text='{"found": false}')

    response = transport.request(RequestDescriptor(path="/books/book/1"))

    assert response.status_code == _NOT_FOUND
    assert response.text == '{"found": false}'


def test_read_timeout_becomes_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = HttpTransport(_BASE_URL, timeout_ms=_TIMEOUT_MS, client=client)

    with pytest.raises(TransportTimeoutError, match="timed out after 50 ms") as exc_info:
        transport.request(RequestDescriptor(path="/_status"))

    assert exc_info.value.timeout_ms == _TIMEOUT_MS
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


def test_connect_error_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = HttpTransport(_BASE_URL, client=client)

    with pytest.raises(TransportError, match="GET http://search.test:9200/_status failed: ConnectError"):
        transport.request(RequestDescriptor(path="/_status"))


def test_injected_client_is_not_closed() -> None:
    client = httpx.Client(transport=httpx.MockTransport(lambda _request: httpx.Response(200, text="{}")))

    with HttpTransport(_BASE_URL, client=client):
        pass

    assert not client.is_closed
    client.close()


def test_from_config_uses_base_url() -> None:
    transport = HttpTransport.from_config(ClientConfig(host="search.test", port=9201, timeout_ms=_TIMEOUT_MS))
    try:
        assert transport.base_url == "http://search.test:9201"
        assert transport.timeout_ms == _TIMEOUT_MS
    finally:
        transport.close()


def test_async_transport_mirrors_blocking_transport() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        await request.aread()
        seen.append(request)
        return httpx.Response(200, text='{"ok": true}')

    async def run() -> str:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with AsyncHttpTransport(_BASE_URL, client=client) as transport:
            response = await transport.request(RequestDescriptor(method=HttpMethod.DELETE, path="/books"))
        await client.aclose()
        return response.text

    assert asyncio.run(run()) == '{"ok": true}'
    assert seen[0].method == "DELETE"
    assert seen[0].headers["Content-Length"] == "0"


class _SlowHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:
        time.sleep(_SERVER_DELAY_SECONDS)
        try:
            self.send_response(200)
            self.end_headers()
            self.wfile.write(b"{}")
        except OSError:
            return

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        return


def test_slow_server_triggers_configured_timeout() -> None:
    server = ThreadingHTTPServer(("127.0.0.1", 0), _SlowHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        with HttpTransport(f"http://{host}:{port}", timeout_ms=_TIMEOUT_MS) as transport:
            with pytest.raises(TransportTimeoutError):
                transport.request(RequestDescriptor(path="/_status"))
    finally:
        server.shutdown()
        server.server_close()
