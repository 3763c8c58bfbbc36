from __future__ import annotations

import logging

import pytest

from simple_search.domain import (
    BasicAuth,
    HttpMethod,
    LogEvent,
    LoggingOptions,
    RequestDescriptor,
    RequestFormatters,
    TransportResponse,
)
from simple_search.request_logger import (
    RequestLogger,
    render_args,
    render_curl_request,
    render_plain_request,
    render_response,
)

_BASE_URL = "http://localhost:9200"


def test_plain_request_includes_body_only_when_present() -> None:
    without_body = RequestDescriptor(method=HttpMethod.GET, path="/_status")
    with_body = RequestDescriptor(method=HttpMethod.POST, path="/books/_search", body={"size": 1})

    assert render_plain_request(without_body, _BASE_URL) == "Search request: GET http://localhost:9200/_status"
    assert render_plain_request(with_body, _BASE_URL) == (
        'Search request: POST http://localhost:9200/books/_search body: {"size": 1}'
    )


def test_curl_request_is_reproducible() -> None:
    descriptor = RequestDescriptor(
        method=HttpMethod.PUT,
        path="/books/book/1",
        params={"refresh": "true"},
        body={"title": "Dune"},
    )

    rendered = render_curl_request(descriptor, _BASE_URL)

    assert rendered.startswith("curl -X PUT ")
    assert "http://localhost:9200/books/book/1?refresh=true" in rendered
    assert "-H 'Content-Type: application/json'" in rendered
    assert "-d '{\"title\": \"Dune\"}'" in rendered


def test_curl_request_masks_password() -> None:
    descriptor = RequestDescriptor(path="/", auth=BasicAuth(username="foo", password="s3cret"))

    rendered = render_curl_request(descriptor, _BASE_URL)

    assert "-u 'foo:***'" in rendered
    assert "s3cret" not in rendered


def test_response_and_args_rendering() -> None:
    assert render_response(TransportResponse(status_code=404, text="{}")) == "Search response: 404 {}"
    assert render_args("core.get", {"id": "1"}) == 'Search args: core.get {"id": "1"}'
    assert render_args("indices.status", None) == "Search args: indices.status null"


def test_disabled_logger_emits_nothing() -> None:
    logger = RequestLogger(None, base_url=_BASE_URL)

    logger.log_args("core.get", {"id": "1"})

    assert not logger.enabled
    assert not logger.wants(LogEvent.REQUEST)


def test_only_selected_events_are_emitted() -> None:
    messages: list[str] = []
    options = LoggingOptions(logger={"warn": messages.append}, level="warn", events={"response"})
    logger = RequestLogger(options, base_url=_BASE_URL)

    logger.log_args("core.get", {"id": "1"})
    logger.log_request(RequestDescriptor(path="/_status"))
    logger.log_response(TransportResponse(status_code=200, text='{"ok": true}'))

    assert messages == ['Search response: 200 {"ok": true}']


def test_standard_logger_sink_is_supported(caplog: pytest.LogCaptureFixture) -> None:
    sink = logging.getLogger("simple_search.tests.requests")
    options = LoggingOptions(
        logger=sink,
        level="info",
        events={"request"},
        formatters=RequestFormatters(request="plain"),
    )
    logger = RequestLogger(options, base_url=_BASE_URL)

    with caplog.at_level(logging.INFO, logger="simple_search.tests.requests"):
        logger.log_request(RequestDescriptor(method=HttpMethod.DELETE, path="/books"))

    assert "Search request: DELETE http://localhost:9200/books" in caplog.text


def test_missing_sink_level_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    options = LoggingOptions(logger={"debug": print}, level="trace")
    logger = RequestLogger(options, base_url=_BASE_URL)

    with caplog.at_level(logging.WARNING, logger="simple_search.request_logger"):
        logger.log_args("core.get", {})

    assert "no sink for level 'trace'" in caplog.text


def test_curl_format_uses_client_credentials() -> None:
    messages: list[str] = []
    options = LoggingOptions(
        logger={"debug": messages.append},
        events={LogEvent.REQUEST},
        formatters=RequestFormatters(request="curl"),
    )
    logger = RequestLogger(options, base_url=_BASE_URL, auth=BasicAuth(username="admin", password="pw"))

    logger.log_request(RequestDescriptor(method=HttpMethod.GET, path="/_status"))

    assert messages == ["curl -X GET http://localhost:9200/_status -u 'admin:***'"]
