from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from simple_search.cli import build_client, build_parser, main
from simple_search.cli import command_handlers
from simple_search.client import SearchClient
from simple_search.domain import HttpMethod, RequestDescriptor, RequestFormat, TransportResponse
from simple_search.errors import TransportError

_PARSER_ERROR_EXIT_CODE = 2
_FAILURE_EXIT_CODE = 1
_TIMEOUT_MS = 750


@dataclass
class _StubTransport:
    responses: list[Any] = field(default_factory=list)
    sent: list[RequestDescriptor] = field(default_factory=list)

    def request(self, descriptor: RequestDescriptor) -> TransportResponse:
        self.sent.append(descriptor)
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return TransportResponse(status_code=200, text=json.dumps(reply))


def _install_stub(monkeypatch: pytest.MonkeyPatch, *responses: Any) -> _StubTransport:
    transport = _StubTransport(responses=list(responses))

    def _build(args: argparse.Namespace) -> SearchClient:
        return SearchClient(transport=transport, index=args.index if args.index and "," not in args.index else None)

    monkeypatch.setattr(command_handlers, "build_client", _build)
    return transport


def test_main_without_subcommand_returns_1(capsys) -> None:
    exit_code = main([])

    assert exit_code == _FAILURE_EXIT_CODE
    assert "usage: simple-search" in capsys.readouterr().out


def test_main_rejects_unknown_subcommand() -> None:
    assert main(["explode"]) == _PARSER_ERROR_EXIT_CODE


def test_main_rejects_invalid_json_argument() -> None:
    assert main(["index", "--type", "book", "--doc", "{not json"]) == _PARSER_ERROR_EXIT_CODE


def test_status_prints_passthrough_payload(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    transport = _install_stub(monkeypatch, {"ok": True, "indices": {}})

    exit_code = main(["status", "--index", "books,films"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"command": "status", "result": {"ok": True, "indices": {}}}
    assert transport.sent[0].path == "/books,films/_status"


def test_index_sends_document_and_refresh_flag(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    transport = _install_stub(monkeypatch, {"ok": True, "_id": "7"})

    exit_code = main(
        ["index", "--index", "books", "--type", "book", "--id", "7", "--doc", '{"title": "Dune"}', "--refresh"],
    )

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["result"] == {"ok": True, "_id": "7"}
    assert transport.sent[0].method is HttpMethod.PUT
    assert transport.sent[0].target == "/books/book/7?refresh=true"
    assert transport.sent[0].body == {"title": "Dune"}


def test_index_reads_document_from_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    doc_path = tmp_path / "doc.json"
    doc_path.write_text('{"title": "Emma"}', encoding="utf-8")
    transport = _install_stub(monkeypatch, {"ok": True})

    exit_code = main(["index", "--index", "books", "--type", "book", "--doc", f"@{doc_path}"])

    assert exit_code == 0
    assert transport.sent[0].method is HttpMethod.POST
    assert transport.sent[0].body == {"title": "Emma"}


def test_get_prints_source_or_null(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    _install_stub(monkeypatch, {"found": False})

    exit_code = main(["get", "--index", "books", "--type", "book", "--id", "1"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"command": "get", "result": None}


def test_search_prints_projection(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    transport = _install_stub(
        monkeypatch,
        {"hits": {"total": 1, "max_score": 2.0, "hits": [{"_id": "1", "_source": {"title": "Dune"}}]}},
    )

    exit_code = main(["search", "--index", "books", "--search", '{"query": {"match_all": {}}}'])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["result"]["ids"] == ["1"]
    assert payload["result"]["objects"] == [{"title": "Dune"}]
    assert transport.sent[0].body == {"query": {"match_all": {}}}


def test_scroll_prints_every_page(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    transport = _install_stub(
        monkeypatch,
        {"_scroll_id": "c1", "hits": {"total": 1, "hits": []}},
        {"_scroll_id": "c2", "hits": {"total": 1, "hits": [{"_id": "1", "_source": {"n": 1}}]}},
        {"_scroll_id": "c3", "hits": {"total": 1, "hits": []}},
    )

    exit_code = main(["scroll", "--index", "books", "--scroll-ttl", "5"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [page["ids"] for page in payload["result"]] == [["1"]]
    assert transport.sent[0].params == {"search_type": "scan", "scroll": "5m"}


def test_request_forwards_method_params_and_body(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    transport = _install_stub(monkeypatch, {"acknowledged": True})

    exit_code = main(
        ["request", "--method", "post", "--path", "/books/_close", "--param", "timeout=5s", "--body", "{}"],
    )

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["result"] == {"acknowledged": True}
    assert transport.sent[0].method is HttpMethod.POST
    assert transport.sent[0].target == "/books/_close?timeout=5s"
    assert transport.sent[0].body == {}


def test_transport_failure_returns_1(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    _install_stub(monkeypatch, TransportError("connection refused"))

    exit_code = main(["refresh"])

    assert exit_code == _FAILURE_EXIT_CODE
    assert capsys.readouterr().out == ""


def test_missing_index_is_reported_as_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    transport = _install_stub(monkeypatch)

    assert main(["delete-index"]) == _FAILURE_EXIT_CODE
    assert transport.sent == []


def test_output_is_written_to_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    _install_stub(monkeypatch, {"ok": True})
    output = tmp_path / "nested" / "status.json"

    exit_code = main(["status", "--output", str(output)])

    assert exit_code == 0
    assert json.loads(output.read_text(encoding="utf-8")) == {"command": "status", "result": {"ok": True}}


def test_build_client_applies_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SIMPLE_SEARCH_URL", "SIMPLE_SEARCH_USERNAME", "SIMPLE_SEARCH_PASSWORD", "SIMPLE_SEARCH_INDEX"):
        monkeypatch.delenv(name, raising=False)
    args = build_parser().parse_args(
        [
            "status",
            "--url",
            "https://search.local:9243",
            "--index",
            "books",
            "--username",
            "foo",
            "--password",
            "bar",
            "--timeout-ms",
            str(_TIMEOUT_MS),
            "--log-requests",
            "curl",
        ],
    )

    client = build_client(args)
    try:
        assert client.base_url == "https://search.local:9243"
        assert client.config.index == "books"
        assert client.config.auth.username == "foo"
        assert client.config.timeout_ms == _TIMEOUT_MS
        assert client.config.logging.formatters.request is RequestFormat.CURL
    finally:
        client.close()
