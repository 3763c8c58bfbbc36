"""CLI command handlers and the client they share."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from simple_search.cli.common_runtime import to_jsonable
from simple_search.client import SearchClient
from simple_search.config import connection_fields_from_url, load_config_from_env
from simple_search.domain import BasicAuth, CommandName, LoggingOptions, RequestFormatters, parse_request_format

if TYPE_CHECKING:
    import argparse

_REQUEST_LOGGER_NAME = "simple_search.requests"
_logger = logging.getLogger(__name__)


def build_logging_options(log_requests: str | None) -> LoggingOptions | None:
    """Build request logging options for the ``--log-requests`` flag.

    Args:
        log_requests (str | None): ``plain``, ``curl`` or ``None`` to disable.

    Returns:
        LoggingOptions | None: Options logging requests and responses at INFO.

    """
    if not log_requests:
        return None
    return LoggingOptions(
        logger=logging.getLogger(_REQUEST_LOGGER_NAME),
        level="info",
        events={"request", "response"},
        formatters=RequestFormatters(request=parse_request_format(log_requests)),
    )


def build_client(args: argparse.Namespace) -> SearchClient:
    """Build a client from environment defaults overridden by CLI flags.

    Returns:
        SearchClient: Configured client.

    """
    overrides: dict[str, Any] = {}
    if args.url:
        overrides.update(connection_fields_from_url(str(args.url)))
    if args.index:
        overrides["index"] = str(args.index)
    if args.username:
        overrides["auth"] = BasicAuth(username=str(args.username), password=str(args.password or ""))
    if args.timeout_ms is not None:
        overrides["timeout_ms"] = int(args.timeout_ms)
    overrides["logging"] = build_logging_options(args.log_requests)
    return SearchClient(load_config_from_env(**overrides))


def _payload(command: CommandName, result: Any) -> dict[str, Any]:
    return {"command": command.value, "result": to_jsonable(result)}


def _document_args(args: argparse.Namespace) -> dict[str, Any]:
    call_args: dict[str, Any] = {"type": args.type, "id": args.id}
    if args.index:
        call_args["index"] = args.index
    return call_args


def _index_args(args: argparse.Namespace) -> dict[str, Any]:
    if args.index and "," in args.index:
        return {"indices": [name.strip() for name in str(args.index).split(",") if name.strip()]}
    return {"index": args.index} if args.index else {}


def handle_status(args: argparse.Namespace) -> dict[str, Any]:
    """Report index status."""
    with build_client(args) as client:
        outcome = client.indices.status(_index_args(args))
    return _payload(CommandName.STATUS, outcome)


def handle_refresh(args: argparse.Namespace) -> dict[str, Any]:
    """Refresh one, several or all indices."""
    with build_client(args) as client:
        outcome = client.indices.refresh(_index_args(args))
    return _payload(CommandName.REFRESH, outcome)


def handle_create_index(args: argparse.Namespace) -> dict[str, Any]:
    """Create an index with optional settings."""
    call_args: dict[str, Any] = {"options": args.options}
    if args.index:
        call_args["index"] = args.index
    with build_client(args) as client:
        outcome = client.indices.create(call_args)
    return _payload(CommandName.CREATE_INDEX, outcome)


def handle_delete_index(args: argparse.Namespace) -> dict[str, Any]:
    """Delete an index."""
    with build_client(args) as client:
        outcome = client.indices.delete({"index": args.index} if args.index else {})
    return _payload(CommandName.DELETE_INDEX, outcome)


def handle_get_mapping(args: argparse.Namespace) -> dict[str, Any]:
    """Fetch a type mapping."""
    call_args = {"type": args.type, **({"index": args.index} if args.index else {})}
    with build_client(args) as client:
        outcome = client.indices.mappings.get(call_args)
    return _payload(CommandName.GET_MAPPING, outcome)


def handle_put_mapping(args: argparse.Namespace) -> dict[str, Any]:
    """Put a type mapping."""
    call_args = {"type": args.type, "mapping": args.mapping, **({"index": args.index} if args.index else {})}
    with build_client(args) as client:
        outcome = client.indices.mappings.update(call_args)
    return _payload(CommandName.PUT_MAPPING, outcome)


def handle_delete_mapping(args: argparse.Namespace) -> dict[str, Any]:
    """Delete a type mapping."""
    call_args = {"type": args.type, **({"index": args.index} if args.index else {})}
    with build_client(args) as client:
        outcome = client.indices.mappings.delete(call_args)
    return _payload(CommandName.DELETE_MAPPING, outcome)


def handle_index(args: argparse.Namespace) -> dict[str, Any]:
    """Index one document, with or without an explicit id."""
    call_args = _document_args(args)
    call_args["doc"] = args.doc
    if args.refresh:
        call_args["params"] = {"refresh": "true"}
    with build_client(args) as client:
        outcome = client.core.index(call_args)
    return _payload(CommandName.INDEX, outcome)


def handle_get(args: argparse.Namespace) -> dict[str, Any]:
    """Fetch one document's source."""
    with build_client(args) as client:
        outcome = client.core.get(_document_args(args))
    return _payload(CommandName.GET, outcome)


def handle_delete(args: argparse.Namespace) -> dict[str, Any]:
    """Delete one document."""
    with build_client(args) as client:
        outcome = client.core.delete(_document_args(args))
    return _payload(CommandName.DELETE, outcome)


def _search_args(args: argparse.Namespace) -> dict[str, Any]:
    call_args = _index_args(args)
    if args.type:
        call_args["type"] = args.type
    if args.search is not None:
        call_args["search"] = args.search
    return call_args


def handle_search(args: argparse.Namespace) -> dict[str, Any]:
    """Run one search and print the projected hits."""
    with build_client(args) as client:
        outcome = client.core.search(_search_args(args))
    return _payload(CommandName.SEARCH, outcome)


def handle_scroll(args: argparse.Namespace) -> dict[str, Any]:
    """Scan an index page by page and print every page."""
    call_args = _search_args(args)
    call_args["scroll_ttl"] = int(args.scroll_ttl)
    with build_client(args) as client:
        pages = list(client.core.scroll(call_args))
    _logger.info("Fetched %d scroll pages.", len(pages))
    return _payload(CommandName.SCROLL, pages)


def handle_request(args: argparse.Namespace) -> dict[str, Any]:
    """Send a raw request through the escape hatch."""
    call_args: dict[str, Any] = {
        "method": args.method,
        "path": args.path,
        "params": dict(args.param or []),
        "body": args.body,
    }
    with build_client(args) as client:
        outcome = client.request(call_args)
    return _payload(CommandName.REQUEST, outcome)
