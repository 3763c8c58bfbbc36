"""Argument parser construction for all CLI subcommands."""

from __future__ import annotations

import argparse
import os

from simple_search.cli.command_handlers import (
    handle_create_index,
    handle_delete,
    handle_delete_index,
    handle_delete_mapping,
    handle_get,
    handle_get_mapping,
    handle_index,
    handle_put_mapping,
    handle_refresh,
    handle_request,
    handle_scroll,
    handle_search,
    handle_status,
)
from simple_search.cli.common_runtime import parse_json_argument, parse_param
from simple_search.config import ENV_PASSWORD, ENV_URL, ENV_USERNAME
from simple_search.domain import CommandName, HttpMethod, RequestFormat
from simple_search.operations import DEFAULT_SCROLL_TTL_MINUTES

SubParsers = argparse._SubParsersAction  # noqa: SLF001


def add_connection_flags(subparser: argparse.ArgumentParser) -> None:
    """Add connection and output flags shared by every subcommand."""
    subparser.add_argument(
        "--url",
        default=os.getenv(ENV_URL),
        help="Service base URL, e.g. http://localhost:9200.",
    )
    subparser.add_argument(
        "--username",
        default=os.getenv(ENV_USERNAME),
        help="HTTP Basic username.",
    )
    subparser.add_argument(
        "--password",
        default=os.getenv(ENV_PASSWORD),
        help="HTTP Basic password.",
    )
    subparser.add_argument(
        "--timeout-ms",
        default=None,
        type=int,
        help="Request timeout in milliseconds.",
    )
    subparser.add_argument(
        "--log-requests",
        default=None,
        choices=[fmt.value for fmt in RequestFormat],
        help="Log each request and response, rendering requests as plain lines or curl commands.",
    )
    subparser.add_argument(
        "--output",
        default="-",
        help="Output destination: '-' for stdout or path to file.",
    )


def _add_command(
    subparsers: SubParsers,
    command: CommandName,
    help_text: str,
    *,
    index_required: bool = False,
) -> argparse.ArgumentParser:
    subparser = subparsers.add_parser(command.value, help=help_text)
    add_connection_flags(subparser)
    subparser.add_argument(
        "--index",
        required=index_required,
        default=None,
        help="Target index; comma-separated where several indices are accepted. Defaults to SIMPLE_SEARCH_INDEX.",
    )
    return subparser


def build_admin_parsers(subparsers: SubParsers) -> None:
    """Build index administration subcommands."""
    status_parser = _add_command(subparsers, CommandName.STATUS, "Report index status.")
    status_parser.set_defaults(handler=handle_status)

    refresh_parser = _add_command(subparsers, CommandName.REFRESH, "Refresh indices.")
    refresh_parser.set_defaults(handler=handle_refresh)

    create_parser = _add_command(subparsers, CommandName.CREATE_INDEX, "Create an index.")
    create_parser.add_argument(
        "--options",
        default=None,
        type=parse_json_argument,
        help="Index settings as JSON or @file.json.",
    )
    create_parser.set_defaults(handler=handle_create_index)

    delete_parser = _add_command(subparsers, CommandName.DELETE_INDEX, "Delete an index.")
    delete_parser.set_defaults(handler=handle_delete_index)

    get_mapping_parser = _add_command(subparsers, CommandName.GET_MAPPING, "Fetch a type mapping.")
    get_mapping_parser.add_argument("--type", required=True, help="Document type.")
    get_mapping_parser.set_defaults(handler=handle_get_mapping)

    put_mapping_parser = _add_command(subparsers, CommandName.PUT_MAPPING, "Put a type mapping.")
    put_mapping_parser.add_argument("--type", required=True, help="Document type.")
    put_mapping_parser.add_argument(
        "--mapping",
        required=True,
        type=parse_json_argument,
        help="Mapping as JSON or @file.json.",
    )
    put_mapping_parser.set_defaults(handler=handle_put_mapping)

    delete_mapping_parser = _add_command(subparsers, CommandName.DELETE_MAPPING, "Delete a type mapping.")
    delete_mapping_parser.add_argument("--type", required=True, help="Document type.")
    delete_mapping_parser.set_defaults(handler=handle_delete_mapping)


def build_document_parsers(subparsers: SubParsers) -> None:
    """Build document subcommands."""
    index_parser = _add_command(subparsers, CommandName.INDEX, "Index one document.")
    index_parser.add_argument("--type", required=True, help="Document type.")
    index_parser.add_argument("--id", default=None, help="Document id; omitted ids are generated by the service.")
    index_parser.add_argument(
        "--doc",
        required=True,
        type=parse_json_argument,
        help="Document as JSON or @file.json.",
    )
    index_parser.add_argument(
        "--refresh",
        default=False,
        action=argparse.BooleanOptionalAction,
        help="Make the document searchable immediately.",
    )
    index_parser.set_defaults(handler=handle_index)

    for command, help_text, handler in (
        (CommandName.GET, "Fetch one document source.", handle_get),
        (CommandName.DELETE, "Delete one document.", handle_delete),
    ):
        document_parser = _add_command(subparsers, command, help_text)
        document_parser.add_argument("--type", required=True, help="Document type.")
        document_parser.add_argument("--id", required=True, help="Document id.")
        document_parser.set_defaults(handler=handler)


def build_search_parsers(subparsers: SubParsers) -> None:
    """Build search and scroll subcommands."""
    for command, help_text, handler in (
        (CommandName.SEARCH, "Run one search.", handle_search),
        (CommandName.SCROLL, "Scan every matching document page by page.", handle_scroll),
    ):
        search_parser = _add_command(subparsers, command, help_text)
        search_parser.add_argument("--type", default=None, help="Document type.")
        search_parser.add_argument(
            "--search",
            default=None,
            type=parse_json_argument,
            help="Query body as JSON or @file.json.",
        )
        if command is CommandName.SCROLL:
            search_parser.add_argument(
                "--scroll-ttl",
                default=DEFAULT_SCROLL_TTL_MINUTES,
                type=int,
                help="Scroll cursor time-to-live in minutes.",
            )
        search_parser.set_defaults(handler=handler)


def build_request_parser(subparsers: SubParsers) -> None:
    """Build the raw request subcommand."""
    request_parser = subparsers.add_parser(CommandName.REQUEST.value, help="Send a raw request.")
    add_connection_flags(request_parser)
    request_parser.add_argument(
        "--method",
        default=HttpMethod.GET.value,
        choices=[method.value for method in HttpMethod],
        type=str.upper,
        help="HTTP method.",
    )
    request_parser.add_argument("--path", required=True, help="Request path, e.g. /_cluster/health.")
    request_parser.add_argument(
        "--param",
        action="append",
        type=parse_param,
        help="Query parameter as key=value; repeatable.",
    )
    request_parser.add_argument(
        "--body",
        default=None,
        type=parse_json_argument,
        help="Body as JSON or @file.json.",
    )
    request_parser.set_defaults(handler=handle_request, index=None)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser with all subcommands.

    Returns:
        argparse.ArgumentParser: Configured top-level parser.

    """
    parser = argparse.ArgumentParser(
        prog="simple-search",
        description="Administer indices, manage documents and search a document-oriented HTTP search service.",
    )
    subparsers = parser.add_subparsers(dest="command")

    build_admin_parsers(subparsers)
    build_document_parsers(subparsers)
    build_search_parsers(subparsers)
    build_request_parser(subparsers)

    return parser
