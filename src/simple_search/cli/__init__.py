"""Command-line interface package exports."""

from simple_search.cli.argument_parser import build_parser
from simple_search.cli.command_handlers import build_client
from simple_search.cli.entrypoint import main

__all__ = ["build_client", "build_parser", "main"]
