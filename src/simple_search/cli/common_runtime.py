"""Shared CLI runtime primitives (logging setup, JSON arguments, payload emission)."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from simple_search.domain import OperationResult

_DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"
_LOG_LEVEL_ENV = "SIMPLE_SEARCH_LOG_LEVEL"
_INVALID_JSON_ERROR = "Invalid JSON argument {value!r}: {error}"
_INVALID_PARAM_ERROR = "Expected key=value, got {value!r}."


def configure_logging() -> None:
    """Configure root logging from ``SIMPLE_SEARCH_LOG_LEVEL`` (default ``INFO``)."""
    logging.basicConfig(
        level=os.getenv(_LOG_LEVEL_ENV, "INFO").upper(),
        format=_DEFAULT_LOG_FORMAT,
    )


def parse_json_argument(value: str) -> Any:
    """Parse inline JSON, or JSON read from ``@path`` when prefixed with ``@``.

    Args:
        value (str): Raw argument value.

    Raises:
        argparse.ArgumentTypeError: If the file is unreadable or the JSON is invalid.

    Returns:
        Any: Decoded JSON value.

    """
    text = value
    if value.startswith("@"):
        try:
            text = Path(value[1:]).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise argparse.ArgumentTypeError(_INVALID_JSON_ERROR.format(value=value, error=exc)) from exc
    try:
        return json.loads(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(_INVALID_JSON_ERROR.format(value=value, error=exc)) from exc


def parse_param(value: str) -> tuple[str, str]:
    """Parse one ``key=value`` query parameter.

    Raises:
        argparse.ArgumentTypeError: If ``value`` has no ``=``.

    """
    key, separator, param_value = value.partition("=")
    if not separator or not key.strip():
        raise argparse.ArgumentTypeError(_INVALID_PARAM_ERROR.format(value=value))
    return key.strip(), param_value


def to_jsonable(value: Any) -> Any:
    """Convert operation results (pydantic models, result wrappers) to plain JSON data."""
    if isinstance(value, OperationResult):
        return to_jsonable(value.result)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    return value


def emit_payload(payload: dict[str, Any] | BaseModel | str, output: str) -> None:
    """Emit payload to stdout or to a file.

    Args:
        payload (dict[str, Any] | BaseModel | str): Data payload to serialize.
        output (str): Output path or "-" for stdout.

    """
    if isinstance(payload, str):
        serialized = payload
    else:
        serialized = json.dumps(to_jsonable(payload), ensure_ascii=False, indent=2)

    if output == "-":
        print(serialized)
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if serialized.endswith("\n"):
        output_path.write_text(serialized, encoding="utf-8")
    else:
        output_path.write_text(serialized + "\n", encoding="utf-8")
