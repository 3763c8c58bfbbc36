"""Decode raw service responses and detect service errors embedded in them.

Many error-shaped responses are not failures from the caller's point of view: a status
check on a missing index answers with ``IndexMissingException`` and that should reach the
caller as data. Only errors matching a narrow allowlist (malformed queries, mapping
problems, internal service exceptions) are raised. This is a known heuristic, not a parser
of the service's error taxonomy; the raw body is always handed back so callers can run
their own checks.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from simple_search.errors import ResponseParseError, ServiceError

if TYPE_CHECKING:
    from collections.abc import Callable

_logger = logging.getLogger(__name__)

SERVICE_ERROR_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"ElasticSearchException",
        r"ElasticsearchException",
        r"ClassCastException",
        r"SearchPhaseExecutionException",
        r"MapperParsingException",
        r"QueryParsingException",
    )
)
SERVICE_ERROR_TYPES = frozenset(
    {
        "search_phase_execution_exception",
        "parsing_exception",
        "mapper_parsing_exception",
        "x_content_parse_exception",
        "illegal_argument_exception",
    },
)


def classify_service_error(parsed: Any) -> Any | None:
    """Return the service's error payload when it matches the allowlist.

    Args:
        parsed (Any): Decoded response payload.

    Returns:
        Any | None: The ``error`` value when it is a recognized service failure, else ``None``.

    """
    if not isinstance(parsed, dict):
        return None
    error = parsed.get("error")
    if isinstance(error, str):
        if any(pattern.search(error) for pattern in SERVICE_ERROR_PATTERNS):
            return error
        return None
    if isinstance(error, dict) and error.get("type") in SERVICE_ERROR_TYPES:
        return error
    return None


def decode_body(raw: str | bytes | None) -> Any:
    """Decode a response body as JSON.

    Raises:
        ResponseParseError: If the body is not valid JSON.

    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        return json.loads(text)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(cause=f"{exc.__class__.__name__}: {exc}", raw=text) from exc


def parse_response(raw: str | None) -> Any:
    """Decode a body and raise when it carries a recognized service error.

    Args:
        raw (str | None): Raw response text.

    Raises:
        ResponseParseError: If the body is not valid JSON.
        ServiceError: If the decoded body reports an allowlisted service error.

    Returns:
        Any: Decoded payload.

    """
    parsed = decode_body(raw)
    service_error = classify_service_error(parsed)
    if service_error is not None:
        _logger.debug("Service reported error: %s", service_error)
        raise ServiceError(service_error=service_error, raw=raw)
    return parsed


def handle_response(
    transport_error: BaseException | None,
    raw: str | None,
    callback: Callable[[BaseException | None, Any, str | None], object],
) -> None:
    """Callback-style response handling.

    A transport error is forwarded untouched and the body is ignored. Otherwise the
    callback receives ``(error, None, raw)`` on failure or ``(None, parsed, raw)``.

    Args:
        transport_error (BaseException | None): Error raised by the transport, if any.
        raw (str | None): Raw response text.
        callback (Callable[[BaseException | None, Any, str | None], object]): Completion hook.

    """
    if transport_error is not None:
        callback(transport_error, None, None)
        return

    try:
        parsed = parse_response(raw)
    except (ResponseParseError, ServiceError) as exc:
        callback(exc, None, raw)
        return
    callback(None, parsed, raw)
