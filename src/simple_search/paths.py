"""Path and query-string helpers for request descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

if TYPE_CHECKING:
    from collections.abc import Mapping

# Commas separate index names inside one segment.
_SEGMENT_SAFE = ","


def make_path(*segments: object) -> str:
    """Join percent-encoded path segments with single slashes, skipping empty ones.

    Each segment is one path component: ``?``, ``#`` and ``/`` inside an index, type or
    id are encoded so they cannot change which resource is addressed.

    Args:
        *segments (object): Index, type, id and suffix tokens; ``None`` and ``""`` are dropped.

    Returns:
        str: Path with exactly one leading slash and no trailing slash.

    """
    parts = [quote(str(segment), safe=_SEGMENT_SAFE) for segment in segments if segment is not None and segment != ""]
    return "/" + "/".join(parts)


def normalize_path(path: object) -> str:
    """Return a caller-supplied path with exactly one leading slash and no trailing slash.

    The path is taken verbatim otherwise; it may span several components.
    """
    if path is None:
        return "/"
    return "/" + str(path).strip("/")


def index_segment(args: Mapping[str, Any]) -> str | None:
    """Resolve the index path segment from ``indices`` or ``index``.

    Lists are joined with commas; an empty selection means "all indices".

    Returns:
        str | None: Path segment, or ``None`` when the segment must be omitted.

    """
    selection = args.get("indices")
    if selection is None:
        selection = args.get("index")

    if isinstance(selection, (list, tuple)):
        joined = ",".join(str(name) for name in selection if str(name))
        return joined or None
    if selection is None or selection == "":
        return None
    return str(selection)


def append_query(path: str, params: Mapping[str, Any] | None) -> str:
    """Append encoded query parameters, using ``&`` when ``path`` already has a query.

    Args:
        path (str): Request path, possibly with a query string.
        params (Mapping[str, Any] | None): Query parameters.

    Returns:
        str: Path with parameters applied.

    """
    if not params:
        return path
    encoded = urlencode({key: _query_value(value) for key, value in params.items() if value is not None})
    if not encoded:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{encoded}"


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
