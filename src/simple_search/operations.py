"""Request builders and result shapers for every logical operation.

Each builder turns call arguments into an `Operation`: a fully built
`RequestDescriptor` plus the function that reshapes the decoded response. Builders
never touch the network, so the blocking and async facades share them unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from simple_search.domain import HttpMethod, RequestDescriptor, SearchResult, parse_http_method
from simple_search.errors import ServiceError, UnsupportedOperationError
from simple_search.paths import index_segment, make_path, normalize_path
from simple_search.validation import require_args

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from simple_search.domain import ClientConfig

    Shaper = Callable[[Any, str | None], Any]
    Builder = Callable[[dict[str, Any] | None, ClientConfig], "Operation"]

DEFAULT_SCROLL_TTL_MINUTES = 1


@dataclass(frozen=True, slots=True)
class Operation:
    """One ready-to-send request and the shaping step applied to its response."""

    name: str
    descriptor: RequestDescriptor
    shape: Shaper


def with_defaults(args: Mapping[str, Any] | None, config: ClientConfig) -> dict[str, Any] | None:
    """Merge client defaults into call arguments without mutating them.

    The pinned default index is injected only when the caller supplied neither
    ``index`` nor ``indices``.

    Args:
        args (Mapping[str, Any] | None): Caller arguments.
        config (ClientConfig): Client configuration.

    Returns:
        dict[str, Any] | None: New argument mapping, or ``None`` when ``args`` was ``None``.

    """
    if args is None:
        return None
    merged = dict(args)
    if config.index is not None and "index" not in merged and "indices" not in merged:
        merged["index"] = config.index
    return merged


def _passthrough(parsed: Any, _raw: str | None) -> Any:
    return parsed


def shape_document(parsed: Any, _raw: str | None) -> Any:
    """Reduce a document lookup to its ``_source``, or ``None`` when absent."""
    if not isinstance(parsed, dict):
        return None
    if parsed.get("found") is False or parsed.get("exists") is False:
        return None
    return parsed.get("_source")


def hits_total_value(total: Any) -> int:
    """Return the numeric hit count from either ``total`` layout.

    Older services report an integer, newer ones ``{"value": n, "relation": "eq"}``.
    """
    if isinstance(total, dict):
        total = total.get("value", 0)
    if isinstance(total, bool) or not isinstance(total, (int, float)):
        return 0
    return int(total)


def _embedded_error(parsed: Any) -> Any | None:
    if isinstance(parsed, dict):
        return parsed.get("error")
    return None


def _hit_id(entry: dict[str, Any]) -> str | None:
    doc_id = entry.get("_id")
    return None if doc_id is None else str(doc_id)


def shape_search(parsed: Any, raw: str | None, *, with_scroll_id: bool = False) -> SearchResult | list[Any]:
    """Project a search response onto ``ids``, ``objects``, ``total`` and ``max_score``.

    Zero hits or an empty hit list yield an empty list. When the hits section is missing or empty and the
    payload carries an ``error`` key, the error is raised with the empty list attached.

    Args:
        parsed (Any): Decoded response.
        raw (str | None): Raw response text.
        with_scroll_id (bool): Whether to thread ``_scroll_id`` into the result.

    Raises:
        ServiceError: If an embedded service error accompanies an empty result.

    Returns:
        SearchResult | list[Any]: Normalized result, or ``[]``.

    """
    hits = parsed.get("hits") if isinstance(parsed, dict) else None
    if isinstance(hits, dict) and hits_total_value(hits.get("total")) >= 1:
        entries = [entry for entry in hits.get("hits") or [] if isinstance(entry, dict)]
        # A drained scroll cursor keeps reporting the original total.
        if entries:
            return SearchResult(
                ids=[_hit_id(entry) for entry in entries],
                objects=[entry.get("_source") for entry in entries],
                total=hits.get("total"),
                max_score=hits.get("max_score"),
                scroll_id=parsed.get("_scroll_id") if with_scroll_id else None,
            )

    service_error = _embedded_error(parsed)
    if service_error is not None:
        raise ServiceError(service_error=service_error, raw=raw, result=[])
    return []


def _shape_scroll_page(parsed: Any, raw: str | None) -> SearchResult | list[Any]:
    return shape_search(parsed, raw, with_scroll_id=True)


def shape_scroll_id(parsed: Any, _raw: str | None) -> str | None:
    """Return the opaque cursor opened by a scan search, if any."""
    if isinstance(parsed, dict):
        return parsed.get("_scroll_id") or None
    return None


def _scroll_param(args: Mapping[str, Any]) -> str:
    ttl = args.get("scroll_ttl")
    return f"{DEFAULT_SCROLL_TTL_MINUTES if ttl is None else ttl}m"


def _search_body(args: Mapping[str, Any]) -> Any:
    return args["search"] if "search" in args else args.get("query")


def _descriptor(
    config: ClientConfig,
    *,
    method: HttpMethod,
    path: str,
    body: Any = None,
    params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return RequestDescriptor(
        method=method,
        path=path,
        params=dict(params or {}),
        body=body,
        auth=config.auth,
    )


def _optional_args(args: dict[str, Any] | None, config: ClientConfig) -> dict[str, Any]:
    return with_defaults({} if args is None else args, config) or {}


def build_indices_create(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``PUT /{index}`` with the index options as body."""
    merged = with_defaults(args, config)
    require_args(merged, ["index"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.PUT,
        path=make_path(merged["index"]),
        body=merged.get("options"),
    )
    return Operation(name="indices.create", descriptor=descriptor, shape=_passthrough)


def build_indices_delete(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``DELETE /{index}``."""
    merged = with_defaults(args, config)
    require_args(merged, ["index"])
    descriptor = _descriptor(config, method=HttpMethod.DELETE, path=make_path(merged["index"]))
    return Operation(name="indices.delete", descriptor=descriptor, shape=_passthrough)


def build_indices_status(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``GET /{index|indices}/_status``; no index means all indices."""
    merged = _optional_args(args, config)
    descriptor = _descriptor(config, method=HttpMethod.GET, path=make_path(index_segment(merged), "_status"))
    return Operation(name="indices.status", descriptor=descriptor, shape=_passthrough)


def build_indices_refresh(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``POST /{index|indices}/_refresh``; no index means all indices."""
    merged = _optional_args(args, config)
    descriptor = _descriptor(config, method=HttpMethod.POST, path=make_path(index_segment(merged), "_refresh"))
    return Operation(name="indices.refresh", descriptor=descriptor, shape=_passthrough)


def build_mappings_update(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``PUT /{index}/{type}/_mapping`` with the mapping as body."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type", "mapping"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.PUT,
        path=make_path(merged["index"], merged["type"], "_mapping"),
        body=merged["mapping"],
    )
    return Operation(name="indices.mappings.update", descriptor=descriptor, shape=_passthrough)


def build_mappings_get(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``GET /{index}/{type}/_mapping``."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.GET,
        path=make_path(merged["index"], merged["type"], "_mapping"),
    )
    return Operation(name="indices.mappings.get", descriptor=descriptor, shape=_passthrough)


def build_mappings_delete(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``DELETE /{index}/{type}/_mapping``."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.DELETE,
        path=make_path(merged["index"], merged["type"], "_mapping"),
    )
    return Operation(name="indices.mappings.delete", descriptor=descriptor, shape=_passthrough)


def build_core_index(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``PUT /{index}/{type}/{id}`` or ``POST /{index}/{type}`` without an id."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type", "doc"])
    doc_id = merged.get("id")
    has_id = doc_id is not None and doc_id != ""
    descriptor = _descriptor(
        config,
        method=HttpMethod.PUT if has_id else HttpMethod.POST,
        path=make_path(merged["index"], merged["type"], doc_id if has_id else None),
        body=merged["doc"],
        params=merged.get("params"),
    )
    return Operation(name="core.index", descriptor=descriptor, shape=_passthrough)


def build_core_get(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``GET /{index}/{type}/{id}`` and unwrap ``_source``."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type", "id"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.GET,
        path=make_path(merged["index"], merged["type"], merged["id"]),
    )
    return Operation(name="core.get", descriptor=descriptor, shape=shape_document)


def build_core_delete(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``DELETE /{index}/{type}/{id}``."""
    merged = with_defaults(args, config)
    require_args(merged, ["index", "type", "id"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.DELETE,
        path=make_path(merged["index"], merged["type"], merged["id"]),
    )
    return Operation(name="core.delete", descriptor=descriptor, shape=_passthrough)


def build_core_search(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``POST /{index}/{type}/_search`` and project the hits."""
    merged = _optional_args(args, config)
    descriptor = _descriptor(
        config,
        method=HttpMethod.POST,
        path=make_path(index_segment(merged), merged.get("type", ""), "_search"),
        body=_search_body(merged),
        params=merged.get("params"),
    )
    return Operation(name="core.search", descriptor=descriptor, shape=shape_search)


def build_core_scan_search(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build a scan search that opens a scroll cursor."""
    merged = _optional_args(args, config)
    descriptor = _descriptor(
        config,
        method=HttpMethod.POST,
        path=make_path(index_segment(merged), merged.get("type", ""), "_search"),
        body=_search_body(merged),
        params={"search_type": "scan", "scroll": _scroll_param(merged)},
    )
    return Operation(name="core.scan_search", descriptor=descriptor, shape=shape_scroll_id)


def build_core_scroll_search(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build ``GET /_search/scroll`` for the page following ``scroll_id``."""
    merged = with_defaults(args, config)
    require_args(merged, ["scroll_id"])
    descriptor = _descriptor(
        config,
        method=HttpMethod.GET,
        path=make_path("_search", "scroll"),
        params={"scroll_id": merged["scroll_id"], "scroll": _scroll_param(merged)},
    )
    return Operation(name="core.scroll_search", descriptor=descriptor, shape=_shape_scroll_page)


def build_request(args: dict[str, Any] | None, config: ClientConfig) -> Operation:
    """Build a caller-specified request; the decoded body passes straight through."""
    require_args(args)
    descriptor = _descriptor(
        config,
        method=parse_http_method(args.get("method")),  # type: ignore[union-attr]
        path=normalize_path(args.get("path")),  # type: ignore[union-attr]
        body=args.get("body"),  # type: ignore[union-attr]
        params=args.get("params"),  # type: ignore[union-attr]
    )
    return Operation(name="request", descriptor=descriptor, shape=_passthrough)


OPERATION_BUILDERS: dict[str, Builder] = {
    "indices.create": build_indices_create,
    "indices.delete": build_indices_delete,
    "indices.status": build_indices_status,
    "indices.refresh": build_indices_refresh,
    "indices.mappings.update": build_mappings_update,
    "indices.mappings.get": build_mappings_get,
    "indices.mappings.delete": build_mappings_delete,
    "core.index": build_core_index,
    "core.get": build_core_get,
    "core.delete": build_core_delete,
    "core.search": build_core_search,
    "core.scan_search": build_core_scan_search,
    "core.scroll_search": build_core_scroll_search,
    "request": build_request,
}


def supported_operations() -> tuple[str, ...]:
    """Return the names of every buildable operation."""
    return tuple(OPERATION_BUILDERS)


def build_operation(name: str, args: Mapping[str, Any] | None, config: ClientConfig) -> Operation:
    """Build one operation by name.

    Args:
        name (str): Operation name, e.g. ``core.search``.
        args (Mapping[str, Any] | None): Caller arguments.
        config (ClientConfig): Client configuration.

    Raises:
        ArgumentError: If required arguments are missing.
        UnsupportedOperationError: If the operation name is unknown.

    Returns:
        Operation: Descriptor and shaping step.

    """
    builder = OPERATION_BUILDERS.get(name)
    if builder is None:
        raise UnsupportedOperationError(name=name, supported=", ".join(supported_operations()))
    return builder(None if args is None else dict(args), config)
