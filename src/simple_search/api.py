"""Namespaced operation groups shared by the blocking and async facades.

Every method delegates to the owning client's ``call``. On `SearchClient` that returns
an `OperationResult` (or ``None`` in callback style); on `AsyncSearchClient` it
returns an awaitable of the same.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from simple_search.completion import Callback

    Args = Mapping[str, Any] | None


class _Namespace:
    __slots__ = ("_client",)

    def __init__(self, client: Any) -> None:
        self._client = client

    def _call(self, name: str, args: Args, callback: Callback | None) -> Any:
        return self._client.call(name, args, callback=callback)


class MappingsApi(_Namespace):
    """Type mapping management."""

    __slots__ = ()

    def update(self, args: Args, callback: Callback | None = None) -> Any:
        """Put a mapping; requires ``index``, ``type`` and ``mapping``."""
        return self._call("indices.mappings.update", args, callback)

    def get(self, args: Args, callback: Callback | None = None) -> Any:
        """Fetch a mapping; requires ``index`` and ``type``."""
        return self._call("indices.mappings.get", args, callback)

    def delete(self, args: Args, callback: Callback | None = None) -> Any:
        """Delete a mapping; requires ``index`` and ``type``."""
        return self._call("indices.mappings.delete", args, callback)


class IndicesApi(_Namespace):
    """Index administration."""

    __slots__ = ("mappings",)

    def __init__(self, client: Any) -> None:
        super().__init__(client)
        self.mappings = MappingsApi(client)

    def create(self, args: Args, callback: Callback | None = None) -> Any:
        """Create an index; ``options`` becomes the request body."""
        return self._call("indices.create", args, callback)

    def delete(self, args: Args, callback: Callback | None = None) -> Any:
        """Delete an index."""
        return self._call("indices.delete", args, callback)

    del_ = delete

    def status(self, args: Args = None, callback: Callback | None = None) -> Any:
        """Report the status of one index, several ``indices``, or all of them."""
        return self._call("indices.status", args, callback)

    def refresh(self, args: Args = None, callback: Callback | None = None) -> Any:
        """Refresh one index, several ``indices``, or all of them."""
        return self._call("indices.refresh", args, callback)


class CoreApi(_Namespace):
    """Document and search operations."""

    __slots__ = ()

    def index(self, args: Args, callback: Callback | None = None) -> Any:
        """Store ``doc``; PUT with an ``id``, POST without."""
        return self._call("core.index", args, callback)

    def get(self, args: Args, callback: Callback | None = None) -> Any:
        """Fetch a document's ``_source``; ``None`` when it does not exist."""
        return self._call("core.get", args, callback)

    def delete(self, args: Args, callback: Callback | None = None) -> Any:
        """Delete a document."""
        return self._call("core.delete", args, callback)

    del_ = delete

    def search(self, args: Args = None, callback: Callback | None = None) -> Any:
        """Run ``search`` and project the hits."""
        return self._call("core.search", args, callback)

    def scan_search(self, args: Args = None, callback: Callback | None = None) -> Any:
        """Open a scroll cursor and return its ``scroll_id``."""
        return self._call("core.scan_search", args, callback)

    def scroll_search(self, args: Args, callback: Callback | None = None) -> Any:
        """Fetch the page following ``scroll_id``."""
        return self._call("core.scroll_search", args, callback)

    def scroll(self, args: Args = None) -> Any:
        """Iterate over every page of a scan search until an empty page."""
        return self._client.scroll_pages(args)
