"""Single-assignment completion token for callback-style calls."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    Callback = Callable[[BaseException | None, Any, str | None], object]

_logger = logging.getLogger(__name__)


class CompletionState(StrEnum):
    """Represent the lifecycle of one completion token."""

    PENDING = "pending"
    SETTLED = "settled"


class Completion:
    """Deliver exactly one ``(error, result, raw)`` outcome to a callback.

    The first call to `settle` wins. Later settlements, for example an error
    reported after a successful response, are dropped.
    """

    __slots__ = ("_callback", "_state")

    def __init__(self, callback: Callback) -> None:
        self._callback = callback
        self._state = CompletionState.PENDING

    @property
    def state(self) -> CompletionState:
        """Return the current state."""
        return self._state

    @property
    def settled(self) -> bool:
        """Return whether an outcome was already delivered."""
        return self._state is CompletionState.SETTLED

    def settle(self, error: BaseException | None = None, result: Any = None, raw: str | None = None) -> bool:
        """Deliver one outcome unless the token is already settled.

        Args:
            error (BaseException | None): Failure, if any.
            result (Any): Shaped operation result.
            raw (str | None): Untransformed response body.

        Returns:
            bool: ``True`` when the callback was invoked, ``False`` when dropped.

        """
        if self._state is CompletionState.SETTLED:
            _logger.debug("Dropping late settlement: %r", error)
            return False
        self._state = CompletionState.SETTLED
        self._callback(error, result, raw)
        return True
