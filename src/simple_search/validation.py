"""Presence checks applied to call arguments before any request is built."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from simple_search.errors import ArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence


def validate_args(
    args: Mapping[str, Any] | None,
    required_keys: Sequence[str] | None = None,
    callback: Callable[[ArgumentError | None], object] | None = None,
) -> ArgumentError | None:
    """Check that ``args`` exists and literally contains every required key.

    A key set to a falsy value (``False``, ``0``, ``""``) still counts as present.
    Only the first missing key is reported.

    Args:
        args (Mapping[str, Any] | None): Call arguments.
        required_keys (Sequence[str] | None): Keys that must be present.
        callback (Callable[[ArgumentError | None], object] | None): Optional
            completion hook, invoked synchronously with the outcome.

    Returns:
        ArgumentError | None: The first failure, or ``None`` on success.

    """
    error = _first_failure(args, required_keys)
    if callback is not None:
        callback(error)
    return error


def require_args(args: Mapping[str, Any] | None, required_keys: Sequence[str] | None = None) -> None:
    """Raise the first validation failure, if any.

    Raises:
        ArgumentError: If ``args`` is absent or misses a required key.

    """
    error = _first_failure(args, required_keys)
    if error is not None:
        raise error


def _first_failure(
    args: Mapping[str, Any] | None,
    required_keys: Sequence[str] | None,
) -> ArgumentError | None:
    if args is None:
        return ArgumentError.args_required()

    if isinstance(required_keys, (list, tuple)):
        for key in required_keys:
            if key not in args:
                return ArgumentError.missing_arg(key)
    return None
