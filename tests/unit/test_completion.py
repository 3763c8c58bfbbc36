from __future__ import annotations

from typing import Any

from simple_search.completion import Completion, CompletionState


def test_completion_delivers_first_outcome_only() -> None:
    calls: list[tuple[Any, Any, Any]] = []
    completion = Completion(lambda error, result, raw: calls.append((error, result, raw)))

    first = completion.settle(None, {"ok": True}, '{"ok": true}')
    late = completion.settle(RuntimeError("socket closed"), None, None)

    assert first is True
    assert late is False
    assert calls == [(None, {"ok": True}, '{"ok": true}')]


def test_completion_tracks_state() -> None:
    completion = Completion(lambda *_args: None)

    assert completion.state is CompletionState.PENDING
    assert not completion.settled

    completion.settle(ValueError("boom"))

    assert completion.state is CompletionState.SETTLED
    assert completion.settled


def test_completion_is_settled_before_callback_runs() -> None:
    states: list[bool] = []
    completion: Completion

    def _callback(*_args: Any) -> None:
        states.append(completion.settled)
        completion.settle(RuntimeError("re-entrant"))

    completion = Completion(_callback)
    completion.settle()

    assert states == [True]
