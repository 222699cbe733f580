"""Run one fallible operation with error display suppressed.

Failure is detected by comparing error-history snapshots taken before and
after the call, not by letting exceptions reach the caller. An ``Exception``
escaping the operation is recorded into the history, so it is detected the
same way as an error the operation wrote itself via ``write_error``.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

from quietretry.display import suppressed_errors, write_error
from quietretry.history import resolve_history
from quietretry.result import Failure, Success
from quietretry.snapshot import capture_last_error, did_error_occur

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from quietretry.history import ErrorHistory
    from quietretry.result import OperationResult

__all__ = ["suppressed_invoke", "suppressed_invoke_async"]


def suppressed_invoke[T](
    operation: Callable[..., T],
    *args: Any,
    history: ErrorHistory | None = None,
    **kwargs: Any,
) -> OperationResult[T]:
    """Invoke *operation* once and report whether it added an error.

    Returns ``Success(value)`` when the history is unchanged, otherwise
    ``Failure(record)`` with the newest record. Non-``Exception`` base
    exceptions (e.g. KeyboardInterrupt) propagate after the display setting
    has been restored.

    Only *history* is watched: an operation that reports through
    ``write_error`` must write to the same history, or its failure goes
    unnoticed.
    """
    hist = resolve_history(history)
    before = capture_last_error(hist)
    value: Any = None
    with suppressed_errors():
        try:
            value = operation(*args, **kwargs)
        except Exception as exc:
            write_error(exc, target=_describe(operation), history=hist)
    after = capture_last_error(hist)
    if after is not None and did_error_occur(before, after):
        return Failure(after)
    return Success(value)


async def suppressed_invoke_async[T](
    factory: Callable[..., Awaitable[T]],
    *args: Any,
    history: ErrorHistory | None = None,
    **kwargs: Any,
) -> OperationResult[T]:
    """Async counterpart of ``suppressed_invoke`` for coroutine functions.

    The display setting is scoped to the running task. The history is not:
    when concurrent calls share one history, a failure in one of them also
    shows up as a new record to the others. Give each concurrent caller its
    own *history* to keep their results apart.
    """
    hist = resolve_history(history)
    before = capture_last_error(hist)
    value: Any = None
    with suppressed_errors():
        try:
            value = await factory(*args, **kwargs)
        except Exception as exc:
            write_error(exc, target=_describe(factory), history=hist)
    after = capture_last_error(hist)
    if after is not None and did_error_occur(before, after):
        return Failure(after)
    return Success(value)


def _describe(operation: Callable[..., Any]) -> str:
    inner = operation.func if isinstance(operation, functools.partial) else operation
    return getattr(inner, "__qualname__", None) or repr(operation)
