"""Error display configuration and the non-terminating error writer.

The current ``ErrorAction`` lives in a ``ContextVar``. Synchronous callers
on one thread share a single setting; each asyncio task works on its own
copy, so concurrent ``suppressed_errors()`` scopes cannot leak into one
another. ``suppressed_errors()`` restores the previous action on every exit
path.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any

from quietretry.history import resolve_history

if TYPE_CHECKING:
    from collections.abc import Iterator

    from quietretry.history import ErrorHistory, ErrorRecord

log = logging.getLogger(__name__)


class ErrorAction(str, Enum):
    """What happens when an error is written."""

    CONTINUE = "continue"  # record and display
    SILENTLY_CONTINUE = "silently_continue"  # record only


_error_action_var: ContextVar[ErrorAction] = ContextVar(
    "error_action", default=ErrorAction.CONTINUE
)


def get_error_action() -> ErrorAction:
    return _error_action_var.get()


def set_error_action(action: ErrorAction) -> ErrorAction:
    """Set the current error action and return the previous one."""
    previous = _error_action_var.get()
    _error_action_var.set(ErrorAction(action))
    return previous


@contextmanager
def suppressed_errors() -> Iterator[None]:
    """Silence error display for the duration of the block."""
    token = _error_action_var.set(ErrorAction.SILENTLY_CONTINUE)
    try:
        yield
    finally:
        _error_action_var.reset(token)


def write_error(
    error: str | BaseException,
    *,
    target: Any = None,
    history: ErrorHistory | None = None,
) -> ErrorRecord:
    """Record a non-terminating error, displaying it unless suppressed.

    The record is always appended to the history; the current action only
    decides whether it is also logged. *history* defaults to the process-wide
    history, even when called from an operation that ``suppressed_invoke``
    is watching through another history.
    """
    record = resolve_history(history).record(error, target=target)
    if _error_action_var.get() is ErrorAction.CONTINUE:
        if target is None:
            log.error("%s", record.message)
        else:
            log.error("%s (target: %r)", record.message, target)
    return record
