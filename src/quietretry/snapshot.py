"""Point-in-time snapshots of the error history and their comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quietretry.history import resolve_history

if TYPE_CHECKING:
    from quietretry.history import ErrorHistory, ErrorRecord

__all__ = ["capture_last_error", "did_error_occur"]


def capture_last_error(history: ErrorHistory | None = None) -> ErrorRecord | None:
    """Return a handle to the newest error, or None when the history is empty."""
    return resolve_history(history).last()


def did_error_occur(before: ErrorRecord | None, after: ErrorRecord | None) -> bool:
    """Return True only when a new error appeared between two snapshots.

    Truth table:

    ========  ========  ======
    before    after     result
    ========  ========  ======
    None      None      False
    None      B         True
    A         A         False
    A         B         True
    A         None      False
    ========  ========  ======

    The last row covers a history cleared between the snapshots; it is
    treated as "no new error" even though a fault raised and then cleared in
    that window goes unnoticed.
    """
    if after is None:
        return False
    if before is None:
        return True
    return before is not after
