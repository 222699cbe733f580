"""File create/delete with retries.

Both helpers return an integer status instead of raising:
``0`` done, ``1`` nothing to do, ``-1`` failed after every attempt.
"""

from __future__ import annotations

import logging
from pathlib import Path
import time
from typing import TYPE_CHECKING, Any

from quietretry.retry import STATUS_FAILURE, STATUS_SUCCESS, invoke_with_retry

if TYPE_CHECKING:
    from collections.abc import Callable
    import os

    from quietretry.history import ErrorHistory
    from quietretry.retry import RetryPolicy

log = logging.getLogger(__name__)

STATUS_NOTHING_TO_DO = 1


def _create_empty(path: Path) -> None:
    with path.open("x"):
        pass


def _unlink(path: Path) -> bool:
    """Delete *path*; False when it vanished before we got to it."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def new_file(
    path: str | os.PathLike[str],
    *,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Any] = time.sleep,
    history: ErrorHistory | None = None,
) -> int:
    """Create an empty file at *path*.

    Returns 0 when created, 1 when the path already exists, -1 on failure.
    """
    p = Path(path)
    if p.exists():
        log.debug("Not creating %s: path already exists", p)
        return STATUS_NOTHING_TO_DO

    outcome = invoke_with_retry(
        _create_empty, p, policy=policy, sleep=sleep, history=history
    )
    if not outcome:
        return STATUS_FAILURE
    log.debug("Created %s after %d attempt(s)", p, outcome.attempts)
    return STATUS_SUCCESS


def remove_file(
    path: str | os.PathLike[str],
    *,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Any] = time.sleep,
    history: ErrorHistory | None = None,
) -> int:
    """Delete the file at *path*.

    Returns 0 when removed, 1 when the path is already absent, -1 on failure.
    """
    p = Path(path)
    if not p.exists() and not p.is_symlink():
        log.debug("Not removing %s: path does not exist", p)
        return STATUS_NOTHING_TO_DO

    outcome = invoke_with_retry(_unlink, p, policy=policy, sleep=sleep, history=history)
    if not outcome:
        return STATUS_FAILURE
    if not outcome.value:
        log.debug("Not removing %s: deleted by someone else", p)
        return STATUS_NOTHING_TO_DO
    log.debug("Removed %s after %d attempt(s)", p, outcome.attempts)
    return STATUS_SUCCESS
