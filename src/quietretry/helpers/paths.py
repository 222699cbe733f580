"""Wait for a filesystem path to become available."""

from __future__ import annotations

import logging
from pathlib import Path
import time
from typing import TYPE_CHECKING, Any

from quietretry.invoke import suppressed_invoke
from quietretry.result import Success

if TYPE_CHECKING:
    from collections.abc import Callable
    import os

    from quietretry.history import ErrorHistory

log = logging.getLogger(__name__)


def wait_for_path(
    path: str | os.PathLike[str],
    *,
    timeout_s: float = 10.0,
    poll_interval_s: float = 0.5,
    sleep: Callable[[float], Any] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    history: ErrorHistory | None = None,
) -> bool:
    """Poll until *path* exists or *timeout_s* elapses.

    The path is checked at least once. A check that errors (e.g. a permission
    problem on a parent directory) counts as "not ready yet".
    """
    if timeout_s < 0:
        raise ValueError("timeout_s must be >= 0")
    if poll_interval_s <= 0:
        raise ValueError("poll_interval_s must be > 0")

    p = Path(path)
    deadline = clock() + timeout_s
    while True:
        check = suppressed_invoke(p.exists, history=history)
        if isinstance(check, Success) and check.value:
            return True
        remaining = deadline - clock()
        if remaining <= 0:
            log.debug("Timed out after %.3gs waiting for %s", timeout_s, p)
            return False
        sleep(min(poll_interval_s, remaining))
