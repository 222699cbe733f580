"""Process-wide error history.

The history is an append-only, bounded, newest-first list of recent faults.
Any caller may inspect or clear it. Failure detection compares the newest
record before and after an operation (see ``quietretry.snapshot``).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import time
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from collections.abc import Iterator

DEFAULT_CAPACITY = 256


@dataclass(frozen=True, slots=True, eq=False)
class ErrorRecord:
    """One fault in the history.

    Records compare by identity: two faults with the same text are still two
    distinct errors.
    """

    message: str
    exception: BaseException | None = None
    target: Any = None
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_error(
        cls, error: str | BaseException, *, target: Any = None
    ) -> ErrorRecord:
        """Build a record from a message or an exception instance."""
        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
            return cls(message=message, exception=error, target=target)
        return cls(message=str(error), target=target)


class ErrorHistory:
    """Bounded newest-first sequence of ``ErrorRecord`` objects."""

    __slots__ = ("_records",)

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("ErrorHistory capacity must be >= 1")
        self._records: deque[ErrorRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return cast("int", self._records.maxlen)

    def append(self, record: ErrorRecord) -> None:
        # Oldest record falls off the end once capacity is reached.
        self._records.appendleft(record)

    def record(self, error: str | BaseException, *, target: Any = None) -> ErrorRecord:
        """Append a new record for *error* and return it."""
        rec = ErrorRecord.from_error(error, target=target)
        self.append(rec)
        return rec

    def last(self) -> ErrorRecord | None:
        """Return the most recent record, or None when the history is empty."""
        return self._records[0] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> ErrorRecord:
        return self._records[index]

    def __repr__(self) -> str:
        return f"ErrorHistory(len={len(self)}, capacity={self.capacity})"


_HISTORY = ErrorHistory()


def get_error_history() -> ErrorHistory:
    """Return the process-wide error history."""
    return _HISTORY


def reset_error_history(capacity: int = DEFAULT_CAPACITY) -> ErrorHistory:
    """Replace the process-wide history with a fresh, empty one."""
    global _HISTORY
    _HISTORY = ErrorHistory(capacity)
    return _HISTORY


def resolve_history(history: ErrorHistory | None) -> ErrorHistory:
    """Return *history* or, when None, the current process-wide history."""
    return history if history is not None else _HISTORY
