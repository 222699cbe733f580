"""Result type for one invocation of a fallible operation.

Failure is part of the data flow rather than an exception: a ``Failure``
carries the error record that signalled it.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quietretry.history import ErrorRecord


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """The operation completed without adding to the error history."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure:
    """A new error appeared in the history while the operation ran."""

    error: ErrorRecord


type OperationResult[T] = Success[T] | Failure
