"""Exception hierarchy for quietretry.

Operation failures are reported through return values. These exceptions are
raised for misconfiguration, and for operation failure only when a caller
explicitly opts in via ``RetryOutcome.raise_for_failure()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quietretry.history import ErrorRecord


class QuietRetryError(Exception):
    """Base exception for all quietretry errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(QuietRetryError):
    """A retry policy or settings value failed validation."""


class OperationFailedError(QuietRetryError):
    """A new error appeared in the history while an operation ran."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        record: ErrorRecord | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.record = record


class RetriesExhaustedError(OperationFailedError):
    """The operation kept failing through every allowed attempt."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        record: ErrorRecord | None = None,
        attempts: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint, record=record)
        self.attempts = attempts
