"""Bounded retry with exponential backoff over ``suppressed_invoke``.

Design goals:
- Failures are values: the wrapper returns a ``RetryOutcome`` and never
  raises because the operation failed
- Explicit state (policy + attempt counter), no cancellation
- Deterministic backoff: ``delay_unit_s * backoff_base ** attempt``
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import functools
import logging
import time
from typing import TYPE_CHECKING, Any

from quietretry.errors import ConfigurationError, RetriesExhaustedError
from quietretry.invoke import suppressed_invoke, suppressed_invoke_async
from quietretry.result import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from quietretry.history import ErrorHistory, ErrorRecord
    from quietretry.result import OperationResult

log = logging.getLogger(__name__)

STATUS_SUCCESS = 0
STATUS_FAILURE = -1


@dataclass(frozen=True)
class RetryPolicy:
    """Retry bounds and backoff shape.

    With the defaults, the sleeps before attempts 2 and 3 are 2s and 4s.
    """

    max_attempts: int = 3
    backoff_base: float = 2.0
    delay_unit_s: float = 1.0
    #: Level for per-attempt failure messages; None keeps them out of the log.
    log_level: int | None = logging.DEBUG

    def __post_init__(self) -> None:
        """Validate invariants to keep retry behavior predictable."""
        if self.max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be >= 1, got {self.max_attempts}",
                hint="Use max_attempts=1 to run the operation once without retries.",
            )
        if self.backoff_base <= 0:
            raise ConfigurationError(
                f"backoff_base must be > 0, got {self.backoff_base}"
            )
        if self.delay_unit_s < 0:
            raise ConfigurationError(
                f"delay_unit_s must be >= 0, got {self.delay_unit_s}",
                hint="Use delay_unit_s=0 to retry without sleeping.",
            )


def compute_backoff_delay(policy: RetryPolicy, *, attempt: int) -> float:
    """Return the sleep after failed *attempt* (1-based), before the next one."""
    return policy.delay_unit_s * (policy.backoff_base**attempt)


@dataclass(frozen=True)
class RetryOutcome[T]:
    """Final result of a retried operation."""

    result: OperationResult[T]
    attempts: int
    delays: tuple[float, ...] = ()

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, Success)

    @property
    def value(self) -> T | None:
        """The operation's return value, or None after a failure."""
        if isinstance(self.result, Success):
            return self.result.value
        return None

    @property
    def error(self) -> ErrorRecord | None:
        if isinstance(self.result, Failure):
            return self.result.error
        return None

    @property
    def status(self) -> int:
        """Integer status: 0 on success, negative on failure."""
        return STATUS_SUCCESS if self.succeeded else STATUS_FAILURE

    def __bool__(self) -> bool:
        return self.succeeded

    def raise_for_failure(self) -> None:
        """Raise ``RetriesExhaustedError`` if the operation never succeeded."""
        if isinstance(self.result, Failure):
            raise RetriesExhaustedError(
                f"Operation failed after {self.attempts} attempt(s): "
                f"{self.result.error.message}",
                record=self.result.error,
                attempts=self.attempts,
            )


def _log_attempt_failure(
    policy: RetryPolicy, attempt: int, error: ErrorRecord, delay: float
) -> None:
    if policy.log_level is None:
        return
    log.log(
        policy.log_level,
        "Attempt %d/%d failed: %s; retrying in %.3gs",
        attempt,
        policy.max_attempts,
        error.message,
        delay,
    )


def _log_exhausted(attempts: int, error: ErrorRecord) -> None:
    log.warning("Operation failed after %d attempt(s): %s", attempts, error.message)


def invoke_with_retry[T](
    operation: Callable[..., T],
    *args: Any,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Any] = time.sleep,
    history: ErrorHistory | None = None,
    **kwargs: Any,
) -> RetryOutcome[T]:
    """Run *operation* until it succeeds or ``policy.max_attempts`` is reached.

    ``policy``, ``sleep`` and ``history`` are taken by the retry loop and never
    forwarded; bind an operation argument with one of those names via
    ``functools.partial`` (or use ``retrying``). Only *history* is watched for
    failures, so errors the operation writes elsewhere are not seen.
    """
    policy = policy or RetryPolicy()
    delays: list[float] = []

    for attempt in range(1, policy.max_attempts + 1):
        result = suppressed_invoke(operation, *args, history=history, **kwargs)
        if isinstance(result, Success):
            return RetryOutcome(result, attempts=attempt, delays=tuple(delays))
        if attempt >= policy.max_attempts:
            _log_exhausted(attempt, result.error)
            return RetryOutcome(result, attempts=attempt, delays=tuple(delays))

        delay = compute_backoff_delay(policy, attempt=attempt)
        _log_attempt_failure(policy, attempt, result.error, delay)
        delays.append(delay)
        sleep(delay)

    # max_attempts >= 1 guarantees the loop returns.
    raise AssertionError("unreachable")  # pragma: no cover


async def invoke_with_retry_async[T](
    factory: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    history: ErrorHistory | None = None,
    **kwargs: Any,
) -> RetryOutcome[T]:
    """Async counterpart of ``invoke_with_retry``; backoff awaits *sleep*.

    Concurrent calls sharing one *history* cannot tell their failures apart;
    see ``suppressed_invoke_async``.
    """
    policy = policy or RetryPolicy()
    delays: list[float] = []

    for attempt in range(1, policy.max_attempts + 1):
        result = await suppressed_invoke_async(
            factory, *args, history=history, **kwargs
        )
        if isinstance(result, Success):
            return RetryOutcome(result, attempts=attempt, delays=tuple(delays))
        if attempt >= policy.max_attempts:
            _log_exhausted(attempt, result.error)
            return RetryOutcome(result, attempts=attempt, delays=tuple(delays))

        delay = compute_backoff_delay(policy, attempt=attempt)
        _log_attempt_failure(policy, attempt, result.error, delay)
        delays.append(delay)
        await sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover


def retrying[T](
    policy: RetryPolicy | None = None,
    *,
    sleep: Callable[[float], Any] = time.sleep,
    history: ErrorHistory | None = None,
) -> Callable[[Callable[..., T]], Callable[..., RetryOutcome[T]]]:
    """Decorate a function so each call goes through ``invoke_with_retry``.

    *policy*, *sleep* and *history* are fixed here; every call argument,
    whatever its name, goes to the decorated function.

    Example:
        @retrying(RetryPolicy(max_attempts=5))
        def fetch() -> str: ...

        outcome = fetch()
        if outcome:
            print(outcome.value)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., RetryOutcome[T]]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> RetryOutcome[T]:
            operation = functools.partial(func, *args, **kwargs)
            return invoke_with_retry(
                operation, policy=policy, sleep=sleep, history=history
            )

        return wrapper

    return decorator
