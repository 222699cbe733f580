"""quietretry: exception-free failure detection with bounded retries.

Public API:
    - capture_last_error() / did_error_occur(): error-history snapshots
    - suppressed_invoke(): run one operation with error display silenced
    - invoke_with_retry(): retry with exponential backoff
    - RetryPolicy / Config: retry bounds, optionally from the environment
"""

from __future__ import annotations

import logging

from quietretry.config import Config
from quietretry.display import (
    ErrorAction,
    get_error_action,
    set_error_action,
    suppressed_errors,
    write_error,
)
from quietretry.errors import (
    ConfigurationError,
    OperationFailedError,
    QuietRetryError,
    RetriesExhaustedError,
)
from quietretry.history import (
    ErrorHistory,
    ErrorRecord,
    get_error_history,
    reset_error_history,
)
from quietretry.invoke import suppressed_invoke, suppressed_invoke_async
from quietretry.result import Failure, OperationResult, Success
from quietretry.retry import (
    RetryOutcome,
    RetryPolicy,
    compute_backoff_delay,
    invoke_with_retry,
    invoke_with_retry_async,
    retrying,
)
from quietretry.snapshot import capture_last_error, did_error_occur

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("quietretry")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("quietretry").addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "ConfigurationError",
    "ErrorAction",
    "ErrorHistory",
    "ErrorRecord",
    "Failure",
    "OperationFailedError",
    "OperationResult",
    "QuietRetryError",
    "RetriesExhaustedError",
    "RetryOutcome",
    "RetryPolicy",
    "Success",
    "capture_last_error",
    "compute_backoff_delay",
    "did_error_occur",
    "get_error_action",
    "get_error_history",
    "invoke_with_retry",
    "invoke_with_retry_async",
    "reset_error_history",
    "retrying",
    "set_error_action",
    "suppressed_errors",
    "suppressed_invoke",
    "suppressed_invoke_async",
    "write_error",
]
