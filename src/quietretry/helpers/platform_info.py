"""Processor architecture lookup."""

from __future__ import annotations

import os
import platform
from typing import TYPE_CHECKING

from quietretry.invoke import suppressed_invoke
from quietretry.result import Success

if TYPE_CHECKING:
    from quietretry.history import ErrorHistory

# platform.machine() spellings mapped onto the Windows PROCESSOR_ARCHITECTURE names.
_ALIASES = {
    "X86_64": "AMD64",
    "AARCH64": "ARM64",
    "ARMV8L": "ARM64",
    "I386": "X86",
    "I686": "X86",
}


def _normalize(name: str | None) -> str | None:
    if not name or not name.strip():
        return None
    upper = name.strip().upper()
    return _ALIASES.get(upper, upper)


def get_processor_architecture(history: ErrorHistory | None = None) -> str | None:
    """Return the processor architecture (``AMD64``, ``ARM64``, ``X86``, ...).

    ``PROCESSOR_ARCHITECTURE`` wins when set; otherwise ``platform.machine()``
    is consulted. None when neither yields a value or the lookup fails.
    """
    arch = _normalize(os.environ.get("PROCESSOR_ARCHITECTURE"))
    if arch is not None:
        return arch

    result = suppressed_invoke(platform.machine, history=history)
    if isinstance(result, Success):
        return _normalize(result.value)
    return None
