"""Leaf helpers built on suppressed invocation and retry.

Each helper wraps a single OS or interpreter call and reports through its
return value.
"""

from __future__ import annotations

from .files import new_file, remove_file
from .paths import wait_for_path
from .platform_info import get_processor_architecture
from .strings import split_literal
from .type_names import get_type_names

__all__ = [
    "get_processor_architecture",
    "get_type_names",
    "new_file",
    "remove_file",
    "split_literal",
    "wait_for_path",
]
