"""Test helpers (small, reusable doubles).

Keep this file tiny: scripted operations replace one-off closures in the
retry and invoke suites.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from quietretry.display import write_error


@dataclass
class ScriptedOperation:
    """Callable that plays back a script of values and exceptions.

    An exception instance is raised; a ``WriteError`` writes a
    non-terminating error and returns its ``value``; anything else is
    returned. The last item repeats once the script runs out.
    """

    script: list[Any] = field(default_factory=list)
    calls: int = 0

    def _next(self) -> Any:
        self.calls += 1
        if len(self.script) > 1:
            return self.script.pop(0)
        return self.script[0] if self.script else None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        del args, kwargs
        item = self._next()
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, WriteError):
            write_error(item.message)
            return item.value
        return item


@dataclass
class AsyncScriptedOperation(ScriptedOperation):
    """Coroutine-function flavour of ``ScriptedOperation``."""

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        return ScriptedOperation.__call__(self, *args, **kwargs)


@dataclass(frozen=True)
class WriteError:
    """Script item: write a non-terminating error, then return *value*."""

    message: str
    value: Any = None
