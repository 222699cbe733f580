"""Enumerate qualified names of classes defined in loaded modules."""

from __future__ import annotations

import sys
from types import ModuleType
from typing import TYPE_CHECKING

from quietretry.invoke import suppressed_invoke
from quietretry.result import Success

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quietretry.history import ErrorHistory


def _defined_type_names(module: ModuleType) -> list[str]:
    name = module.__name__
    return [
        f"{name}.{obj.__qualname__}"
        for obj in vars(module).values()
        if isinstance(obj, type) and getattr(obj, "__module__", None) == name
    ]


def get_type_names(
    modules: Iterable[ModuleType] | None = None,
    *,
    history: ErrorHistory | None = None,
) -> list[str]:
    """Return sorted ``module.QualName`` strings for classes in *modules*.

    Defaults to every module currently in ``sys.modules``. Re-exported
    classes are listed only under their defining module. A module that
    cannot be inspected is skipped; the failure is recorded in the error
    history without being displayed.
    """
    if modules is None:
        modules = [m for m in list(sys.modules.values()) if isinstance(m, ModuleType)]

    names: set[str] = set()
    for module in modules:
        result = suppressed_invoke(_defined_type_names, module, history=history)
        if isinstance(result, Success):
            names.update(result.value)
    return sorted(names)
