"""
Named two-argument comparators (``eq``, ``gt``, ...) available to custom rules.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from schema_validator.errors import AlreadyRegisteredError, EmptyNameError, MissingFunctionError
from schema_validator.rules.utils import deep_equal, to_number

CompareFunction = Callable[[Any, Any], bool]


def _numeric(cmp: Callable[[Any, Any], bool]) -> CompareFunction:
    def compare(left: Any, right: Any) -> bool:
        a, b = to_number(left), to_number(right)
        if a is None or b is None:
            return False
        return cmp(a, b)

    return compare


BUILTIN_COMPARATORS: Dict[str, CompareFunction] = {
    "eq": deep_equal,
    "ne": lambda left, right: not deep_equal(left, right),
    "gt": _numeric(lambda a, b: a > b),
    "ge": _numeric(lambda a, b: a >= b),
    "lt": _numeric(lambda a, b: a < b),
    "le": _numeric(lambda a, b: a <= b),
}


class ComparatorRegistry:
    def __init__(self, *, include_builtins: bool = True) -> None:
        self._comparators: Dict[str, CompareFunction] = {}
        self._lock = Lock()
        if include_builtins:
            register_builtin_comparators(self)

    def register(self, name: str, fn: Optional[CompareFunction], *, replace: bool = False) -> None:
        if not name:
            raise EmptyNameError("comparator name cannot be empty")
        if fn is None or not callable(fn):
            raise MissingFunctionError("comparator function cannot be nil")
        with self._lock:
            if not replace and name in self._comparators:
                raise AlreadyRegisteredError(f"comparator {name} already registered")
            self._comparators[name] = fn

    def get(self, name: str) -> Optional[CompareFunction]:
        with self._lock:
            return self._comparators.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._comparators)


def register_builtin_comparators(registry: ComparatorRegistry) -> None:
    for name, fn in BUILTIN_COMPARATORS.items():
        try:
            registry.register(name, fn)
        except AlreadyRegisteredError as exc:
            raise AlreadyRegisteredError(f"failed to register comparator {name}: {exc}") from exc
