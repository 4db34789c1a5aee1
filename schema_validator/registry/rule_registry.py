"""
Thread-safe mapping from keyword name to rule function.

The compiler resolves every keyword against a registry once, so the engine
never performs name lookups while walking a value.
"""

from __future__ import annotations

from enum import Enum
from threading import Lock
from typing import Dict, List, Optional, Tuple

from schema_validator.errors import AlreadyRegisteredError, EmptyNameError, MissingFunctionError
from schema_validator.schema.compiled import RuleFunction


class RuleKind(str, Enum):
    PRIMITIVE = "primitive"
    STRUCTURAL = "structural"
    LOGICAL = "logical"
    CUSTOM = "custom"


class RuleRegistry:
    """
    Stores rule functions keyed by keyword.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, Tuple[RuleFunction, RuleKind]] = {}
        self._lock = Lock()

    def register(
        self,
        name: str,
        fn: Optional[RuleFunction],
        *,
        kind: RuleKind = RuleKind.CUSTOM,
        replace: bool = False,
    ) -> None:
        if not name:
            raise EmptyNameError("validator name cannot be empty")
        if fn is None or not callable(fn):
            raise MissingFunctionError("validator function cannot be nil")
        with self._lock:
            if not replace and name in self._rules:
                raise AlreadyRegisteredError(f"validator {name} already registered")
            self._rules[name] = (fn, kind)

    def get(self, name: str) -> Optional[RuleFunction]:
        with self._lock:
            entry = self._rules.get(name)
        return entry[0] if entry else None

    def get_entry(self, name: str) -> Optional[Tuple[RuleFunction, RuleKind]]:
        with self._lock:
            return self._rules.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._rules

    def names(self) -> List[str]:
        with self._lock:
            return list(self._rules)

    def count(self) -> int:
        with self._lock:
            return len(self._rules)

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()
