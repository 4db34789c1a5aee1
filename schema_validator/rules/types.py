"""
The ``type`` keyword.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Sequence, Tuple, Union

from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.rules.utils import is_array, is_integer, is_number, is_object, json_type_name

TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": is_number,
    "integer": is_integer,
    "boolean": lambda value: isinstance(value, bool),
    "object": is_object,
    "array": is_array,
    "null": lambda value: value is None,
}

JSON_TYPES = frozenset(TYPE_CHECKS)


def matches_type(expected: str, value: Any) -> bool:
    check = TYPE_CHECKS.get(expected)
    return bool(check and check(value))


def validate_type(frame: EvaluationFrame, value: Any, param: Union[str, Sequence[str]], path: str) -> bool:
    expected: Tuple[str, ...] = (param,) if isinstance(param, str) else tuple(param)
    if any(matches_type(name, value) for name in expected):
        return True
    if len(expected) == 1:
        message = f"value is of type {json_type_name(value)}, expected {expected[0]}"
    else:
        message = f"value type does not match any of the expected types: {', '.join(expected)}"
    raise violation(path, message, "type", value=value, param=", ".join(expected))
