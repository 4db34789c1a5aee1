"""
Value helpers shared by the rules and the comparators.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, Mapping, Optional, Sequence, Union

Number = Union[int, float, Decimal, Fraction]

_NUMERIC_TYPES = (int, float, Decimal, Fraction)


def is_number(value: Any) -> bool:
    return isinstance(value, _NUMERIC_TYPES) and not isinstance(value, bool)


def to_number(value: Any) -> Optional[Number]:
    """Return ``value`` if it is numeric (booleans excluded), else ``None``."""
    if is_number(value):
        return value
    return None


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return value.denominator == 1


def to_int(value: Any) -> Optional[int]:
    """Return an exact non-bool integer for whole-number values, else ``None``."""
    if is_integer(value):
        return int(value)
    return None


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_integer(value) and isinstance(value, int):
        return "integer"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_object(value):
        return "object"
    if is_array(value):
        return "array"
    return type(value).__name__


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality over JSON-like values.

    Booleans never equal numbers; ``1`` and ``1.0`` are equal.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_object(left) and is_object(right):
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[key], right[key]) for key in left)
    if is_array(left) and is_array(right):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))
    if is_number(left) or is_number(right) or is_object(left) or is_object(right) or is_array(left) or is_array(right):
        return False
    return left == right


def format_number(value: Any) -> str:
    """Render a number the way it would appear in JSON (``3.0`` prints as ``3``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def thaw(value: Any) -> Any:
    """Turn frozen compiled values back into plain dicts and lists."""
    if is_object(value):
        return {key: thaw(item) for key, item in value.items()}
    if is_array(value):
        return [thaw(item) for item in value]
    return value
