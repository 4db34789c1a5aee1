"""
Numeric range and divisibility keywords.
"""

from __future__ import annotations

import math
import operator
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable

from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.rules.utils import format_number, to_number

MULTIPLE_OF_TOLERANCE = 1e-10


def _bound_rule(keyword: str, fails: Callable[[Any, Any], bool], message: str):
    def rule(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
        number = to_number(value)
        if number is None:
            raise violation(path, "must be a number", keyword, value=value)
        bound = to_number(param)
        if bound is None:
            raise violation(path, f"{keyword} must be a number", keyword, value=value)
        if fails(number, bound):
            shown = format_number(bound)
            raise violation(path, f"{message} {shown}", keyword, value=value, param=shown)
        return True

    rule.__name__ = f"validate_{keyword}"
    return rule


validate_minimum = _bound_rule("minimum", operator.lt, "less than minimum")
validate_maximum = _bound_rule("maximum", operator.gt, "greater than maximum")
validate_exclusive_minimum = _bound_rule(
    "exclusiveMinimum", operator.le, "less than or equal to exclusive minimum"
)
validate_exclusive_maximum = _bound_rule(
    "exclusiveMaximum", operator.ge, "greater than or equal to exclusive maximum"
)


def _is_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return True


def is_multiple_of(number: Any, divisor: Any) -> bool:
    """
    Exact for int, Decimal and Fraction operands. With a float operand the
    quotient must be within ``MULTIPLE_OF_TOLERANCE`` of an integer.
    """
    if not (_is_finite(number) and _is_finite(divisor)):
        return False
    if not isinstance(number, float) and not isinstance(divisor, float):
        return Fraction(number) % Fraction(divisor) == 0
    quotient = Fraction(number) / Fraction(divisor)
    return abs(quotient - round(quotient)) <= MULTIPLE_OF_TOLERANCE


def validate_multiple_of(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    divisor = to_number(param)
    if divisor is None or divisor <= 0:
        raise violation(path, "multipleOf must be a positive number", "multipleOf", value=value)
    number = to_number(value)
    if number is None:
        raise violation(path, "multipleOf can only be applied to numbers", "multipleOf", value=value)
    if not is_multiple_of(number, divisor):
        raise violation(
            path,
            f"value {format_number(number)} is not a multiple of {format_number(divisor)}",
            "multipleOf",
            value=value,
            param=format_number(divisor),
        )
    return True
