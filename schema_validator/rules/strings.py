"""
String length and pattern keywords.

Lengths are counted in code points.
"""

from __future__ import annotations

import re
from typing import Any

from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.rules.utils import to_int


def _limit(keyword: str, value: Any, param: Any, path: str) -> int:
    if not isinstance(value, str):
        raise violation(path, "must be a string", keyword, value=value)
    limit = to_int(param)
    if limit is None or limit < 0:
        raise violation(path, f"{keyword} must be a non-negative integer", keyword, value=value)
    return limit


def validate_min_length(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _limit("minLength", value, param, path)
    if len(value) < limit:
        raise violation(path, f"length less than minimum {limit}", "minLength", value=value, param=limit)
    return True


def validate_max_length(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _limit("maxLength", value, param, path)
    if len(value) > limit:
        raise violation(path, f"length greater than maximum {limit}", "maxLength", value=value, param=limit)
    return True


def validate_pattern(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    if not isinstance(value, str):
        raise violation(path, "must be a string", "pattern", value=value)
    if not isinstance(param, str):
        raise violation(path, "pattern must be a string", "pattern", value=value)
    try:
        compiled = re.compile(param)
    except re.error as exc:
        raise violation(path, f"invalid pattern: {exc}", "pattern", value=value, param=param) from exc
    if not compiled.search(value):
        raise violation(path, f"does not match pattern {param}", "pattern", value=value, param=param)
    return True
