"""
The ``enum`` keyword.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.rules.utils import deep_equal, format_number, is_number, thaw


def _display(item: Any) -> str:
    if isinstance(item, str):
        return item
    if is_number(item):
        return format_number(item)
    return json.dumps(thaw(item), default=str)


def validate_enum(frame: EvaluationFrame, value: Any, param: Sequence[Any], path: str) -> bool:
    if any(deep_equal(value, allowed) for allowed in param):
        return True
    allowed = ", ".join(_display(item) for item in param)
    raise violation(path, f"value must be one of: {allowed}", "enum", value=value, param=allowed)
