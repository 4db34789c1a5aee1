"""
Array keywords: ``items``, ``minItems``, ``maxItems`` and ``uniqueItems``.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Union

from schema_validator.errors import KeywordViolation
from schema_validator.rules.frame import EvaluationFrame, index_path, violation
from schema_validator.rules.utils import deep_equal, is_array, to_int
from schema_validator.schema.compiled import CompiledSchema
from schema_validator.schema.models import ValidationError


def validate_items(
    frame: EvaluationFrame,
    value: Any,
    param: Union[CompiledSchema, Sequence[CompiledSchema]],
    path: str,
) -> bool:
    """
    A single schema applies to every element; a sequence of schemas applies
    positionally and leaves elements past its end unchecked.
    """
    if not is_array(value):
        return True
    if isinstance(param, CompiledSchema):
        pairs = [(index, param, item) for index, item in enumerate(value)]
    else:
        pairs = [(index, schema, item) for index, (schema, item) in enumerate(zip(param, value))]

    errors: List[ValidationError] = []
    for index, schema, item in pairs:
        found = frame.validate(schema, item, index_path(path, index))
        if found and frame.stop_on_first_error:
            raise KeywordViolation(found[:1])
        errors.extend(found)
    if errors:
        raise KeywordViolation(errors)
    return True


def _item_limit(keyword: str, value: Any, param: Any, path: str) -> int:
    if not is_array(value):
        raise violation(path, "must be an array", keyword, value=value)
    limit = to_int(param)
    if limit is None or limit < 0:
        raise violation(path, f"{keyword} must be a non-negative integer", keyword, value=value)
    return limit


def validate_min_items(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _item_limit("minItems", value, param, path)
    if len(value) < limit:
        raise violation(path, f"fewer items than minimum {limit}", "minItems", value=value, param=limit)
    return True


def validate_max_items(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _item_limit("maxItems", value, param, path)
    if len(value) > limit:
        raise violation(path, f"more items than maximum {limit}", "maxItems", value=value, param=limit)
    return True


def validate_unique_items(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    if not isinstance(param, bool):
        raise violation(path, "uniqueItems must be a boolean", "uniqueItems", value=value)
    if not param:
        return True
    if not is_array(value):
        raise violation(path, "must be an array", "uniqueItems", value=value)
    seen: List[Any] = []
    for item in value:
        if any(deep_equal(item, other) for other in seen):
            raise violation(path, "contains duplicate items", "uniqueItems", value=value)
        seen.append(item)
    return True
