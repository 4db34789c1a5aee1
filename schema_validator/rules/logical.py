"""
Logical combinators: ``allOf``, ``anyOf``, ``oneOf`` and ``not``.

Sub-schemas are evaluated against the same value; each evaluation stops at its
first failing keyword.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from schema_validator.errors import KeywordViolation, SchemaValidatorError
from schema_validator.logger import get_logger
from schema_validator.rules.frame import EvaluationFrame, join_path, violation
from schema_validator.schema.compiled import CompiledSchema
from schema_validator.schema.models import ValidationError

logger = get_logger(__name__)


def validate_all_of(frame: EvaluationFrame, value: Any, param: Sequence[CompiledSchema], path: str) -> bool:
    if not param:
        raise violation(path, "allOf cannot be empty", "allOf")
    errors: List[ValidationError] = []
    for index, schema in enumerate(param):
        inner = frame.first_violation(schema, value, join_path(path, f"allOf[{index}]"))
        if inner is None:
            continue
        errors.append(
            ValidationError(
                path=inner.path,
                message=(
                    f"failed to validate against schema at allOf[{index}] "
                    f"for keyword '{inner.tag}': {inner.message}"
                ),
                tag=inner.tag,
                value=inner.value,
                param=inner.param,
            )
        )
        if frame.stop_on_first_error:
            break
    if errors:
        raise KeywordViolation(errors)
    return True


def validate_any_of(frame: EvaluationFrame, value: Any, param: Sequence[CompiledSchema], path: str) -> bool:
    if not param:
        raise violation(path, "anyOf cannot be empty", "anyOf")
    for schema in param:
        if frame.passes(schema, value, path):
            return True
    raise violation(path, "value does not match any schema in anyOf", "anyOf", value=value)


def validate_one_of(frame: EvaluationFrame, value: Any, param: Sequence[CompiledSchema], path: str) -> bool:
    if not param:
        raise violation(path, "oneOf cannot be empty", "oneOf")
    matches = sum(1 for schema in param if frame.passes(schema, value, path))
    if matches == 1:
        return True
    if matches == 0:
        raise violation(path, "value does not match any schema in oneOf", "oneOf", value=value)
    raise violation(path, "value matches more than one schema in oneOf", "oneOf", value=value, param=matches)


def validate_not(frame: EvaluationFrame, value: Any, param: CompiledSchema, path: str) -> bool:
    if not isinstance(param, CompiledSchema) or not param.has_validation_keywords:
        raise violation(path, "not schema must contain validation keywords", "not")
    try:
        matched = frame.passes(param, value, path)
    except SchemaValidatorError as exc:
        logger.debug("Sub-schema of 'not' raised at %s, counting it as a failure: %s", path, exc)
        matched = False
    if matched:
        raise violation(path, "value must not validate against the schema in not", "not", value=value)
    return True
