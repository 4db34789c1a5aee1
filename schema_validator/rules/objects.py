"""
Object keywords.

``properties``, ``patternProperties`` and ``additionalProperties`` recurse into
property values through the frame's engine. ``additionalProperties`` reads the
declared names and patterns of its own node from the frame, so it does not
depend on the order in which sibling keywords run.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Sequence, Union

from schema_validator.errors import KeywordViolation
from schema_validator.rules.frame import EvaluationFrame, join_path, violation
from schema_validator.rules.utils import is_object, to_int
from schema_validator.schema.compiled import CompiledSchema
from schema_validator.schema.models import ValidationError


def _collect(frame: EvaluationFrame, batches: Iterable[List[ValidationError]]) -> None:
    errors: List[ValidationError] = []
    for found in batches:
        if not found:
            continue
        if frame.stop_on_first_error:
            raise KeywordViolation(found[:1])
        errors.extend(found)
    if errors:
        raise KeywordViolation(errors)


def validate_properties(
    frame: EvaluationFrame, value: Any, param: Mapping[str, CompiledSchema], path: str
) -> bool:
    if not is_object(value):
        return True
    _collect(
        frame,
        (
            frame.validate(schema, value[name], join_path(path, name))
            for name, schema in param.items()
            if name in value
        ),
    )
    return True


def validate_pattern_properties(
    frame: EvaluationFrame, value: Any, param: Mapping[str, CompiledSchema], path: str
) -> bool:
    if not is_object(value):
        return True
    compiled = []
    for pattern, schema in param.items():
        try:
            compiled.append((re.compile(pattern), schema))
        except re.error as exc:
            raise violation(
                path, f"invalid pattern in patternProperties: {pattern}", "patternProperties", param=pattern
            ) from exc

    def batches():
        for name, item in value.items():
            for regex, schema in compiled:
                if regex.search(name):
                    yield frame.validate(schema, item, join_path(path, name))

    _collect(frame, batches())
    return True


def additional_property_names(frame: EvaluationFrame, value: Mapping[str, Any]) -> List[str]:
    return [
        name
        for name in value
        if name not in frame.declared_properties
        and not any(regex.search(name) for regex in frame.property_patterns)
    ]


def validate_additional_properties(
    frame: EvaluationFrame, value: Any, param: Union[bool, CompiledSchema], path: str
) -> bool:
    if not is_object(value) or param is True:
        return True
    if param is False and frame.allow_unknown_fields:
        return True
    extras = additional_property_names(frame, value)
    errors: List[ValidationError] = []
    for name in extras:
        if param is False:
            errors.append(
                ValidationError(
                    path=join_path(path, name),
                    message=f"unknown field '{name}': additional properties are not allowed",
                    tag="additionalProperties",
                    value=value[name],
                    param=name,
                )
            )
        else:
            inner = frame.first_violation(param, value[name], join_path(path, name))
            if inner is None:
                continue
            errors.append(
                ValidationError(
                    path=join_path(path, name),
                    message=f"additional property '{name}' failed validation for keyword '{inner.tag}': {inner.message}",
                    tag="additionalProperties",
                    value=value[name],
                    param=inner.tag,
                )
            )
        if frame.stop_on_first_error:
            break
    if errors:
        raise KeywordViolation(errors)
    return True


def validate_dependencies(
    frame: EvaluationFrame,
    value: Any,
    param: Mapping[str, Union[Sequence[str], CompiledSchema]],
    path: str,
) -> bool:
    """
    A list dependency names properties that must accompany the declared one;
    a schema dependency is checked against the declared property's own value.
    """
    if not is_object(value):
        return True
    errors: List[ValidationError] = []
    for name, dependency in param.items():
        if name not in value:
            continue
        if isinstance(dependency, CompiledSchema):
            inner = frame.first_violation(dependency, value[name], join_path(path, name))
            if inner is not None:
                errors.append(
                    ValidationError(
                        path=join_path(path, name),
                        message=(
                            f"dependency validation failed for property '{name}' "
                            f"with keyword '{inner.tag}': {inner.message}"
                        ),
                        tag="dependencies",
                        value=value[name],
                        param=inner.tag,
                    )
                )
        elif isinstance(dependency, (list, tuple)):
            for required in dependency:
                if required not in value:
                    errors.append(
                        ValidationError(
                            path=path,
                            message=f"property '{name}' depends on '{required}', but it is missing",
                            tag="dependencies",
                            param=required,
                        )
                    )
        else:
            raise violation(
                path, f"dependency for property '{name}' must be an array or an object", "dependencies"
            )
        if errors and frame.stop_on_first_error:
            break
    if errors:
        raise KeywordViolation(errors)
    return True


def validate_required(frame: EvaluationFrame, value: Any, param: Sequence[str], path: str) -> bool:
    if not is_object(value):
        raise violation(path, "value must be an object for required validation", "required", value=value)
    errors = [
        ValidationError(
            path=join_path(path, name),
            message=f"required property '{name}' is missing",
            tag="required",
            param=name,
        )
        for name in param
        if name not in value
    ]
    if errors:
        raise KeywordViolation(errors)
    return True


def _property_limit(keyword: str, value: Any, param: Any, path: str) -> int:
    if not is_object(value):
        raise violation(path, f"{keyword} can only be applied to objects", keyword, value=value)
    limit = to_int(param)
    if limit is None or limit < 0:
        raise violation(path, f"{keyword} must be a non-negative integer", keyword, value=value)
    return limit


def validate_min_properties(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _property_limit("minProperties", value, param, path)
    if len(value) < limit:
        raise violation(
            path,
            f"object has {len(value)} properties, which is less than minProperties {limit}",
            "minProperties",
            value=value,
            param=limit,
        )
    return True


def validate_max_properties(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    limit = _property_limit("maxProperties", value, param, path)
    if len(value) > limit:
        raise violation(
            path,
            f"object has {len(value)} properties, which is more than maxProperties {limit}",
            "maxProperties",
            value=value,
            param=limit,
        )
    return True
