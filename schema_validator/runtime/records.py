"""
Validation of host records (dataclass instances and pydantic models) through
tag directives attached to their fields.

Dataclass fields carry the tag in ``field(metadata={"validate": "..."})``;
pydantic fields carry it in ``Field(json_schema_extra={"validate": "..."})``.
The metadata key is the validator's ``tag_name``.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from schema_validator.errors import InvalidInputError, RuleExecutionError, ValidationErrors
from schema_validator.rules.frame import join_path
from schema_validator.runtime.tags import parse_tag, tag_to_schema
from schema_validator.schema.models import ValidationError

if TYPE_CHECKING:
    from schema_validator.runtime.validator import Validator


def is_record(value: Any) -> bool:
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or isinstance(value, BaseModel)


def is_zero(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _field_tag(field: Any, tag_name: str) -> Optional[str]:
    if isinstance(field, dataclasses.Field):
        return field.metadata.get(tag_name)
    extra = getattr(field, "json_schema_extra", None)
    if isinstance(extra, Mapping):
        return extra.get(tag_name)
    return None


def iter_record_fields(record: Any) -> Iterator[Tuple[str, Any, Any]]:
    """Yield ``(name, value, field)`` for each declared field, in declaration order."""
    if isinstance(record, BaseModel):
        for name, info in type(record).model_fields.items():
            yield name, getattr(record, name), info
        return
    for field in dataclasses.fields(record):
        yield field.name, getattr(record, field.name), field


def validate_record(validator: "Validator", record: Any) -> None:
    """
    Raise ``ValidationErrors`` listing every failed field directive of
    ``record``; return ``None`` when all pass.
    """

    if not is_record(record):
        raise InvalidInputError(
            f"input must be a record (dataclass instance or pydantic model), got {type(record).__name__}"
        )

    options = validator.options
    stop = options.stop_on_first_error
    errors: List[ValidationError] = []

    def finish() -> None:
        if errors:
            raise ValidationErrors(errors)

    for name, value, field in iter_record_fields(record):
        if validator.tag_name_func is not None:
            tag = validator.tag_name_func(field)
        else:
            tag = _field_tag(field, options.tag_name)
        if not tag:
            continue
        directives = parse_tag(tag)
        if not directives:
            continue

        path = name
        if validator.custom_type_func is not None:
            value = validator.custom_type_func(value)

        if validator.custom_validate_func is not None:
            try:
                accepted = validator.custom_validate_func(value, path)
            except Exception as exc:
                raise RuleExecutionError(f"custom validation failed for {path}: {exc}") from exc
            if not accepted:
                errors.append(
                    ValidationError(path=path, message="custom validation failed", tag="custom", value=value)
                )
                if stop:
                    finish()
                continue

        if directives.pop("required", False):
            if is_zero(value):
                errors.append(ValidationError(path=path, message="field is required", tag="required"))
                if stop:
                    finish()
                continue
        elif value is None:
            continue

        if options.recursive_validation and is_record(value):
            try:
                validate_record(validator, value)
            except ValidationErrors as nested:
                errors.extend(
                    error.model_copy(update={"path": join_path(path, error.path)}) for error in nested.errors
                )
                if stop:
                    finish()
            continue

        if not directives:
            continue
        result = validator.validate_with_schema(value, tag_to_schema(directives, value), path)
        if not result.valid:
            errors.extend(result.errors)
            if stop:
                finish()

    finish()


def validate_var(validator: "Validator", value: Any, tag: str) -> None:
    directives = parse_tag(tag)
    if not directives:
        return
    errors: List[ValidationError] = []
    if directives.pop("required", False) and is_zero(value):
        errors.append(ValidationError(path="var", message="field is required", tag="required"))
    elif directives:
        errors.extend(validator.validate_with_schema(value, tag_to_schema(directives, value), "var").errors)
    if errors:
        raise ValidationErrors(errors)
