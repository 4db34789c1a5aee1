"""
Process-wide default ``Validator`` and the package-level helpers built on it.

Unlike ``Validator.register_validator``, the helpers here refuse to replace a
name that is already registered on the shared instance.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Optional, Union

from schema_validator.registry.comparator_registry import CompareFunction
from schema_validator.runtime.validator import SchemaSource, Validator
from schema_validator.schema.compiled import CompiledSchema, RuleFunction
from schema_validator.schema.models import ValidationResult

__all__ = [
    "DefaultValidator",
    "compile",
    "register_comparator",
    "register_validator",
    "validate_json",
    "validate_record",
    "validate_var",
]


class DefaultValidator:
    """
    Lazily created singleton wrapping a ``Validator`` built from settings.
    """

    _instance: Optional[Validator] = None
    _instance_lock = Lock()

    @classmethod
    def instance(cls) -> Validator:
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = Validator()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._instance_lock:
            cls._instance = None


def register_validator(name: str, fn: Optional[RuleFunction]) -> None:
    DefaultValidator.instance().register_validator(name, fn, replace=False)


def register_comparator(name: str, fn: Optional[CompareFunction]) -> None:
    DefaultValidator.instance().register_comparator(name, fn, replace=False)


def compile(schema: SchemaSource) -> CompiledSchema:
    return DefaultValidator.instance().compile(schema)


def validate_json(data: Union[str, bytes], schema: SchemaSource) -> ValidationResult:
    return DefaultValidator.instance().validate_json(data, schema)


def validate_record(record: Any) -> None:
    DefaultValidator.instance().validate_record(record)


def validate_var(value: Any, tag: str) -> None:
    DefaultValidator.instance().validate_var(value, tag)
