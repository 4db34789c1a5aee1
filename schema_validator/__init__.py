"""
Public entrypoint for compiling JSON-Schema-style documents and validating
values, JSON text and records against them.
"""

from __future__ import annotations

from schema_validator.compiler.compile import compile_schema
from schema_validator.compiler.parse import parse_schema
from schema_validator.errors import (
    AlreadyRegisteredError,
    EmptyNameError,
    InvalidInputError,
    KeywordViolation,
    MissingFunctionError,
    RegistryError,
    RuleExecutionError,
    SchemaCompileError,
    SchemaParseError,
    SchemaValidatorError,
    ValidationErrors,
)
from schema_validator.registry.format_registry import register_format
from schema_validator.registry.rule_registry import RuleKind, RuleRegistry
from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.runtime.default import (
    DefaultValidator,
    register_comparator,
    register_validator,
    validate_json,
    validate_record,
    validate_var,
)
from schema_validator.runtime.engine import ValidationEngine
from schema_validator.runtime.formatting import format_errors, group_errors_by_path
from schema_validator.runtime.validator import Validator
from schema_validator.schema.compiled import CompiledSchema, Schema
from schema_validator.schema.models import (
    ErrorFormat,
    ValidationError,
    ValidationMode,
    ValidationResult,
    ValidatorOptions,
)

__all__ = [
    "AlreadyRegisteredError",
    "CompiledSchema",
    "DefaultValidator",
    "EmptyNameError",
    "ErrorFormat",
    "EvaluationFrame",
    "InvalidInputError",
    "KeywordViolation",
    "MissingFunctionError",
    "RegistryError",
    "RuleExecutionError",
    "RuleKind",
    "RuleRegistry",
    "Schema",
    "SchemaCompileError",
    "SchemaParseError",
    "SchemaValidatorError",
    "ValidationEngine",
    "ValidationError",
    "ValidationErrors",
    "ValidationMode",
    "ValidationResult",
    "Validator",
    "ValidatorOptions",
    "compile_schema",
    "format_errors",
    "group_errors_by_path",
    "parse_schema",
    "register_comparator",
    "register_format",
    "register_validator",
    "validate_json",
    "validate_record",
    "validate_var",
    "violation",
]
