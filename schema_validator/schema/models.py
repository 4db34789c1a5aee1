"""
Pydantic models shared by the compiler, the engine and the entry points.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        validate_assignment=True,
    )


class ValidationMode(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"
    WARN = "warn"


class ErrorFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


class ValidationError(BaseModel):
    """A single failed check, located by path."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str
    message: str
    tag: str
    value: Any = None
    param: Optional[str] = None

    def __str__(self) -> str:
        return f"validation error: {self.message} (path: {self.path})"


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[ValidationError]) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors))

    def __bool__(self) -> bool:
        return self.valid


class ValidatorOptions(StrictModel):
    """Per-instance configuration of a ``Validator``."""

    tag_name: str = "validate"
    validation_mode: ValidationMode = ValidationMode.STRICT
    error_format: ErrorFormat = ErrorFormat.DETAILED
    enable_caching: bool = False
    recursive_validation: bool = False
    stop_on_first_error: bool = False
    allow_unknown_fields: bool = False

    @classmethod
    def from_settings(cls, **overrides: Any) -> "ValidatorOptions":
        from schema_validator.config import settings

        values = {
            "tag_name": settings.tag_name,
            "validation_mode": settings.validation_mode.lower(),
            "error_format": settings.error_format.lower(),
            "enable_caching": settings.enable_caching,
            "recursive_validation": settings.recursive_validation,
            "stop_on_first_error": settings.stop_on_first_error,
            "allow_unknown_fields": settings.allow_unknown_fields,
        }
        values.update(overrides)
        return cls.model_validate(values)
