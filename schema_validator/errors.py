"""
Shared exception hierarchy for the schema validator.

Hard failures (bad schema text, compile errors, registry misuse, rules that
blow up) derive from ``SchemaValidatorError``. Ordinary validation failures are
reported as ``ValidationError`` records; ``KeywordViolation`` carries them out
of a rule and ``ValidationErrors`` carries them out of the record entry points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from schema_validator.schema.models import ErrorFormat, ValidationError


class SchemaValidatorError(Exception):
    """Base class for all hard validator errors."""


class SchemaParseError(SchemaValidatorError):
    """Raised when schema text is not a JSON object."""


class SchemaCompileError(SchemaValidatorError):
    """Raised when a raw schema cannot be compiled into a constraint tree."""


class InvalidInputError(SchemaValidatorError):
    """Raised when the value handed to an entry point cannot be validated at all."""


class RuleExecutionError(SchemaValidatorError):
    """Raised when a rule fails with something other than a validation error."""


class RegistryError(SchemaValidatorError, ValueError):
    """Raised for invalid registry operations."""


class EmptyNameError(RegistryError):
    """Raised when registering under an empty name."""


class MissingFunctionError(RegistryError):
    """Raised when registering without a callable."""


class AlreadyRegisteredError(RegistryError):
    """Raised when a name is already taken and replacement was not requested."""


class KeywordViolation(Exception):
    """
    Structured validation failure raised by a rule.

    The engine catches it and records ``errors`` in the validation result
    instead of aborting the run.
    """

    def __init__(self, errors: "ValidationError | Iterable[ValidationError]") -> None:
        from schema_validator.schema.models import ValidationError

        if isinstance(errors, ValidationError):
            collected = [errors]
        else:
            collected = list(errors)
        self.errors: List[ValidationError] = collected
        super().__init__("; ".join(err.message for err in collected))


class ValidationErrors(Exception):
    """Aggregate of validation errors raised by the record entry points."""

    def __init__(self, errors: "Iterable[ValidationError]") -> None:
        self.errors: List[ValidationError] = list(errors)
        super().__init__(self.format())

    def format(self, mode: "ErrorFormat | str | None" = None) -> str:
        from schema_validator.runtime.formatting import format_errors
        from schema_validator.schema.models import ErrorFormat

        return format_errors(self.errors, ErrorFormat(mode) if mode is not None else ErrorFormat.DETAILED)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        return self.format()
