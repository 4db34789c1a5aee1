from schema_validator.runtime.default import DefaultValidator
from schema_validator.runtime.engine import ValidationEngine
from schema_validator.runtime.validator import Validator

__all__ = [
    "DefaultValidator",
    "ValidationEngine",
    "Validator",
]
