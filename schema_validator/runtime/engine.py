"""
Validation engine: walks a compiled tree against a value.

Each node's keyword bindings run in document order. Rules report validation
failures by raising ``KeywordViolation``; the engine records those and keeps
going unless the frame asks it to stop at the first error. Hard errors from
the validator itself propagate unchanged, and anything else a rule raises is
wrapped in ``RuleExecutionError``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from schema_validator.errors import KeywordViolation, RuleExecutionError, SchemaValidatorError
from schema_validator.logger import get_logger
from schema_validator.registry.format_registry import FormatRegistry, default_format_registry
from schema_validator.rules.frame import EvaluationFrame
from schema_validator.schema.compiled import CompiledSchema
from schema_validator.schema.models import ValidationError, ValidationMode, ValidationResult

logger = get_logger(__name__)


class ValidationEngine:
    """
    Stateless orchestrator; one instance can serve any number of concurrent
    validations because all per-call state lives in the frames.
    """

    def __init__(self, formats: Optional[FormatRegistry] = None) -> None:
        self.formats = formats or default_format_registry

    def new_frame(
        self,
        *,
        mode: ValidationMode = ValidationMode.STRICT,
        stop_on_first_error: bool = False,
        allow_unknown_fields: bool = False,
    ) -> EvaluationFrame:
        return EvaluationFrame(
            engine=self,
            mode=ValidationMode(mode),
            formats=self.formats,
            stop_on_first_error=stop_on_first_error,
            allow_unknown_fields=allow_unknown_fields,
        )

    def validate(
        self,
        node: CompiledSchema,
        value: Any,
        *,
        path: str = "$",
        mode: Optional[ValidationMode] = None,
        stop_on_first_error: bool = False,
        allow_unknown_fields: bool = False,
    ) -> ValidationResult:
        frame = self.new_frame(
            mode=mode or node.mode,
            stop_on_first_error=stop_on_first_error,
            allow_unknown_fields=allow_unknown_fields,
        )
        return ValidationResult.from_errors(self.evaluate(node, value, path, frame))

    def evaluate(
        self, node: CompiledSchema, value: Any, path: str, frame: EvaluationFrame
    ) -> List[ValidationError]:
        frame = frame.enter(node)
        condition = node.get("if")
        if isinstance(condition, CompiledSchema) and node.binding("if") is not None:
            frame = frame.with_if_condition(frame.passes(condition, value, path))

        errors: List[ValidationError] = []
        for binding in node.bindings:
            try:
                ok = binding.handler(frame, value, binding.value, path)
            except KeywordViolation as violation:
                found = violation.errors or [self._generic_failure(binding.keyword, value, path)]
            except SchemaValidatorError:
                raise
            except Exception as exc:
                logger.error("Rule '%s' failed at %s: %s", binding.keyword, path, exc)
                raise RuleExecutionError(
                    f"validation error: rule '{binding.keyword}' failed at {path}: {exc}"
                ) from exc
            else:
                found = [] if ok else [self._generic_failure(binding.keyword, value, path)]

            if not found:
                continue
            if frame.stop_on_first_error:
                return found[:1]
            errors.extend(found)
        return errors

    @staticmethod
    def _generic_failure(keyword: str, value: Any, path: str) -> ValidationError:
        return ValidationError(
            path=path,
            message=f"validation failed for keyword {keyword}",
            tag=keyword,
            value=value,
        )
