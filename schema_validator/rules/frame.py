"""
Immutable evaluation frame handed to every rule.

A frame carries what a rule may need beyond its own value and parameter: the
engine (to recurse into sub-schemas), the validation mode, the format
registry, and sibling facts resolved at compile time for the node being
evaluated. Rules never mutate a frame; recursion derives a new one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, FrozenSet, List, Optional, Tuple

from schema_validator.errors import KeywordViolation
from schema_validator.registry.format_registry import FormatRegistry, default_format_registry
from schema_validator.schema.compiled import CompiledSchema
from schema_validator.schema.models import ValidationError, ValidationMode

if TYPE_CHECKING:
    from schema_validator.runtime.engine import ValidationEngine


@dataclass(frozen=True)
class EvaluationFrame:
    engine: "ValidationEngine"
    mode: ValidationMode = ValidationMode.STRICT
    formats: FormatRegistry = default_format_registry
    stop_on_first_error: bool = False
    allow_unknown_fields: bool = False
    declared_properties: FrozenSet[str] = frozenset()
    property_patterns: Tuple[re.Pattern, ...] = ()
    if_condition: Optional[bool] = None

    def enter(self, node: CompiledSchema) -> "EvaluationFrame":
        return replace(
            self,
            declared_properties=node.declared_properties,
            property_patterns=node.property_patterns,
            if_condition=None,
        )

    def with_if_condition(self, condition: Optional[bool]) -> "EvaluationFrame":
        return replace(self, if_condition=condition)

    def validate(
        self,
        node: CompiledSchema,
        value: Any,
        path: str,
        *,
        stop_on_first_error: Optional[bool] = None,
    ) -> List[ValidationError]:
        frame = self
        if stop_on_first_error is not None and stop_on_first_error != self.stop_on_first_error:
            frame = replace(self, stop_on_first_error=stop_on_first_error)
        return self.engine.evaluate(node, value, path, frame)

    def first_violation(self, node: CompiledSchema, value: Any, path: str) -> Optional[ValidationError]:
        errors = self.validate(node, value, path, stop_on_first_error=True)
        return errors[0] if errors else None

    def passes(self, node: CompiledSchema, value: Any, path: str) -> bool:
        return self.first_violation(node, value, path) is None


def violation(
    path: str,
    message: str,
    tag: str,
    *,
    value: Any = None,
    param: Any = None,
) -> KeywordViolation:
    """Build the structured failure a rule raises."""
    return KeywordViolation(
        ValidationError(
            path=path,
            message=message,
            tag=tag,
            value=value,
            param=None if param is None else str(param),
        )
    )


def join_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"
