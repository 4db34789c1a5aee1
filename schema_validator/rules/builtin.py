"""
Bulk registration of the built-in keyword rules.
"""

from __future__ import annotations

from typing import List, Tuple

from schema_validator.errors import AlreadyRegisteredError
from schema_validator.registry.rule_registry import RuleKind, RuleRegistry
from schema_validator.rules import arrays, conditional, enumeration, formats, logical, numeric, objects, strings, types
from schema_validator.schema.compiled import RuleFunction

BUILTIN_RULES: List[Tuple[str, RuleFunction, RuleKind]] = [
    ("type", types.validate_type, RuleKind.PRIMITIVE),
    ("minimum", numeric.validate_minimum, RuleKind.PRIMITIVE),
    ("maximum", numeric.validate_maximum, RuleKind.PRIMITIVE),
    ("exclusiveMinimum", numeric.validate_exclusive_minimum, RuleKind.PRIMITIVE),
    ("exclusiveMaximum", numeric.validate_exclusive_maximum, RuleKind.PRIMITIVE),
    ("multipleOf", numeric.validate_multiple_of, RuleKind.PRIMITIVE),
    ("minLength", strings.validate_min_length, RuleKind.PRIMITIVE),
    ("maxLength", strings.validate_max_length, RuleKind.PRIMITIVE),
    ("pattern", strings.validate_pattern, RuleKind.PRIMITIVE),
    ("minItems", arrays.validate_min_items, RuleKind.PRIMITIVE),
    ("maxItems", arrays.validate_max_items, RuleKind.PRIMITIVE),
    ("uniqueItems", arrays.validate_unique_items, RuleKind.PRIMITIVE),
    ("minProperties", objects.validate_min_properties, RuleKind.PRIMITIVE),
    ("maxProperties", objects.validate_max_properties, RuleKind.PRIMITIVE),
    ("enum", enumeration.validate_enum, RuleKind.PRIMITIVE),
    ("format", formats.validate_format, RuleKind.PRIMITIVE),
    ("properties", objects.validate_properties, RuleKind.STRUCTURAL),
    ("patternProperties", objects.validate_pattern_properties, RuleKind.STRUCTURAL),
    ("additionalProperties", objects.validate_additional_properties, RuleKind.STRUCTURAL),
    ("items", arrays.validate_items, RuleKind.STRUCTURAL),
    ("dependencies", objects.validate_dependencies, RuleKind.STRUCTURAL),
    ("required", objects.validate_required, RuleKind.STRUCTURAL),
    ("allOf", logical.validate_all_of, RuleKind.LOGICAL),
    ("anyOf", logical.validate_any_of, RuleKind.LOGICAL),
    ("oneOf", logical.validate_one_of, RuleKind.LOGICAL),
    ("not", logical.validate_not, RuleKind.LOGICAL),
    ("if", conditional.validate_if, RuleKind.LOGICAL),
    ("then", conditional.validate_then, RuleKind.LOGICAL),
    ("else", conditional.validate_else, RuleKind.LOGICAL),
]


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Populate ``registry`` with every built-in rule; any name collision is fatal."""
    for name, fn, kind in BUILTIN_RULES:
        try:
            registry.register(name, fn, kind=kind)
        except AlreadyRegisteredError as exc:
            raise AlreadyRegisteredError(f"failed to register builtin rule {name}: {exc}") from exc
