"""
Keyword tables consulted by the compiler.
"""

from __future__ import annotations

# Descriptive keys: kept on the compiled node, never evaluated.
METADATA_KEYS = frozenset({"$id", "$schema", "$comment", "title", "description"})

# Annotation keys accepted in strict mode and skipped during evaluation.
ANNOTATION_KEYS = frozenset({"default", "examples"})

NON_VALIDATING_KEYS = METADATA_KEYS | ANNOTATION_KEYS

# Always rejected: references are never resolved.
REFERENCE_KEYS = frozenset({"$ref"})

SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf")
CONDITIONAL_KEYWORDS = ("if", "then", "else")

NUMERIC_KEYWORDS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf")
COUNT_KEYWORDS = ("minLength", "maxLength", "minItems", "maxItems", "minProperties", "maxProperties")
