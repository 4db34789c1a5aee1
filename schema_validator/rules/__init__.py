"""
Keyword rules. Every rule has the signature ``(frame, value, param, path) -> bool``
and signals failures by raising ``KeywordViolation``.
"""

from schema_validator.rules.builtin import BUILTIN_RULES, register_builtin_rules
from schema_validator.rules.frame import EvaluationFrame, violation

__all__ = ["BUILTIN_RULES", "EvaluationFrame", "register_builtin_rules", "violation"]
