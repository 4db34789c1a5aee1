"""
``if``/``then``/``else``.

The engine evaluates ``if`` before the other keywords of a node and stores the
outcome on the frame; ``then`` and ``else`` read it. A branch without a
condition, and a condition without branches, both pass.
"""

from __future__ import annotations

from typing import Any

from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.schema.compiled import CompiledSchema


def validate_if(frame: EvaluationFrame, value: Any, param: CompiledSchema, path: str) -> bool:
    return True


def _branch(keyword: str, applies_when: bool):
    def rule(frame: EvaluationFrame, value: Any, param: CompiledSchema, path: str) -> bool:
        if frame.if_condition is not applies_when:
            return True
        inner = frame.first_violation(param, value, path)
        if inner is None:
            return True
        raise violation(
            inner.path,
            f"validation failed against {keyword} schema for keyword '{inner.tag}': {inner.message}",
            keyword,
            value=value,
            param=inner.tag,
        )

    rule.__name__ = f"validate_{keyword}"
    return rule


validate_then = _branch("then", True)
validate_else = _branch("else", False)
