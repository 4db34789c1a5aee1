"""
The ``format`` keyword, backed by the frame's format registry.
"""

from __future__ import annotations

from typing import Any

from schema_validator.logger import get_logger
from schema_validator.rules.frame import EvaluationFrame, violation
from schema_validator.schema.models import ValidationMode

logger = get_logger(__name__)


def validate_format(frame: EvaluationFrame, value: Any, param: Any, path: str) -> bool:
    if not isinstance(param, str):
        raise violation(path, "format must be a string", "format", value=value)
    if not isinstance(value, str):
        raise violation(path, "value must be a string", "format", value=value, param=param)
    checker = frame.formats.get(param)
    if checker is None:
        if frame.mode == ValidationMode.LOOSE:
            return True
        if frame.mode == ValidationMode.WARN:
            logger.warning("Unknown format '%s' at %s", param, path)
        raise violation(path, f"unknown format: {param}", "format", value=value, param=param)
    if not checker(value):
        raise violation(path, f"invalid {param} format", "format", value=value, param=param)
    return True
