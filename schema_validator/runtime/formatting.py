"""
Presentation of validation errors.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List

from schema_validator.rules.utils import thaw
from schema_validator.schema.models import ErrorFormat, ValidationError


def error_to_dict(error: ValidationError) -> Dict[str, object]:
    payload: Dict[str, object] = {"path": error.path, "message": error.message, "tag": error.tag}
    if error.value is not None:
        payload["value"] = thaw(error.value)
    if error.param is not None:
        payload["param"] = error.param
    return payload


def format_errors(errors: Iterable[ValidationError], mode: ErrorFormat = ErrorFormat.DETAILED) -> str:
    errors = list(errors)
    mode = ErrorFormat(mode)
    if mode == ErrorFormat.SIMPLE:
        return "; ".join(error.message for error in errors)
    if mode == ErrorFormat.JSON:
        return json.dumps([error_to_dict(error) for error in errors], default=str)
    lines = ["validation failed with the following errors:"]
    lines.extend(f"[{index}] {error}" for index, error in enumerate(errors, start=1))
    return "\n".join(lines)


def group_errors_by_path(errors: Iterable[ValidationError]) -> Dict[str, List[ValidationError]]:
    grouped: Dict[str, List[ValidationError]] = {}
    for error in errors:
        grouped.setdefault(error.path, []).append(error)
    return grouped
