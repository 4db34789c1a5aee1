"""
Stage 1: parse schema text into a raw ``Schema`` document.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from schema_validator.errors import SchemaParseError
from schema_validator.rules.utils import json_type_name
from schema_validator.schema.compiled import Schema
from schema_validator.schema.models import ValidationMode


def parse_schema(payload: Any, *, mode: ValidationMode = ValidationMode.STRICT) -> Schema:
    """
    Accepts JSON text (``str`` or ``bytes``) or an already decoded mapping and
    returns the raw schema document tagged with ``mode``.
    """

    if isinstance(payload, Schema):
        return Schema(raw=payload.raw, mode=ValidationMode(mode), source=payload.source)

    source = None
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SchemaParseError(f"failed to parse schema: {exc}") from exc

    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise SchemaParseError(f"failed to parse schema: {exc}") from exc
        source = payload
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise SchemaParseError(
            f"Unsupported schema payload type {type(payload).__name__}; expected str or Mapping"
        )

    if not isinstance(data, Mapping):
        raise SchemaParseError(
            f"failed to parse schema: top-level value must be an object, got {json_type_name(data)}"
        )
    return Schema(raw=data, mode=ValidationMode(mode), source=source)
