"""
Tag mini-language used on record fields, e.g. ``"required,min=2,max=10"``.

Directives are comma separated. A bare word is a flag set to ``True``;
``key=value`` keeps ``value`` as a string except for numeric keys (parsed as
int, then float) and ``enum`` (split on ``|``).
"""

from __future__ import annotations

from typing import Any, Dict

from schema_validator.rules.utils import is_array, is_number, is_object

NUMERIC_TAG_KEYS = frozenset(
    {
        "min",
        "max",
        "minLength",
        "maxLength",
        "minimum",
        "maximum",
        "exclusiveMinimum",
        "exclusiveMaximum",
        "multipleOf",
        "minItems",
        "maxItems",
        "minProperties",
        "maxProperties",
    }
)


def _parse_number(text: str) -> Any:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_tag(tag: str) -> Dict[str, Any]:
    directives: Dict[str, Any] = {}
    if not tag:
        return directives
    for part in tag.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            directives[part] = True
            continue
        key, _, raw = part.partition("=")
        key, raw = key.strip(), raw.strip()
        if key in NUMERIC_TAG_KEYS:
            directives[key] = _parse_number(raw)
        elif key == "enum":
            directives[key] = raw.split("|")
        else:
            directives[key] = raw
    return directives


def _bounds_for(value: Any) -> tuple:
    if isinstance(value, str):
        return "minLength", "maxLength"
    if is_number(value):
        return "minimum", "maximum"
    if is_object(value):
        return "minProperties", "maxProperties"
    if is_array(value):
        return "minItems", "maxItems"
    return "minimum", "maximum"


def tag_to_schema(directives: Dict[str, Any], value: Any) -> Dict[str, Any]:
    """
    Turn parsed directives into a raw schema for ``value``.

    ``min``/``max`` become the bound keywords that fit the value's kind;
    ``required`` is handled by the record walker and dropped here.
    """
    schema: Dict[str, Any] = {}
    lower, upper = _bounds_for(value)
    for key, param in directives.items():
        if key == "required":
            continue
        if key == "min":
            schema.setdefault(lower, param)
        elif key == "max":
            schema.setdefault(upper, param)
        else:
            schema[key] = param
    return schema
