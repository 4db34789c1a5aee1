from __future__ import annotations

import pytest
from jsonschema import Draft7Validator

from schema_validator.runtime.validator import Validator

# Schemas whose keywords only see values of the type they constrain, where
# both engines are expected to agree.
CASES = [
    (
        {
            "type": "object",
            "properties": {"id": {"type": "integer", "minimum": 1}, "name": {"type": "string", "maxLength": 5}},
            "required": ["id"],
            "additionalProperties": False,
        },
        [{"id": 1}, {"id": 0}, {"id": 1.0}, {"id": True}, {}, {"id": 2, "name": "toolong"}, {"id": 2, "x": 1}],
    ),
    (
        {"type": "string", "pattern": "^[a-z]+[0-9]*$", "minLength": 2},
        ["ab", "ab12", "a", "12", "AB", ""],
    ),
    (
        {"type": "array", "items": {"type": "number", "multipleOf": 0.5}, "minItems": 1, "maxItems": 3},
        [[0.5], [1, 1.5, 2], [], [0.3], [1, 2, 3, 4]],
    ),
    (
        {"oneOf": [{"type": "integer"}, {"type": "number", "minimum": 10}]},
        [5, 12, 2.5, 10.5, "x"],
    ),
    (
        {"anyOf": [{"type": "string"}, {"type": "null"}], "not": {"enum": ["forbidden"]}},
        ["ok", None, "forbidden", 3],
    ),
    (
        {
            "type": "object",
            "patternProperties": {"^n_": {"type": "number"}},
            "additionalProperties": {"type": "string"},
        },
        [{"n_a": 1, "label": "x"}, {"n_a": "1"}, {"label": 2}, {}],
    ),
    (
        {"type": "object", "dependencies": {"card": ["billing"]}},
        [{"card": 1}, {"card": 1, "billing": 2}, {"billing": 2}],
    ),
    (
        {
            "type": "object",
            "if": {"properties": {"kind": {"type": "string"}}},
            "then": {"required": ["label"]},
            "else": {"required": ["code"]},
        },
        [{"kind": "a", "label": 1}, {"kind": "a"}, {"kind": 1, "code": 2}, {"kind": 1}],
    ),
]


@pytest.mark.parametrize(
    "schema, value",
    [(schema, value) for schema, values in CASES for value in values],
)
def test_agrees_with_reference_validator(schema, value) -> None:
    expected = Draft7Validator(schema).is_valid(value)
    assert Validator().validate_with_schema(value, schema).valid == expected
