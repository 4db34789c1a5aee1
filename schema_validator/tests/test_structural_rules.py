from __future__ import annotations

from schema_validator.runtime.validator import Validator


def _validate(schema: dict, value, **options):
    validator = Validator(validation_mode="strict", **options)
    return validator.validate_with_schema(value, schema)


def test_properties_recurse_with_paths() -> None:
    schema = {
        "type": "object",
        "properties": {
            "user": {
                "type": "object",
                "properties": {"age": {"type": "integer", "minimum": 0}},
            }
        },
    }
    result = _validate(schema, {"user": {"age": -1}})
    assert not result.valid
    assert [(e.path, e.tag) for e in result.errors] == [("$.user.age", "minimum")]

    assert _validate(schema, {}).valid
    assert _validate({"properties": {"a": {"type": "string"}}}, [1, 2]).valid


def test_required_reports_every_missing_name() -> None:
    result = _validate({"required": ["a", "b", "c"]}, {"b": 1})
    assert [(e.path, e.message) for e in result.errors] == [
        ("$.a", "required property 'a' is missing"),
        ("$.c", "required property 'c' is missing"),
    ]

    result = _validate({"required": ["a"]}, "text")
    assert result.errors[0].message == "value must be an object for required validation"


def test_items_homogeneous_and_tuple() -> None:
    result = _validate({"items": {"type": "integer"}}, [1, "two", 3, "four"])
    assert [e.path for e in result.errors] == ["$[1]", "$[3]"]

    tuple_schema = {"items": [{"type": "string"}, {"type": "integer"}]}
    assert _validate(tuple_schema, ["a", 1]).valid
    assert _validate(tuple_schema, ["a"]).valid
    assert _validate(tuple_schema, ["a", 1, {"anything": True}]).valid
    result = _validate(tuple_schema, [1, 1])
    assert [(e.path, e.tag) for e in result.errors] == [("$[0]", "type")]


def test_pattern_properties_apply_every_matching_pattern() -> None:
    schema = {
        "patternProperties": {
            "^s_": {"type": "string"},
            "_x$": {"minLength": 3},
        }
    }
    assert _validate(schema, {"s_name": "abc", "other": 1}).valid

    result = _validate(schema, {"s_a_x": "ab"})
    assert [(e.path, e.tag) for e in result.errors] == [("$.s_a_x", "minLength")]

    result = _validate(schema, {"s_a_x": 5})
    assert {e.tag for e in result.errors} == {"type", "minLength"}


def test_additional_properties_false_lists_each_extra_key() -> None:
    schema = {
        "properties": {"name": {"type": "string"}},
        "patternProperties": {"^x-": {}},
        "additionalProperties": False,
    }
    assert _validate(schema, {"name": "a", "x-trace": 1}).valid

    result = _validate(schema, {"name": "a", "extra": 1, "other": 2})
    assert [e.path for e in result.errors] == ["$.extra", "$.other"]
    assert all(e.tag == "additionalProperties" for e in result.errors)
    assert "unknown field" in result.errors[0].message


def test_additional_properties_independent_of_keyword_order() -> None:
    before = {"additionalProperties": False, "properties": {"name": {"type": "string"}}}
    after = {"properties": {"name": {"type": "string"}}, "additionalProperties": False}
    value = {"name": "a"}
    assert _validate(before, value).valid
    assert _validate(after, value).valid


def test_additional_properties_schema_and_allow_unknown_fields() -> None:
    schema = {"properties": {"id": {}}, "additionalProperties": {"type": "integer"}}
    assert _validate(schema, {"id": "x", "count": 3}).valid

    result = _validate(schema, {"id": "x", "count": "three"})
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.tag == "additionalProperties"
    assert error.param == "type"
    assert error.path == "$.count"

    closed = {"properties": {"id": {}}, "additionalProperties": False}
    assert _validate(closed, {"id": 1, "extra": 2}, allow_unknown_fields=True).valid
    assert _validate({"additionalProperties": True}, {"anything": 1}).valid


def test_dependencies_array_form() -> None:
    schema = {"type": "object", "dependencies": {"credit_card": ["billing_address"]}}

    result = _validate(schema, {"credit_card": "1234"})
    assert not result.valid
    assert "depends on 'billing_address'" in result.errors[0].message
    assert result.errors[0].tag == "dependencies"

    assert _validate(schema, {"credit_card": "1234", "billing_address": "Main St"}).valid
    assert _validate(schema, {"name": "no card"}).valid


def test_dependencies_schema_form_checks_the_property_value() -> None:
    schema = {"dependencies": {"code": {"type": "string", "minLength": 4}}}
    assert _validate(schema, {"code": "abcd"}).valid

    result = _validate(schema, {"code": "ab"})
    error = result.errors[0]
    assert error.tag == "dependencies"
    assert error.param == "minLength"
    assert "dependency validation failed for property 'code' with keyword 'minLength'" in error.message


def test_stop_on_first_error_truncates() -> None:
    schema = {"required": ["a", "b"], "properties": {"c": {"type": "string"}}}
    value = {"c": 1}
    full = _validate(schema, value)
    first = _validate(schema, value, stop_on_first_error=True)

    assert len(full.errors) == 3
    assert len(first.errors) == 1
    assert first.errors[0] == full.errors[0]
