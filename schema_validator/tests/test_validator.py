from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError as PydanticValidationError

from schema_validator.errors import (
    AlreadyRegisteredError,
    EmptyNameError,
    InvalidInputError,
    MissingFunctionError,
    SchemaCompileError,
    SchemaParseError,
)
from schema_validator.runtime.default import DefaultValidator, register_comparator, register_validator, validate_json
from schema_validator.runtime.validator import Validator
from schema_validator.schema.models import ErrorFormat, ValidationMode, ValidatorOptions


def test_defaults() -> None:
    options = ValidatorOptions()
    assert options.tag_name == "validate"
    assert options.validation_mode == ValidationMode.STRICT
    assert options.error_format == ErrorFormat.DETAILED
    assert options.enable_caching is False


def test_options_reject_unknown_fields() -> None:
    with pytest.raises(PydanticValidationError):
        ValidatorOptions(colour="blue")


def test_overrides_apply_on_top_of_options() -> None:
    validator = Validator(ValidatorOptions(tag_name="check"), stop_on_first_error=True)
    assert validator.options.tag_name == "check"
    assert validator.options.stop_on_first_error is True


def test_validate_json_errors() -> None:
    validator = Validator()

    with pytest.raises(InvalidInputError) as excinfo:
        validator.validate_json("{oops", '{"type": "object"}')
    assert "invalid JSON data" in str(excinfo.value)

    with pytest.raises(SchemaParseError) as excinfo:
        validator.validate_json("{}", "{oops")
    assert "invalid schema JSON" in str(excinfo.value)

    with pytest.raises(SchemaCompileError) as excinfo:
        validator.validate_json("{}", '{"type": 5}')
    assert "failed to compile schema" in str(excinfo.value)


def test_cache_reuses_compiled_schemas() -> None:
    validator = Validator(enable_caching=True)
    schema = '{"type": "string"}'

    first = validator.compile(schema)
    second = validator.compile(schema)
    assert first is second
    assert validator.cache_size == 1

    validator.clear_cache()
    assert validator.cache_size == 0
    assert validator.compile(schema) is not first


def test_cache_disabled_compiles_every_time() -> None:
    validator = Validator(enable_caching=False)
    schema = '{"type": "string"}'
    assert validator.compile(schema) is not validator.compile(schema)
    assert validator.cache_size == 0


def test_registering_a_rule_drops_cached_schemas() -> None:
    validator = Validator(enable_caching=True)
    validator.compile('{"type": "string"}')
    validator.register_validator("even", lambda frame, value, param, path: value % 2 == 0)
    assert validator.cache_size == 0


def test_changing_mode_recompiles() -> None:
    validator = Validator(enable_caching=True)
    schema = '{"type": "string", "x-extra": 1}'
    with pytest.raises(SchemaCompileError):
        validator.compile(schema)

    validator.set_validation_mode("loose")
    assert validator.validate_json('"a"', schema).valid


def test_validator_registration_overwrites() -> None:
    validator = Validator()
    validator.register_validator("flag", lambda frame, value, param, path: False)
    validator.register_validator("flag", lambda frame, value, param, path: True)
    assert validator.validate_with_schema(1, {"flag": True}).valid

    with pytest.raises(EmptyNameError):
        validator.register_validator("", lambda *args: True)
    with pytest.raises(MissingFunctionError):
        validator.register_validator("x", None)


def test_comparators() -> None:
    validator = Validator()
    assert validator.get_comparator("gt")(3, 2)
    assert not validator.get_comparator("gt")("3", 2)
    assert validator.get_comparator("eq")({"a": [1]}, {"a": [1.0]})

    validator.register_comparator("startswith", lambda a, b: str(a).startswith(str(b)))
    assert validator.get_comparator("startswith")("abc", "a")

    with pytest.raises(EmptyNameError) as excinfo:
        validator.register_comparator("", lambda a, b: True)
    assert "comparator name cannot be empty" in str(excinfo.value)
    with pytest.raises(MissingFunctionError):
        validator.register_comparator("none", None)


def test_setters_update_options() -> None:
    validator = Validator()
    validator.set_tag_name("rules")
    validator.set_error_format("simple")

    assert validator.options.tag_name == "rules"
    assert validator.options.error_format == ErrorFormat.SIMPLE


def test_default_instance_rejects_duplicates() -> None:
    DefaultValidator.reset()
    try:
        register_validator("positive", lambda frame, value, param, path: value > 0)
        with pytest.raises(AlreadyRegisteredError):
            register_validator("positive", lambda frame, value, param, path: True)

        register_comparator("same", lambda a, b: a == b)
        with pytest.raises(AlreadyRegisteredError):
            register_comparator("same", lambda a, b: a == b)
        with pytest.raises(AlreadyRegisteredError):
            register_comparator("eq", lambda a, b: a == b)

        assert not validate_json("-1", '{"positive": true}').valid
    finally:
        DefaultValidator.reset()


def test_default_instance_is_a_singleton() -> None:
    DefaultValidator.reset()
    seen = []

    def grab() -> None:
        seen.append(DefaultValidator.instance())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(instance is seen[0] for instance in seen)
    DefaultValidator.reset()


def test_concurrent_compiles_share_one_cache() -> None:
    validator = Validator(enable_caching=True)
    schema = '{"type": "object", "required": ["id"]}'
    results = []

    def work() -> None:
        compiled = validator.compile(schema)
        results.append(validator.validate({"id": 1}, compiled).valid)

    threads = [threading.Thread(target=work) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(results) and len(results) == 16
    assert validator.cache_size == 1
