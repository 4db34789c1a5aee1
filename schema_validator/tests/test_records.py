from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from schema_validator.errors import InvalidInputError, RuleExecutionError, ValidationErrors
from schema_validator.runtime.tags import parse_tag, tag_to_schema
from schema_validator.runtime.validator import Validator


@dataclass
class Address:
    city: str = field(default="", metadata={"validate": "required,min=2"})
    zip_code: str = field(default="", metadata={"validate": "pattern=^[0-9]{5}$"})


@dataclass
class Account:
    name: str = field(default="", metadata={"validate": "required,min=2,max=10"})
    age: int = field(default=18, metadata={"validate": "min=18,max=130"})
    role: str = field(default="user", metadata={"validate": "enum=admin|user"})
    tags: List[str] = field(default_factory=list, metadata={"validate": "max=2"})
    address: Optional[Address] = field(default=None, metadata={"validate": "required"})
    note: str = "untagged"


class Signup(BaseModel):
    email: str = Field(json_schema_extra={"validate": "required,format=email"})
    nickname: Optional[str] = Field(default=None, json_schema_extra={"validate": "minLength=3"})


def test_parse_tag() -> None:
    assert parse_tag("") == {}
    assert parse_tag("required, min=2 ,max=2.5,enum=a|b|c,pattern=^x=y$,uniqueItems") == {
        "required": True,
        "min": 2,
        "max": 2.5,
        "enum": ["a", "b", "c"],
        "pattern": "^x=y$",
        "uniqueItems": True,
    }
    assert parse_tag("min=abc") == {"min": "abc"}


def test_min_max_follow_the_value_kind() -> None:
    directives = {"min": 1, "max": 5}
    assert tag_to_schema(directives, "text") == {"minLength": 1, "maxLength": 5}
    assert tag_to_schema(directives, 3) == {"minimum": 1, "maximum": 5}
    assert tag_to_schema(directives, [1]) == {"minItems": 1, "maxItems": 5}
    assert tag_to_schema(directives, {"a": 1}) == {"minProperties": 1, "maxProperties": 5}
    assert tag_to_schema({"required": True, "type": "string"}, "x") == {"type": "string"}


def test_valid_record_passes() -> None:
    account = Account(name="Ada", age=36, role="admin", tags=["x"], address=Address(city="Oslo"))
    assert Validator().validate_record(account) is None


def test_record_errors_use_field_paths() -> None:
    account = Account(name="A", age=12, role="root", tags=["a", "b", "c"])

    with pytest.raises(ValidationErrors) as excinfo:
        Validator().validate_record(account)

    errors = excinfo.value.errors
    assert [(e.path, e.tag) for e in errors] == [
        ("name", "minLength"),
        ("age", "minimum"),
        ("role", "enum"),
        ("tags", "maxItems"),
        ("address", "required"),
    ]
    assert errors[-1].message == "field is required"


def test_required_treats_zero_values_as_missing() -> None:
    with pytest.raises(ValidationErrors) as excinfo:
        Validator().validate_record(Account(name="", address=Address(city="Oslo")))
    assert [(e.path, e.message) for e in excinfo.value.errors] == [("name", "field is required")]


def test_nested_records_are_validated_recursively() -> None:
    account = Account(name="Ada", age=20, address=Address(city="X", zip_code="abc"))

    assert Validator().validate_record(account) is None

    with pytest.raises(ValidationErrors) as excinfo:
        Validator(recursive_validation=True).validate_record(account)
    assert [(e.path, e.tag) for e in excinfo.value.errors] == [
        ("address.city", "minLength"),
        ("address.zip_code", "pattern"),
    ]


def test_stop_on_first_error() -> None:
    with pytest.raises(ValidationErrors) as excinfo:
        Validator(stop_on_first_error=True).validate_record(Account(name="A", age=1))
    assert len(excinfo.value.errors) == 1
    assert excinfo.value.errors[0].path == "name"


def test_pydantic_models() -> None:
    validator = Validator()
    assert validator.validate_record(Signup(email="a@example.com")) is None

    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_record(Signup(email="not-an-email", nickname="ab"))
    assert [(e.path, e.tag) for e in excinfo.value.errors] == [("email", "format"), ("nickname", "minLength")]


def test_custom_tag_name_and_tag_lookup() -> None:
    @dataclass
    class Tagged:
        code: str = field(default="", metadata={"rules": "min=3"})

    validator = Validator()
    assert validator.validate_record(Tagged(code="a")) is None

    validator.set_tag_name("rules")
    with pytest.raises(ValidationErrors):
        validator.validate_record(Tagged(code="a"))

    validator.set_tag_name_func(lambda f: "max=0")
    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_record(Tagged(code="a"))
    assert excinfo.value.errors[0].tag == "maxLength"


def test_custom_hooks() -> None:
    validator = Validator()
    validator.set_custom_validate_func(lambda value, path: not (path == "role" and value != "admin"))

    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_record(Account(name="Ada", role="user", address=Address(city="Oslo")))
    assert [(e.path, e.tag, e.message) for e in excinfo.value.errors] == [
        ("role", "custom", "custom validation failed")
    ]

    validator.set_custom_validate_func(None)
    validator.set_custom_type_func(lambda value: value.strip() if isinstance(value, str) else value)
    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_record(Account(name="  A  ", address=Address(city="Oslo")))
    assert excinfo.value.errors[0].path == "name"


def test_custom_hook_failures_are_hard_errors() -> None:
    def hook(value, path):
        raise RuntimeError("lookup failed")

    validator = Validator()
    validator.set_custom_validate_func(hook)
    with pytest.raises(RuleExecutionError) as excinfo:
        validator.validate_record(Account(name="Ada"))
    assert "custom validation failed for name" in str(excinfo.value)


def test_non_records_are_rejected() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        Validator().validate_record({"name": "Ada"})
    assert "input must be a record" in str(excinfo.value)


def test_validate_var() -> None:
    validator = Validator()
    assert validator.validate_var("hello", "min=2,max=10") is None
    assert validator.validate_var(5, "") is None

    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_var(200, "min=1,max=100")
    assert excinfo.value.errors[0].path == "var"
    assert excinfo.value.errors[0].tag == "maximum"

    with pytest.raises(ValidationErrors) as excinfo:
        validator.validate_var("", "required")
    assert excinfo.value.errors[0].message == "field is required"
