from __future__ import annotations

import threading

import pytest

from schema_validator.errors import AlreadyRegisteredError, EmptyNameError, MissingFunctionError
from schema_validator.registry.rule_registry import RuleKind, RuleRegistry
from schema_validator.rules.builtin import BUILTIN_RULES, register_builtin_rules


def _always(frame, value, param, path) -> bool:
    return True


def test_register_and_get() -> None:
    registry = RuleRegistry()
    registry.register("even", _always)

    assert registry.get("even") is _always
    assert registry.get("missing") is None
    assert registry.has("even")
    assert registry.get_entry("even") == (_always, RuleKind.CUSTOM)


def test_register_rejects_empty_name_and_missing_function() -> None:
    registry = RuleRegistry()

    with pytest.raises(EmptyNameError) as excinfo:
        registry.register("", _always)
    assert "validator name cannot be empty" in str(excinfo.value)

    with pytest.raises(MissingFunctionError) as excinfo:
        registry.register("x", None)
    assert "validator function cannot be nil" in str(excinfo.value)


def test_register_rejects_duplicates_unless_replacing() -> None:
    registry = RuleRegistry()
    registry.register("x", _always)

    with pytest.raises(AlreadyRegisteredError):
        registry.register("x", lambda *args: False)

    replacement = lambda *args: False  # noqa: E731
    registry.register("x", replacement, replace=True)
    assert registry.get("x") is replacement


def test_names_and_count_are_snapshots() -> None:
    registry = RuleRegistry()
    registry.register("a", _always)
    names = registry.names()
    registry.register("b", _always)

    assert names == ["a"]
    assert registry.count() == 2
    registry.clear()
    assert registry.count() == 0


def test_builtin_population_is_conflict_free() -> None:
    registry = RuleRegistry()
    register_builtin_rules(registry)

    assert registry.count() == len(BUILTIN_RULES)
    assert registry.get_entry("allOf")[1] == RuleKind.LOGICAL
    assert registry.get_entry("items")[1] == RuleKind.STRUCTURAL
    assert registry.get_entry("minimum")[1] == RuleKind.PRIMITIVE


def test_builtin_population_fails_on_collision() -> None:
    registry = RuleRegistry()
    registry.register("type", _always)

    with pytest.raises(AlreadyRegisteredError) as excinfo:
        register_builtin_rules(registry)
    assert "type" in str(excinfo.value)


def test_concurrent_registration() -> None:
    registry = RuleRegistry()

    def worker(offset: int) -> None:
        for idx in range(50):
            registry.register(f"rule_{offset}_{idx}", _always)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert registry.count() == 400
