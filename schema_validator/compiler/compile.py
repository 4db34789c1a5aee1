"""
Stage 2: compile a raw schema document into a ``CompiledSchema`` tree.

Compilation is depth-first and total: every nested schema is compiled before
its parent is returned, keyword values are converted to their typed form, and
each keyword with a registered rule is bound to its handler. The raw document
is never modified.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from schema_validator.compiler.keywords import (
    CONDITIONAL_KEYWORDS,
    COUNT_KEYWORDS,
    NON_VALIDATING_KEYS,
    NUMERIC_KEYWORDS,
    REFERENCE_KEYS,
    SCHEMA_LIST_KEYWORDS,
)
from schema_validator.errors import SchemaCompileError
from schema_validator.logger import get_logger
from schema_validator.registry.rule_registry import RuleRegistry
from schema_validator.rules.types import JSON_TYPES
from schema_validator.rules.utils import is_array, is_number, is_object, to_int
from schema_validator.schema.compiled import CompiledSchema, KeywordBinding, Schema
from schema_validator.schema.models import ValidationMode

logger = get_logger(__name__)


def freeze(value: Any) -> Any:
    """Deep copy of a JSON-like value using read-only containers."""
    if is_object(value):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if is_array(value):
        return tuple(freeze(item) for item in value)
    return value


def _type_name(value: Any) -> str:
    return type(value).__name__


class SchemaCompiler:
    """
    Compiles raw schema mappings against a rule registry in a fixed mode.
    """

    def __init__(self, registry: RuleRegistry, mode: ValidationMode = ValidationMode.STRICT) -> None:
        self.registry = registry
        self.mode = ValidationMode(mode)
        self._keyword_compilers: Dict[str, Callable[[Any], Any]] = {
            "type": self._compile_type,
            "properties": self._compile_properties,
            "patternProperties": self._compile_pattern_properties,
            "additionalProperties": self._compile_additional_properties,
            "items": self._compile_items,
            "dependencies": self._compile_dependencies,
            "required": self._compile_required,
            "enum": self._compile_enum,
            "not": self._compile_not,
            "pattern": self._compile_pattern,
            "uniqueItems": self._compile_unique_items,
        }
        for keyword in NUMERIC_KEYWORDS:
            self._keyword_compilers[keyword] = self._number_compiler(keyword)
        for keyword in COUNT_KEYWORDS:
            self._keyword_compilers[keyword] = self._count_compiler(keyword)
        for keyword in SCHEMA_LIST_KEYWORDS:
            self._keyword_compilers[keyword] = self._schema_list_compiler(keyword)
        for keyword in CONDITIONAL_KEYWORDS:
            self._keyword_compilers[keyword] = self._schema_compiler(keyword)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def compile(self, raw: Optional[Mapping[str, Any]]) -> CompiledSchema:
        if raw is None:
            raise SchemaCompileError("schema raw data is nil")
        return self.compile_node(raw)

    def compile_node(self, raw: Any) -> CompiledSchema:
        if not is_object(raw):
            raise SchemaCompileError(f"schema must be an object, got {_type_name(raw)}")

        keywords: Dict[str, Any] = {}
        metadata: Dict[str, Any] = {}
        bindings: List[KeywordBinding] = []

        for key, value in raw.items():
            if key in REFERENCE_KEYS:
                raise SchemaCompileError(f"unsupported keyword '{key}': schema references are not resolved")
            if key in NON_VALIDATING_KEYS:
                metadata[key] = freeze(value)
                continue

            entry = self.registry.get_entry(key)
            if entry is None:
                if self.mode == ValidationMode.STRICT:
                    raise SchemaCompileError(f"unknown keyword '{key}' in strict mode")
                if self.mode == ValidationMode.WARN:
                    logger.warning("Unknown keyword '%s' ignored", key)
                keywords[key] = freeze(value)
                continue

            keyword_compiler = self._keyword_compilers.get(key, freeze)
            typed = keyword_compiler(value)
            keywords[key] = typed
            handler, kind = entry
            bindings.append(KeywordBinding(keyword=key, value=typed, handler=handler, kind=kind))

        properties = keywords.get("properties")
        pattern_properties = keywords.get("patternProperties")
        return CompiledSchema(
            keywords=MappingProxyType(keywords),
            bindings=tuple(bindings),
            mode=self.mode,
            declared_properties=frozenset(properties) if is_object(properties) else frozenset(),
            property_patterns=(
                tuple(re.compile(pattern) for pattern in pattern_properties)
                if is_object(pattern_properties)
                else ()
            ),
            metadata=MappingProxyType(metadata),
        )

    def _nested(self, raw: Any, location: str) -> CompiledSchema:
        try:
            return self.compile_node(raw)
        except SchemaCompileError as exc:
            raise SchemaCompileError(f"failed to compile {location}: {exc}") from exc

    # ------------------------------------------------------------------
    # Keyword values
    # ------------------------------------------------------------------

    def _compile_type(self, value: Any) -> Union[str, Tuple[str, ...]]:
        if isinstance(value, str):
            if value not in JSON_TYPES:
                raise SchemaCompileError(f"invalid type value: {value}")
            return value
        if is_array(value) and value:
            names = []
            for item in value:
                if not isinstance(item, str):
                    raise SchemaCompileError(f"type array contains non-string value: {item!r}")
                if item not in JSON_TYPES:
                    raise SchemaCompileError(f"invalid type value: {item}")
                names.append(item)
            return tuple(names)
        raise SchemaCompileError(f"invalid type value: {value!r}")

    def _compile_properties(self, value: Any) -> Mapping[str, CompiledSchema]:
        if not is_object(value):
            raise SchemaCompileError(f"properties must be an object, got {_type_name(value)}")
        compiled: Dict[str, CompiledSchema] = {}
        for name, schema in value.items():
            if not is_object(schema):
                raise SchemaCompileError(f"property '{name}' must be an object, got {_type_name(schema)}")
            compiled[name] = self._nested(schema, f"property '{name}'")
        return MappingProxyType(compiled)

    def _compile_pattern_properties(self, value: Any) -> Mapping[str, CompiledSchema]:
        if not is_object(value):
            raise SchemaCompileError(f"patternProperties must be an object, got {_type_name(value)}")
        compiled: Dict[str, CompiledSchema] = {}
        for pattern, schema in value.items():
            try:
                re.compile(pattern)
            except re.error as exc:
                raise SchemaCompileError(f"invalid pattern in patternProperties: {pattern} - {exc}") from exc
            if not is_object(schema):
                raise SchemaCompileError(f"pattern property '{pattern}' must be an object")
            compiled[pattern] = self._nested(schema, f"pattern property '{pattern}'")
        return MappingProxyType(compiled)

    def _compile_additional_properties(self, value: Any) -> Union[bool, CompiledSchema]:
        if isinstance(value, bool):
            return value
        if is_object(value):
            return self._nested(value, "additionalProperties")
        raise SchemaCompileError("invalid additionalProperties value")

    def _compile_items(self, value: Any) -> Union[CompiledSchema, Tuple[CompiledSchema, ...]]:
        if is_object(value):
            return self._nested(value, "items")
        if is_array(value):
            compiled = []
            for index, schema in enumerate(value):
                if not is_object(schema):
                    raise SchemaCompileError(f"items[{index}] must be an object")
                compiled.append(self._nested(schema, f"items[{index}]"))
            return tuple(compiled)
        raise SchemaCompileError(f"invalid items value: {_type_name(value)}")

    def _compile_dependencies(self, value: Any) -> Mapping[str, Union[Tuple[str, ...], CompiledSchema]]:
        if not is_object(value):
            raise SchemaCompileError(f"dependencies must be an object, got {_type_name(value)}")
        compiled: Dict[str, Union[Tuple[str, ...], CompiledSchema]] = {}
        for name, dependency in value.items():
            if is_array(dependency):
                if not all(isinstance(item, str) for item in dependency):
                    raise SchemaCompileError(f"dependency '{name}' contains non-string field")
                compiled[name] = tuple(dependency)
            elif is_object(dependency):
                try:
                    compiled[name] = self.compile_node(dependency)
                except SchemaCompileError as exc:
                    raise SchemaCompileError(f"invalid dependency '{name}': {exc}") from exc
            else:
                raise SchemaCompileError(f"invalid dependency '{name}': must be an array or an object")
        return MappingProxyType(compiled)

    def _compile_required(self, value: Any) -> Tuple[str, ...]:
        if not is_array(value):
            raise SchemaCompileError(f"required must be an array, got {_type_name(value)}")
        for index, name in enumerate(value):
            if not isinstance(name, str):
                raise SchemaCompileError(f"required[{index}] must be a string, got {_type_name(name)}")
        return tuple(value)

    def _compile_enum(self, value: Any) -> Tuple[Any, ...]:
        if not is_array(value):
            raise SchemaCompileError(f"enum must be an array, got {_type_name(value)}")
        return freeze(value)

    def _compile_pattern(self, value: Any) -> str:
        if not isinstance(value, str):
            raise SchemaCompileError(f"invalid pattern value: expected string, got {_type_name(value)}")
        try:
            re.compile(value)
        except re.error as exc:
            raise SchemaCompileError(f"invalid pattern: {value} - {exc}") from exc
        return value

    def _compile_unique_items(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise SchemaCompileError(f"invalid uniqueItems value: expected boolean, got {_type_name(value)}")
        return value

    def _number_compiler(self, keyword: str) -> Callable[[Any], Any]:
        def compile_number(value: Any) -> Any:
            if not is_number(value):
                raise SchemaCompileError(f"invalid {keyword} value: expected number, got {_type_name(value)}")
            return value

        return compile_number

    def _count_compiler(self, keyword: str) -> Callable[[Any], int]:
        def compile_count(value: Any) -> int:
            count = to_int(value)
            if count is None:
                raise SchemaCompileError(f"invalid {keyword} value: expected integer, got {_type_name(value)}")
            if count < 0:
                raise SchemaCompileError(f"invalid {keyword} value: must be non-negative, got {count}")
            return count

        return compile_count

    def _compile_not(self, value: Any) -> CompiledSchema:
        if not is_object(value):
            raise SchemaCompileError(f"not must be an object, got {_type_name(value)}")
        if not value:
            raise SchemaCompileError("not schema cannot be empty")
        compiled = self._nested(value, "not")
        if not compiled.has_validation_keywords:
            raise SchemaCompileError("not schema must contain validation keywords")
        return compiled

    def _schema_list_compiler(self, keyword: str) -> Callable[[Any], Tuple[CompiledSchema, ...]]:
        def compile_list(value: Any) -> Tuple[CompiledSchema, ...]:
            if not is_array(value):
                raise SchemaCompileError(f"{keyword} must be an array, got {_type_name(value)}")
            if not value:
                raise SchemaCompileError(f"{keyword} cannot be empty")
            compiled = []
            for index, schema in enumerate(value):
                if not is_object(schema):
                    raise SchemaCompileError(f"{keyword}[{index}] must be an object")
                compiled.append(self._nested(schema, f"{keyword}[{index}]"))
            return tuple(compiled)

        return compile_list

    def _schema_compiler(self, keyword: str) -> Callable[[Any], CompiledSchema]:
        def compile_one(value: Any) -> CompiledSchema:
            if not is_object(value):
                raise SchemaCompileError(f"{keyword} must be an object, got {_type_name(value)}")
            return self._nested(value, keyword)

        return compile_one


def compile_schema(
    schema: Union[Schema, Mapping[str, Any]],
    registry: RuleRegistry,
    *,
    mode: Optional[ValidationMode] = None,
) -> CompiledSchema:
    """
    Compile ``schema`` (a parsed ``Schema`` or a raw mapping) using the rules in
    ``registry``. ``mode`` overrides the mode carried by a ``Schema``.
    """

    if isinstance(schema, Schema):
        raw, effective_mode = schema.raw, mode or schema.mode
    else:
        raw, effective_mode = schema, mode or ValidationMode.STRICT
    effective_mode = ValidationMode(effective_mode)
    compiled = SchemaCompiler(registry, effective_mode).compile(raw)
    logger.debug("Compiled schema with %d top-level keyword(s) in %s mode", len(compiled.bindings), effective_mode.value)
    return compiled
