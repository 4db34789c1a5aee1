"""
The ``Validator``: configuration, registries, the compiled-schema cache and
the public entry points.
"""

from __future__ import annotations

import json
from threading import Lock
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from schema_validator.compiler.compile import compile_schema
from schema_validator.compiler.parse import parse_schema
from schema_validator.errors import InvalidInputError, SchemaCompileError, SchemaParseError
from schema_validator.logger import get_logger
from schema_validator.registry.comparator_registry import CompareFunction, ComparatorRegistry
from schema_validator.registry.format_registry import FormatRegistry, default_format_registry
from schema_validator.registry.rule_registry import RuleKind, RuleRegistry
from schema_validator.rules.builtin import register_builtin_rules
from schema_validator.runtime import records
from schema_validator.runtime.engine import ValidationEngine
from schema_validator.runtime.formatting import format_errors
from schema_validator.schema.compiled import CompiledSchema, RuleFunction, Schema
from schema_validator.schema.models import (
    ErrorFormat,
    ValidationError,
    ValidationMode,
    ValidationResult,
    ValidatorOptions,
)

logger = get_logger(__name__)

SchemaSource = Union[str, bytes, Mapping[str, Any], Schema]


def _cache_key(schema: SchemaSource) -> Optional[str]:
    if isinstance(schema, Schema):
        schema = schema.source if schema.source is not None else schema.raw
    if isinstance(schema, bytes):
        return schema.decode("utf-8", errors="replace")
    if isinstance(schema, str):
        return schema
    try:
        return json.dumps(schema, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError):
        return None


class Validator:
    """
    Compiles schemas and validates values against them.

    A single instance is safe to share between threads: registries and the
    cache are lock-protected and each validation runs on its own frames.
    """

    def __init__(
        self,
        options: Optional[ValidatorOptions] = None,
        *,
        formats: Optional[FormatRegistry] = None,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = ValidatorOptions.from_settings(**overrides)
        elif overrides:
            options = ValidatorOptions.model_validate({**options.model_dump(), **overrides})
        self.options = options

        self.rules = RuleRegistry()
        register_builtin_rules(self.rules)
        self.comparators = ComparatorRegistry()
        self.formats = formats or default_format_registry
        self.engine = ValidationEngine(self.formats)

        self.custom_type_func: Optional[Callable[[Any], Any]] = None
        self.tag_name_func: Optional[Callable[[Any], Optional[str]]] = None
        self.custom_validate_func: Optional[Callable[[Any, str], bool]] = None

        self._cache: Dict[str, CompiledSchema] = {}
        self._cache_lock = Lock()

    # -------------------------------------------------------------------------
    # Registries
    # -------------------------------------------------------------------------

    def register_validator(
        self,
        name: str,
        fn: Optional[RuleFunction],
        *,
        kind: RuleKind = RuleKind.CUSTOM,
        replace: bool = True,
    ) -> None:
        """
        Register a keyword rule. Existing rules are overwritten unless
        ``replace`` is false. Cached schemas are dropped because they hold
        the previously resolved handlers.
        """
        self.rules.register(name, fn, kind=kind, replace=replace)
        self.clear_cache()

    def get_validator(self, name: str) -> Optional[RuleFunction]:
        return self.rules.get(name)

    def register_comparator(self, name: str, fn: Optional[CompareFunction], *, replace: bool = True) -> None:
        self.comparators.register(name, fn, replace=replace)

    def get_comparator(self, name: str) -> Optional[CompareFunction]:
        return self.comparators.get(name)

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def set_tag_name(self, name: str) -> None:
        self.options.tag_name = name

    def set_validation_mode(self, mode: Union[ValidationMode, str]) -> None:
        self.options.validation_mode = ValidationMode(mode)
        self.clear_cache()

    def set_error_format(self, mode: Union[ErrorFormat, str]) -> None:
        self.options.error_format = ErrorFormat(mode)

    def set_custom_type_func(self, fn: Optional[Callable[[Any], Any]]) -> None:
        self.custom_type_func = fn

    def set_tag_name_func(self, fn: Optional[Callable[[Any], Optional[str]]]) -> None:
        self.tag_name_func = fn

    def set_custom_validate_func(self, fn: Optional[Callable[[Any, str], bool]]) -> None:
        self.custom_validate_func = fn

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def _cache_get(self, key: Optional[str]) -> Optional[CompiledSchema]:
        if key is None or not self.options.enable_caching:
            return None
        with self._cache_lock:
            compiled = self._cache.get(key)
        if compiled is not None:
            logger.debug("Schema cache hit")
        return compiled

    def _cache_put(self, key: Optional[str], compiled: CompiledSchema) -> None:
        if key is None or not self.options.enable_caching:
            return
        with self._cache_lock:
            self._cache[key] = compiled

    def clear_cache(self) -> None:
        with self._cache_lock:
            for key in list(self._cache):
                del self._cache[key]
        logger.debug("Schema cache cleared")

    @property
    def cache_size(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    # -------------------------------------------------------------------------
    # Compilation
    # -------------------------------------------------------------------------

    def compile(self, schema: SchemaSource) -> CompiledSchema:
        """
        Parse and compile ``schema`` in the validator's mode, consulting the
        cache when caching is enabled.
        """
        key = _cache_key(schema)
        compiled = self._cache_get(key)
        if compiled is not None:
            return compiled

        parsed = parse_schema(schema, mode=self.options.validation_mode)
        compiled = compile_schema(parsed, self.rules, mode=self.options.validation_mode)
        self._cache_put(key, compiled)
        return compiled

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def validate(self, value: Any, compiled: CompiledSchema, *, path: str = "$") -> ValidationResult:
        return self.engine.validate(
            compiled,
            value,
            path=path,
            mode=self.options.validation_mode,
            stop_on_first_error=self.options.stop_on_first_error,
            allow_unknown_fields=self.options.allow_unknown_fields,
        )

    def validate_json(self, data: Union[str, bytes], schema: SchemaSource) -> ValidationResult:
        """
        Validate JSON text ``data`` against ``schema`` (JSON text or mapping).
        """
        if not isinstance(data, (str, bytes, bytearray)):
            raise InvalidInputError(f"invalid JSON data: expected str or bytes, got {type(data).__name__}")
        try:
            value = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidInputError(f"invalid JSON data: {exc}") from exc

        try:
            compiled = self.compile(schema)
        except SchemaParseError as exc:
            raise SchemaParseError(f"invalid schema JSON: {exc}") from exc
        except SchemaCompileError as exc:
            raise SchemaCompileError(f"failed to compile schema: {exc}") from exc
        return self.validate(value, compiled)

    def validate_with_schema(self, value: Any, schema: Mapping[str, Any], path: str = "$") -> ValidationResult:
        return self.validate(value, self.compile(schema), path=path)

    def validate_record(self, record: Any) -> None:
        records.validate_record(self, record)

    def validate_var(self, value: Any, tag: str) -> None:
        records.validate_var(self, value, tag)

    def format_errors(
        self, errors: Iterable[ValidationError], mode: Optional[Union[ErrorFormat, str]] = None
    ) -> str:
        return format_errors(errors, ErrorFormat(mode) if mode is not None else self.options.error_format)
