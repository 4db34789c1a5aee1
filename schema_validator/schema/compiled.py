"""
In-memory forms of a schema: the parsed raw document and the compiled
constraint tree built from it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Mapping, Optional, Tuple

from schema_validator.schema.models import ValidationMode

if TYPE_CHECKING:
    from schema_validator.registry.rule_registry import RuleKind
    from schema_validator.rules.frame import EvaluationFrame


RuleFunction = Callable[["EvaluationFrame", Any, Any, str], bool]


@dataclass(frozen=True)
class Schema:
    """A parsed but not yet compiled schema document."""

    raw: Mapping[str, Any]
    mode: ValidationMode = ValidationMode.STRICT
    source: Optional[str] = None

    @property
    def schema_id(self) -> Optional[str]:
        value = self.raw.get("$id")
        return value if isinstance(value, str) else None

    @property
    def title(self) -> Optional[str]:
        value = self.raw.get("title")
        return value if isinstance(value, str) else None

    @property
    def description(self) -> Optional[str]:
        value = self.raw.get("description")
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class KeywordBinding:
    keyword: str
    value: Any
    handler: RuleFunction
    kind: "RuleKind"


@dataclass(frozen=True)
class CompiledSchema:
    """
    Executable constraint tree node.

    ``keywords`` holds every typed keyword value (including unknown keywords
    kept in loose/warn mode); ``bindings`` holds only the keywords that have a
    handler, in document order. ``declared_properties`` and
    ``property_patterns`` are the sibling ``properties`` names and compiled
    ``patternProperties`` keys consumed by ``additionalProperties``.
    """

    keywords: Mapping[str, Any]
    bindings: Tuple[KeywordBinding, ...] = ()
    mode: ValidationMode = ValidationMode.STRICT
    declared_properties: FrozenSet[str] = frozenset()
    property_patterns: Tuple[re.Pattern, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def get(self, keyword: str, default: Any = None) -> Any:
        return self.keywords.get(keyword, default)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self.keywords

    def binding(self, keyword: str) -> Optional[KeywordBinding]:
        for item in self.bindings:
            if item.keyword == keyword:
                return item
        return None

    @property
    def has_validation_keywords(self) -> bool:
        return bool(self.bindings)

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get("title")

    @property
    def schema_id(self) -> Optional[str]:
        return self.metadata.get("$id")
