"""
Model definitions.

Models are the resolved, in-memory form of schema entities. They are
registered once in the compilation registry and never mutated afterwards;
derived variants (merged interfaces, substituted property types) are built
with ``clone`` / ``dataclasses.replace``.

The leaves of a property type tree form a closed set of model kinds:
``TypeModel | InterfaceModel | ValueModel``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Union

from ..expression.rules import Rule
from ..expression.tree import BinaryExpressionTree
from ..utils import to_typescript_literal

OPTIONAL = "optional"
WRITABLE = "writable"
KEYWORDS = (OPTIONAL, WRITABLE)


@dataclass(frozen=True, eq=False)
class TypeModel:
    """A primitive type narrowed by a boolean rule over ``value``."""

    name: str = ""
    description: str = ""
    rule: Rule | None = None

    # Primitive kind: "string", "number", "boolean", "object", ...
    kind: str = ""

    ancestors: tuple[TypeModel, ...] = ()
    docs: tuple[str, ...] = ()

    # Built-in types resolve bare primitive names and produce no output
    builtin: bool = False

    @property
    def effective_rule(self) -> Rule:
        """The own rule combined with the rules of every ancestor."""
        rule = self.rule
        for ancestor in self.ancestors:
            rule = Rule.conjunction(ancestor.effective_rule, rule)
        return rule

    def accepts(self, value: Any) -> bool:
        """Evaluate the effective rule for a literal value."""
        return self.effective_rule.evaluate(value)

    def clone(self) -> TypeModel:
        return replace(self)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class ValueModel:
    """A literal value (string, number, boolean or null)."""

    value: Any = None

    def to_source(self) -> str:
        return to_typescript_literal(self.value)

    def same_value(self, other: ValueModel) -> bool:
        if _is_number(self.value) and _is_number(other.value):
            return self.value == other.value
        # True == 1 in Python but not in the generated code
        return type(self.value) is type(other.value) and self.value == other.value

    def clone(self) -> ValueModel:
        return replace(self)

    def __str__(self) -> str:
        return self.to_source()


@dataclass(frozen=True, eq=False)
class PropertyModel:
    """A property of a language structure."""

    name: str = ""

    # Tree whose leaves are TypeModel, InterfaceModel or ValueModel
    type: BinaryExpressionTree[Leaf] | None = None

    # Check the has_* flag first: None is a valid default or constant
    has_default: bool = False
    default_value: Any = None
    has_constant: bool = False
    constant_value: Any = None

    keywords: tuple[str, ...] = ()
    docs: tuple[str, ...] = ()

    @property
    def is_optional(self) -> bool:
        return OPTIONAL in self.keywords

    @property
    def is_writable(self) -> bool:
        return WRITABLE in self.keywords

    def with_keywords(self, *keywords: str) -> PropertyModel:
        """Copy of the property with the keywords added (order kept, no duplicates)."""
        merged = list(self.keywords)
        for keyword in keywords:
            if keyword not in merged:
                merged.append(keyword)
        return replace(self, keywords=tuple(merged))

    def clone(self) -> PropertyModel:
        return replace(self, type=self.type.clone() if self.type else None)


@dataclass(frozen=True, eq=False)
class LanguageStructureModel:
    """Shared shape of interfaces and classes."""

    name: str = ""
    ancestors: tuple[LanguageStructureModel, ...] = ()
    properties: tuple[PropertyModel, ...] = ()
    docs: tuple[str, ...] = ()

    def property_names(self) -> list[str]:
        return [prop.name for prop in self.properties]

    def get_property(self, name: str) -> PropertyModel | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def clone(self) -> LanguageStructureModel:
        return replace(self, properties=tuple(prop.clone() for prop in self.properties))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class InterfaceModel(LanguageStructureModel):
    """An interface: a structural declaration with one field per property."""

    # True for the flattened shadow produced by the merge engine
    merged: bool = False

    # Name of the interface a merged shadow was derived from
    declared_name: str = ""

    # True for interfaces synthesized by conjunction (never registered)
    synthetic: bool = False


@dataclass(frozen=True, eq=False)
class ClassModel(LanguageStructureModel):
    """A class: one static create/validate member per property."""

    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


Leaf = Union[TypeModel, InterfaceModel, ValueModel]
Model = Union[TypeModel, InterfaceModel, ClassModel]


def unique_properties(properties: list[PropertyModel]) -> list[PropertyModel]:
    """Drop properties whose name was already seen; the first occurrence wins."""
    known_names = set()
    unique = []
    for prop in properties:
        if prop.name not in known_names:
            known_names.add(prop.name)
            unique.append(prop)
    return unique

