"""
Factory for property models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import IllegalConjunctionError, SchemaSyntaxError
from ..expression import BinaryExpressionTree, typeof
from ..models import KEYWORDS, ClassModel, Leaf, Model, PropertyModel, ValueModel
from ..registry import CompilationRegistry
from ..resolution import DisjunctiveResolver
from ..utils import parse_literal

if TYPE_CHECKING:
    from .structure_models import AnonymousInterfaceModelsFactory

_SCALAR_TYPES = (str, int, float, bool, type(None))


class PropertyModelsFactory:
    """Creates ``PropertyModel``s, resolving type expressions through the registry."""

    def __init__(self, registry: CompilationRegistry):
        self.registry = registry
        self.resolver = DisjunctiveResolver()
        # Set by AnonymousInterfaceModelsFactory, which needs this factory in turn
        self.anonymous_interfaces: AnonymousInterfaceModelsFactory | None = None

    def from_model(self, property_name: str, model: Model) -> PropertyModel:
        """
        Create a property whose type is a registered model.

        Args:
            property_name: Name of the property
            model: Referenced type or interface
        """
        return PropertyModel(name=property_name, type=BinaryExpressionTree.from_value(self._check_leaf(model)))

    def from_property_body(self, property_name: str, body: Any, inherited: PropertyModel | None = None) -> PropertyModel:
        """
        Create a property from its schema body.

        The type comes from the first of these that is present: ``constant``,
        an inline ``properties`` / ``inherits`` group (anonymous interface),
        ``type``, ``types``, the ``inherited`` property of an ancestor, the
        kind of ``default``. A constant or a scalar default must satisfy the
        declared type.

        Args:
            property_name: Name of the property
            body: Expression string or dictionary
            inherited: Same-named property of an ancestor, if any

        Returns:
            New property model

        Raises:
            SchemaSyntaxError: If the body does not define a type
            IllegalConjunctionError: If the type combines incompatible alternatives,
                or rejects the constant or default
        """
        if isinstance(body, str):
            body = {"type": body}
        if not isinstance(body, dict):
            raise SchemaSyntaxError(f"{property_name} does not have a type.")

        keywords = body.get("keywords") or []
        if not isinstance(keywords, list) or any(keyword not in KEYWORDS for keyword in keywords):
            raise SchemaSyntaxError(f"{property_name} has invalid keywords {keywords!r}; expected any of {KEYWORDS}.")
        docs = body.get("docs") or []
        if not isinstance(docs, list) or not all(isinstance(line, str) for line in docs):
            raise SchemaSyntaxError(f"{property_name} does not define docs as an array of strings.")

        has_constant = "constant" in body
        if has_constant and not isinstance(body["constant"], _SCALAR_TYPES):
            raise SchemaSyntaxError(f"{property_name} has a constant which is not a string, number, boolean or null.")
        has_default = "default" in body

        tree = self._type_tree(property_name, body, inherited)
        if has_constant:
            constant = ValueModel(body["constant"])
            if tree is not None:
                self._check_literal(constant, tree)
            tree = BinaryExpressionTree.from_value(constant)
        elif tree is None:
            tree = self._default_type_tree(property_name, body)
        # Raises IllegalConjunctionError for incompatible AND-joined alternatives
        self.resolver.disjunctive_array(tree)
        if has_default and isinstance(body["default"], _SCALAR_TYPES):
            self._check_literal(ValueModel(body["default"]), tree)

        return PropertyModel(
            name=property_name,
            type=tree,
            has_default=has_default,
            default_value=body.get("default"),
            has_constant=has_constant,
            constant_value=body.get("constant"),
            keywords=tuple(dict.fromkeys(keywords)),
            docs=tuple(docs),
        )

    def _type_tree(self, property_name: str, body: dict, inherited: PropertyModel | None) -> BinaryExpressionTree[Leaf] | None:
        """Declared type of the property, None when the body declares none."""
        if "properties" in body or "inherits" in body:
            anonymous_body = {"properties": body.get("properties", {}), "inherits": body.get("inherits", [])}
            return BinaryExpressionTree.from_value(self.anonymous_interfaces.from_anonymous_body(anonymous_body))
        if "type" in body:
            if not isinstance(body["type"], str):
                raise SchemaSyntaxError(f"{property_name} does not define its type as a string.")
            return BinaryExpressionTree.from_expression(body["type"], self.map_value)
        if "types" in body:
            groups = body["types"]
            if (
                not isinstance(groups, list)
                or not groups
                or not all(isinstance(group, list) and group and all(isinstance(name, str) for name in group) for group in groups)
            ):
                raise SchemaSyntaxError(f"{property_name} does not define types as a non-empty array of name arrays.")
            return BinaryExpressionTree.from_disjunctive_groups(groups, self.map_value)
        if inherited is not None:
            return inherited.type.clone()
        return None

    def _default_type_tree(self, property_name: str, body: dict) -> BinaryExpressionTree[Leaf]:
        if "default" in body:
            default = body["default"]
            if default is None:
                return BinaryExpressionTree.from_value(ValueModel(None))
            return BinaryExpressionTree.from_value(self.registry.get_model(typeof(default)))
        raise SchemaSyntaxError(f"{property_name} does not have a type.")

    def _check_literal(self, literal: ValueModel, tree: BinaryExpressionTree[Leaf]) -> None:
        if not self.resolver.accepts_literal(tree, literal):
            raise IllegalConjunctionError(literal, tree)

    def map_value(self, token: str) -> Leaf:
        """
        Turn an irreducible expression token into a leaf.

        Literal syntax (``'text'``, numbers, ``true``, ``false``, ``null``)
        becomes a ``ValueModel``; anything else is looked up in the registry.

        Raises:
            SchemaSyntaxError: If the token is empty or names a class
            NotFoundError: If the name is not registered
        """
        if not token:
            raise SchemaSyntaxError("A type expression contains an empty operand.")
        is_literal, value = parse_literal(token)
        if is_literal:
            return ValueModel(value)
        return self._check_leaf(self.registry.get_model(token))

    @staticmethod
    def _check_leaf(model: Model) -> Leaf:
        if isinstance(model, ClassModel):
            raise SchemaSyntaxError(f"{model.name} is a class and cannot be used as a property type.")
        return model
