"""
Disjunctive resolution.

Flattens property type trees into disjunctive arrays: flat lists of the
alternative shapes (literal values, rule types, interfaces) a property may
take at runtime. AND-joined alternatives are combined by ``conjunction``,
which rejects incompatible pairs at compile time.
"""

from __future__ import annotations

from ..errors import IllegalConjunctionError
from ..expression import BinaryExpressionTree, Rule
from ..models import InterfaceModel, Leaf, PropertyModel, TypeModel, ValueModel, unique_properties


class DisjunctiveResolver:
    """Conjunction-merge rules and self-sufficiency queries."""

    def conjunction(self, left: Leaf, right: Leaf) -> Leaf:
        """
        Combine two AND-joined alternatives.

        Rules:
        - interface & interface: synthetic interface ``"A & B"`` with the
          union of both property lists (first occurrence wins)
        - type & type: identity for the same name, a combined type whose rule
          is the AND of both for the same kind, an error otherwise
        - value & value: identity for equal values, an error otherwise
        - value & type (either order): the value if the type accepts it, an
          error otherwise
        - anything else: an error

        Raises:
            IllegalConjunctionError: If the pair cannot be combined
        """
        if isinstance(left, InterfaceModel) and isinstance(right, InterfaceModel):
            return InterfaceModel(
                name=f"{left.name} & {right.name}",
                properties=tuple(unique_properties(self.properties_of(left) + self.properties_of(right))),
                merged=left.merged and right.merged,
                synthetic=True,
            )
        if isinstance(left, TypeModel) and isinstance(right, TypeModel):
            if left.name == right.name:
                return left
            if left.kind != right.kind:
                raise IllegalConjunctionError(left, right)
            return TypeModel(
                name=f"{left.name} & {right.name}",
                description=f"{left.description} & {right.description}",
                rule=Rule.conjunction(left.rule, right.rule),
                kind=left.kind,
                ancestors=tuple(dict.fromkeys(left.ancestors + right.ancestors)),
            )
        if isinstance(left, ValueModel) and isinstance(right, ValueModel):
            if left.same_value(right):
                return left
            raise IllegalConjunctionError(left, right)
        if isinstance(left, ValueModel) and isinstance(right, TypeModel):
            if right.accepts(left.value):
                return left
            raise IllegalConjunctionError(left, right)
        if isinstance(left, TypeModel) and isinstance(right, ValueModel):
            if left.accepts(right.value):
                return right
            raise IllegalConjunctionError(left, right)
        raise IllegalConjunctionError(left, right)

    def disjunctive_array(self, tree: BinaryExpressionTree[Leaf]) -> list[Leaf]:
        """Flatten a property type tree into its list of alternatives."""
        return tree.to_disjunctive_array(self.conjunction)

    def accepts_literal(self, tree: BinaryExpressionTree[Leaf], literal: ValueModel) -> bool:
        """Whether the literal can be AND-joined with at least one alternative of the tree."""
        for alternative in self.disjunctive_array(tree):
            try:
                self.conjunction(literal, alternative)
            except IllegalConjunctionError:
                continue
            return True
        return False

    def properties_of(self, interface: InterfaceModel) -> list[PropertyModel]:
        """Own properties followed by inherited ones; the most derived definition wins."""
        properties = list(interface.properties)
        for ancestor in interface.ancestors:
            properties.extend(self.properties_of(ancestor))
        return unique_properties(properties)

    def is_self_sufficient(self, prop: PropertyModel) -> bool:
        """
        Whether a value can be synthesized for the property without any input.

        True when the property has a default or a constant, or when one of its
        alternatives is a literal or a self-sufficient interface.
        """
        if prop.has_default or prop.has_constant:
            return True
        for alternative in self.disjunctive_array(prop.type):
            if isinstance(alternative, ValueModel):
                return True
            if isinstance(alternative, InterfaceModel) and self.is_interface_self_sufficient(alternative):
                return True
        return False

    def can_be_omitted(self, prop: PropertyModel) -> bool:
        return prop.is_optional or self.is_self_sufficient(prop)

    def is_interface_self_sufficient(self, interface: InterfaceModel) -> bool:
        return all(self.can_be_omitted(prop) for prop in self.properties_of(interface))

    def find_self_sufficient_interface(self, alternatives: list[Leaf]) -> InterfaceModel | None:
        for alternative in alternatives:
            if isinstance(alternative, InterfaceModel) and self.is_interface_self_sufficient(alternative):
                return alternative
        return None

    def required_property_names(self, interface: InterfaceModel) -> list[str]:
        """Names of the properties a caller must supply for this interface."""
        return [prop.name for prop in self.properties_of(interface) if not self.can_be_omitted(prop)]
