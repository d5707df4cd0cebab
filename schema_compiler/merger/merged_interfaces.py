"""
Merge engine.

For every registered interface, derives a flat "merged" shadow interface with
no ancestors. Class creation code works on merged interfaces only, so it never
needs to walk an inheritance chain.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import CompilerConfig
from ..models import OPTIONAL, InterfaceModel, Leaf, PropertyModel, unique_properties
from ..registry import CompilationRegistry, RegistryEvent

logger = logging.getLogger(__name__)


class MergedInterfaceModelsFactory:
    """Registry listener registering ``<Name>Merged`` for every interface."""

    def __init__(self, registry: CompilationRegistry, config: CompilerConfig):
        self.registry = registry
        self.config = config

    def subscribe(self) -> None:
        self.registry.on(RegistryEvent.MODEL_REGISTERED, self.on_model_registered)

    def on_model_registered(self, model) -> None:
        if isinstance(model, InterfaceModel) and not model.merged:
            self.registry.register_model_silently(self.from_interface(model))

    def from_interface(self, interface: InterfaceModel) -> InterfaceModel:
        """
        Build the merged counterpart of an interface.

        Steps:
        1. Retarget interface references in property types to merged interfaces
        2. Append the merged properties of every ancestor, in declared order,
           after the own properties; on collision the child's property wins but
           keywords are unioned and a default or constant defined only by the
           ancestor is carried over
        3. Mark every property with a default as optional
        4. Drop the ancestors

        Args:
            interface: A registered interface

        Returns:
            The merged interface (not registered)

        Raises:
            NotFoundError: If a merged ancestor or referenced interface is missing
        """
        own_properties = [self.retarget(prop) for prop in interface.properties]

        inherited: list[PropertyModel] = []
        for ancestor in interface.ancestors:
            merged_ancestor = self.registry.get_model(self.config.merged_name(ancestor.name))
            inherited = unique_properties(inherited + list(merged_ancestor.properties))

        inherited_by_name = {prop.name: prop for prop in inherited}
        properties = [
            merge_properties(inherited_by_name[prop.name], prop) if prop.name in inherited_by_name else prop
            for prop in own_properties
        ]
        # Most derived first; inherited duplicates are dropped by unique_properties
        properties.extend(inherited)
        properties = [prop.with_keywords(OPTIONAL) if prop.has_default else prop for prop in properties]

        merged = InterfaceModel(
            name=self.config.merged_name(interface.name),
            ancestors=(),
            properties=tuple(unique_properties(properties)),
            docs=interface.docs,
            merged=True,
            declared_name=interface.name,
        )
        logger.debug("Merged %s into %s with %d properties", interface.name, merged.name, len(merged.properties))
        return merged

    def retarget(self, prop: PropertyModel) -> PropertyModel:
        """Copy of the property whose interface leaves point to merged interfaces."""
        return replace(prop, type=prop.type.map(self._merged_leaf))

    def _merged_leaf(self, leaf: Leaf) -> Leaf:
        if isinstance(leaf, InterfaceModel) and not leaf.merged:
            return self.registry.get_model(self.config.merged_name(leaf.name))
        return leaf


def merge_properties(ancestor: PropertyModel, child: PropertyModel) -> PropertyModel:
    """
    Merge a child property over the same-named ancestor property.

    The child's type and docs win; keywords are unioned (ancestor's first); a
    default or constant only the ancestor defines is kept.
    """
    merged = replace(
        child,
        keywords=tuple(dict.fromkeys(ancestor.keywords + child.keywords)),
        docs=child.docs or ancestor.docs,
    )
    if ancestor.has_default and not child.has_default:
        merged = replace(merged, has_default=True, default_value=ancestor.default_value)
    if ancestor.has_constant and not child.has_constant:
        merged = replace(merged, has_constant=True, constant_value=ancestor.constant_value)
    return merged
