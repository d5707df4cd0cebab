"""
Factories for language structures: interfaces, classes and their mixes.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from ..errors import DuplicateNameError, SchemaSyntaxError
from ..models import ClassModel, InterfaceModel, LanguageStructureModel, PropertyModel
from ..registry import CompilationRegistry
from ..utils import (
    class_member_name,
    class_property_name,
    interface_property_name,
    is_identifier,
    split_names,
    strip_interface_marker,
)
from .property_models import PropertyModelsFactory

logger = logging.getLogger(__name__)


class LanguageStructureModelsFactory(ABC):
    """
    Creation logic shared by interfaces and classes.

    Subclasses set ``model_class`` and ``naming_convention`` and derive
    property names from referenced structure names.
    """

    model_class: type[LanguageStructureModel] = LanguageStructureModel

    # Legacy naming convention, matched against the entity name
    naming_convention: re.Pattern = re.compile(r"^$")

    def __init__(self, registry: CompilationRegistry, property_models_factory: PropertyModelsFactory):
        self.registry = registry
        self.property_models_factory = property_models_factory

    def from_entity(self, name: str, body: Any) -> LanguageStructureModel:
        """
        Create a model from an entity body and register it.

        Args:
            name: Structure name
            body: Either an array of dependency names (one property per
                referenced model) or a dictionary with optional ``inherits``,
                ``docs`` and ``properties``

        Returns:
            The registered model

        Raises:
            SchemaSyntaxError: If the body or its properties have the wrong shape
            NotFoundError: If an ancestor or a referenced model is unknown
        """
        if isinstance(body, list):
            return self._register(name, (), self._properties_from_dependencies(name, body), ())
        if not isinstance(body, dict):
            raise SchemaSyntaxError(f"{name} defines a model not as an object or an array.")

        ancestors = tuple(self._ancestor(name, ancestor_name) for ancestor_name in body.get("inherits") or [])
        docs = body.get("docs") or []
        if not isinstance(docs, list) or not all(isinstance(line, str) for line in docs):
            raise SchemaSyntaxError(f"{name} does not define docs as an array of strings.")

        raw_properties = body.get("properties") or []
        if isinstance(raw_properties, list):
            properties = self._properties_from_dependencies(name, raw_properties)
        elif isinstance(raw_properties, dict):
            properties = []
            for key, property_body in raw_properties.items():
                property_name = self.property_name_from_key(key)
                inherited = _find_inherited_property(ancestors, property_name)
                properties.append(self.property_models_factory.from_property_body(property_name, property_body, inherited))
        else:
            raise SchemaSyntaxError(f"{name} does not define properties as an array or dictionary.")
        return self._register(name, ancestors, properties, tuple(docs))

    def from_model_schema(self, name: str, schema: Any) -> LanguageStructureModel | None:
        """
        Create a model from a legacy schema.

        Returns:
            None if the name does not follow this factory's naming convention
        """
        if not self.naming_convention.match(name):
            return None
        return self.from_entity(name, normalize_legacy_body(schema))

    @abstractmethod
    def property_name_from_dependency(self, dependency_name: str) -> str:
        """Name of a property declared by referencing another structure."""

    def property_name_from_key(self, key: str) -> str:
        """Name of a property declared as a dictionary key."""
        return key

    def _ancestor(self, name: str, ancestor_name: str) -> LanguageStructureModel:
        ancestor = self.registry.get_model(ancestor_name)
        if not isinstance(ancestor, self.model_class):
            raise SchemaSyntaxError(f"{name} inherits {ancestor_name} which is not a {self.model_class.__name__}.")
        return ancestor

    def _properties_from_dependencies(self, name: str, dependency_names: list) -> list[PropertyModel]:
        properties = []
        for dependency_name in dependency_names:
            if not isinstance(dependency_name, str):
                raise SchemaSyntaxError(f"{name} lists a dependency which is not a name: {dependency_name!r}")
            dependency = self.registry.get_model(dependency_name)
            property_name = self.property_name_from_dependency(dependency_name)
            properties.append(self.property_models_factory.from_model(property_name, dependency))
        return properties

    def _register(self, name, ancestors, properties, docs) -> LanguageStructureModel:
        seen = set()
        for prop in properties:
            if prop.name in seen:
                raise DuplicateNameError(f"{name} defines the property {prop.name} twice.")
            seen.add(prop.name)
        model = self.model_class(name=name, ancestors=tuple(ancestors), properties=tuple(properties), docs=docs)
        logger.debug("Created %s %s with properties %s", self.model_class.__name__, name, model.property_names())
        self.registry.register_model(model)
        return model


class InterfaceModelsFactory(LanguageStructureModelsFactory):
    model_class = InterfaceModel
    naming_convention = re.compile(r"^I[A-Z]")

    def property_name_from_dependency(self, dependency_name: str) -> str:
        """
        Strip the interface marker and lower-case the first character.

        Examples:
            IMyMessage -> myMessage
            MyMessage -> myMessage
        """
        return interface_property_name(dependency_name)


class ClassModelsFactory(LanguageStructureModelsFactory):
    model_class = ClassModel
    naming_convention = re.compile(r"^[A-Z][a-z]")

    def property_name_from_dependency(self, dependency_name: str) -> str:
        """
        Strip the interface marker and convert to upper snake case.

        Examples:
            IMyMessage -> MY_MESSAGE
            MyMessage -> MY_MESSAGE
        """
        return class_property_name(dependency_name)

    def property_name_from_key(self, key: str) -> str:
        name = class_member_name(key)
        if not is_identifier(name):
            raise SchemaSyntaxError(f"{key} cannot be turned into a class member name.")
        return name

    def from_entity(self, name: str, body: Any) -> ClassModel:
        if isinstance(body, dict) and len(body.get("inherits") or []) > 1:
            raise SchemaSyntaxError(f"{name} is a class and can extend at most one class.")
        return super().from_entity(name, body)


class AnonymousInterfaceModelsFactory(InterfaceModelsFactory):
    """Registers inline property groups under synthesized names."""

    def __init__(self, registry: CompilationRegistry, property_models_factory: PropertyModelsFactory, prefix: str):
        super().__init__(registry, property_models_factory)
        self.prefix = prefix
        self.next_interface_index = 0
        property_models_factory.anonymous_interfaces = self

    def from_anonymous_body(self, body: Any) -> InterfaceModel:
        """Register an inline property group and return it for embedding."""
        return self.from_entity(self.generate_anonymous_interface_name(), body)

    def generate_anonymous_interface_name(self) -> str:
        name = f"{self.prefix}{self.next_interface_index}"
        self.next_interface_index += 1
        return name


class MixModelsFactory:
    """Creates an interface and a class sharing one property schema."""

    naming_convention = re.compile(r"^X(?=[A-Z])")

    def __init__(self, interface_models_factory: InterfaceModelsFactory, class_models_factory: ClassModelsFactory):
        self.interface_models_factory = interface_models_factory
        self.class_models_factory = class_models_factory
        self.registry = interface_models_factory.registry

    def from_entity(self, name: str, body: Any) -> tuple[InterfaceModel, ClassModel]:
        """
        Register ``I<Name>`` and ``<Name>`` built from the same body.

        Ancestor names are retargeted to the matching interface or class when
        one with the derived name is registered.
        """
        interface_body, class_body = body, body
        if isinstance(body, dict) and body.get("inherits"):
            interface_body = {**body, "inherits": [self._ancestor_name(n, self.interface_name) for n in body["inherits"]]}
            class_body = {**body, "inherits": [self._ancestor_name(n, self.class_name) for n in body["inherits"]]}
        interface = self.interface_models_factory.from_entity(self.interface_name(name), interface_body)
        klass = self.class_models_factory.from_entity(self.class_name(name), class_body)
        return interface, klass

    def from_model_schema(self, name: str, schema: Any) -> tuple[InterfaceModel, ClassModel] | None:
        if not self.naming_convention.match(name):
            return None
        return self.from_entity(name, normalize_legacy_body(schema))

    def interface_name(self, name: str) -> str:
        """
        Examples:
            XMyMessage -> IMyMessage
            MyMessage -> IMyMessage
            IMyMessage -> IMyMessage
        """
        return "I" + self.class_name(name)

    def class_name(self, name: str) -> str:
        return strip_interface_marker(self.naming_convention.sub("", name))

    def _ancestor_name(self, ancestor_name: str, derive) -> str:
        derived = derive(ancestor_name)
        return derived if self.registry.has_model(derived) else ancestor_name


def normalize_legacy_body(schema: Any) -> Any:
    """Convert a legacy structure schema (comma-separated ``ancestors``) to the canonical body."""
    if not isinstance(schema, dict):
        return schema
    body = {key: value for key, value in schema.items() if key != "ancestors"}
    if "ancestors" in schema:
        body["inherits"] = split_names(schema["ancestors"])
    return body


def _find_inherited_property(ancestors, property_name: str) -> PropertyModel | None:
    for ancestor in ancestors:
        prop = ancestor.get_property(property_name)
        if prop is None:
            prop = _find_inherited_property(ancestor.ancestors, property_name)
        if prop is not None:
            return prop
    return None
