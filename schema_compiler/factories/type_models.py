"""
Factory for rule-based type models.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..errors import SchemaSyntaxError
from ..expression import Rule
from ..models import TypeModel
from ..registry import CompilationRegistry
from ..utils import split_names

logger = logging.getLogger(__name__)

# Legacy naming convention: "T" followed by an uppercase letter
TYPE_NAME = re.compile(r"^T[A-Z]")

# name -> (rule, kind) of the types every compilation knows about
BUILTIN_TYPES = {
    "string": ("typeof value === 'string'", "string"),
    "number": ("typeof value === 'number'", "number"),
    "boolean": ("typeof value === 'boolean'", "boolean"),
    "object": ("typeof value === 'object' && value !== null", "object"),
    "unknown": ("true", "unknown"),
    "any": ("true", "any"),
}


class TypeModelsFactory:
    """Creates ``TypeModel``s and registers them."""

    def __init__(self, registry: CompilationRegistry):
        self.registry = registry

    def register_builtin_types(self) -> None:
        """Register the built-in primitive types without notifying emitters."""
        for name, (rule, kind) in BUILTIN_TYPES.items():
            model = TypeModel(name=name, description=name, rule=Rule.parse(rule), kind=kind, builtin=True)
            self.registry.register_model_silently(model)

    def from_entity(self, name: str, body: Any) -> TypeModel:
        """
        Create a type model from an entity body and register it.

        Args:
            name: Type name
            body: Dictionary with ``description``, ``rule``, ``kind`` and
                optional ``inherits`` / ``docs``

        Returns:
            The registered model

        Raises:
            SchemaSyntaxError: If a required string field is missing
            NotFoundError: If an ancestor is not registered
        """
        if not isinstance(body, dict):
            raise SchemaSyntaxError(f"{name} defines a type not as an object.")
        for field_name in ("description", "rule", "kind"):
            if not isinstance(body.get(field_name), str) or not body[field_name]:
                raise SchemaSyntaxError(f"{name} does not define `{field_name}` as a non-empty string.")

        ancestors = []
        for ancestor_name in body.get("inherits") or []:
            ancestor = self.registry.get_model(ancestor_name)
            if not isinstance(ancestor, TypeModel):
                raise SchemaSyntaxError(f"{name} inherits {ancestor_name} which is not a type.")
            ancestors.append(ancestor)

        model = TypeModel(
            name=name,
            description=body["description"],
            rule=Rule.parse(body["rule"]),
            kind=body["kind"],
            ancestors=tuple(ancestors),
            docs=tuple(_docs(name, body)),
        )
        logger.debug("Created TypeModel %s with rule %s", name, model.rule)
        self.registry.register_model(model)
        return model

    def from_model_schema(self, name: str, schema: Any) -> TypeModel | None:
        """
        Create a type model from a legacy schema.

        The legacy shape names the primitive kind ``type`` and lists ancestors
        as a comma-separated string.

        Returns:
            None if the name does not follow the type naming convention
        """
        if not TYPE_NAME.match(name):
            return None
        if not isinstance(schema, dict):
            raise SchemaSyntaxError(f"{name} defines a type not as an object.")
        body = {
            "description": schema.get("description"),
            "rule": schema.get("rule"),
            "kind": schema.get("kind", schema.get("type")),
            "inherits": split_names(schema.get("ancestors", schema.get("inherits"))),
            "docs": schema.get("docs", []),
        }
        return self.from_entity(name, body)


def _docs(name: str, body: dict) -> list[str]:
    docs = body.get("docs") or []
    if not isinstance(docs, list) or not all(isinstance(line, str) for line in docs):
        raise SchemaSyntaxError(f"{name} does not define docs as an array of strings.")
    return docs
