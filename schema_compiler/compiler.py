"""
Schema compiler entry point.

Wires one registry per compilation with the factories, the merge engine and
the output emitters, then feeds the schema entities through them in order.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import CompilerConfig
from .emitters import (
    ClassModelsOutputCodeLinesFactory,
    InterfaceModelsOutputCodeLinesFactory,
    TypeModelsOutputCodeLinesFactory,
    format_lines,
)
from .errors import SchemaSyntaxError
from .factories import (
    AnonymousInterfaceModelsFactory,
    ClassModelsFactory,
    InterfaceModelsFactory,
    MixModelsFactory,
    PropertyModelsFactory,
    TypeModelsFactory,
)
from .merger import MergedInterfaceModelsFactory
from .registry import CompilationRegistry, RegistryEvent

logger = logging.getLogger(__name__)

ENTITY_TAGS = ("interface", "class", "type")


class SchemaCompiler:
    """Compiles a schema into TypeScript source lines."""

    def __init__(self, config: CompilerConfig | None = None):
        self.config = config or CompilerConfig()

    def compile_schema(self, schema: dict[str, Any]) -> list[str]:
        """
        Compile a schema.

        Entities are processed in schema order, so every ancestor and every
        referenced model must appear before the entities using it.

        Args:
            schema: Mapping from entity name to entity body

        Returns:
            Formatted source lines, one contiguous block per emitted model

        Raises:
            SchemaCompilerError: On the first error; no partial output is returned
        """
        if not isinstance(schema, dict):
            raise SchemaSyntaxError("A schema must be a dictionary of entities.")
        compilation = _Compilation(self.config)
        for name, body in schema.items():
            compilation.compile_entity(name, body)
        logger.debug("Compiled %d entities into %d lines", len(schema), len(compilation.output))
        return compilation.output


class _Compilation:
    """State of a single compilation run."""

    def __init__(self, config: CompilerConfig):
        self.config = config
        self.output: list[str] = []
        self.registry = CompilationRegistry()
        self.registry.on(RegistryEvent.OUTPUT_CODE_LINES_REGISTERED, self._collect)
        self.registry.on(RegistryEvent.OUTPUT_CODE_LINES_REGISTERED, _log_lines)

        self.types = TypeModelsFactory(self.registry)
        self.types.register_builtin_types()

        property_models = PropertyModelsFactory(self.registry)
        AnonymousInterfaceModelsFactory(self.registry, property_models, config.anonymous_interface_prefix)
        self.interfaces = InterfaceModelsFactory(self.registry, property_models)
        self.classes = ClassModelsFactory(self.registry, property_models)
        self.mixes = MixModelsFactory(self.interfaces, self.classes)

        # Interface blocks precede their merged counterparts
        merger = MergedInterfaceModelsFactory(self.registry, config)
        TypeModelsOutputCodeLinesFactory(self.registry, config).subscribe()
        InterfaceModelsOutputCodeLinesFactory(self.registry, config).subscribe()
        merger.subscribe()
        ClassModelsOutputCodeLinesFactory(self.registry, config, merger).subscribe()

    def compile_entity(self, name: str, body: Any) -> None:
        if not isinstance(name, str) or not name:
            raise SchemaSyntaxError(f"Entity names must be non-empty strings, got {name!r}.")
        if isinstance(body, dict) and "types" in body:
            self._compile_tagged_entity(name, body)
        elif self.config.legacy_naming_conventions:
            self._compile_legacy_entity(name, body)
        else:
            raise SchemaSyntaxError(f"{name} does not declare its types.")

    def _compile_tagged_entity(self, name: str, body: dict) -> None:
        tags = body["types"]
        if not isinstance(tags, list) or not tags or any(tag not in ENTITY_TAGS for tag in tags):
            raise SchemaSyntaxError(f"{name} declares invalid types {tags!r}; expected any of {ENTITY_TAGS}.")
        tags = set(tags)
        if "type" in tags:
            if len(tags) > 1:
                raise SchemaSyntaxError(f"{name} cannot be a type and a language structure at once.")
            self.types.from_entity(name, body)
        elif tags == {"interface", "class"}:
            self.mixes.from_entity(name, body)
        elif "interface" in tags:
            self.interfaces.from_entity(name, body)
        else:
            self.classes.from_entity(name, body)

    def _compile_legacy_entity(self, name: str, schema: Any) -> None:
        for factory in (self.types, self.interfaces, self.classes, self.mixes):
            if factory.from_model_schema(name, schema) is not None:
                return
        logger.warning("%s does not follow any naming convention and is skipped", name)

    def _collect(self, lines: list[str]) -> None:
        self.output.extend(format_lines(lines, self.config.indent_size))


def _log_lines(lines: list[str]) -> None:
    for line in lines:
        logger.debug("| %s", line)
