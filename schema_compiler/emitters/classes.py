"""
Class declarations with static ``create`` / ``validate`` members.
"""

from __future__ import annotations

import logging

from ..config import CompilerConfig
from ..merger import MergedInterfaceModelsFactory
from ..models import ClassModel, PropertyModel
from ..registry import CompilationRegistry, RegistryEvent
from ..resolution import DisjunctiveResolver
from .base import OutputCodeLinesFactory
from .procedures import CreationProcedureBuilder, ValidationProcedureBuilder

logger = logging.getLogger(__name__)


class ClassModelsOutputCodeLinesFactory(OutputCodeLinesFactory):
    """Emits an ``export class`` block with one static member per property."""

    def __init__(self, registry: CompilationRegistry, config: CompilerConfig, merger: MergedInterfaceModelsFactory):
        super().__init__(registry, config)
        self.merger = merger
        self.resolver = DisjunctiveResolver()
        self.creation = CreationProcedureBuilder(self.resolver)
        self.validation = ValidationProcedureBuilder(self.resolver)

    def subscribe(self) -> None:
        self.registry.on(RegistryEvent.MODEL_REGISTERED, self.process_model)

    def process_model(self, model) -> None:
        if isinstance(model, ClassModel):
            self.emit(self.create_output_code_lines(model))

    def create_output_code_lines(self, model: ClassModel) -> list[str]:
        members = [self._member(model, prop) for prop in model.properties]
        return self.render(
            "class",
            name=model.name,
            ancestor=model.ancestors[0].name if model.ancestors else None,
            members=members,
            docs=model.docs,
        )

    def _member(self, model: ClassModel, prop: PropertyModel) -> dict:
        # Creation code works on flat interfaces only
        resolved = self.merger.retarget(prop)
        alternatives = self.resolver.disjunctive_array(resolved.type)
        self_sufficient = self.resolver.is_self_sufficient(resolved)
        label = f"{model.name}.{prop.name}"
        logger.debug("Resolved %s into %d alternatives: %s", label, len(alternatives), [str(a) for a in alternatives])

        return_type = str(prop.type)
        if prop.is_optional and not self_sufficient:
            return_type = f"{return_type} | undefined"
        return {
            "name": prop.name,
            "docs": prop.docs,
            "omittable": self_sufficient or prop.is_optional,
            "argument_type": self.creation.argument_type(alternatives),
            "return_type": return_type,
            "create_lines": self.creation.build(resolved, label),
            "validate_lines": self.validation.build(resolved, label),
        }
