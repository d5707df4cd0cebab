"""
Type aliases for rule-based types.
"""

from __future__ import annotations

from ..models import TypeModel
from ..registry import RegistryEvent
from .base import OutputCodeLinesFactory


class TypeModelsOutputCodeLinesFactory(OutputCodeLinesFactory):
    """Emits ``export type TName = kind;`` so type names can be used in declarations."""

    def subscribe(self) -> None:
        if self.config.emit_type_aliases:
            self.registry.on(RegistryEvent.MODEL_REGISTERED, self.process_model)

    def process_model(self, model) -> None:
        if isinstance(model, TypeModel) and not model.builtin:
            self.emit(self.create_output_code_lines(model))

    def create_output_code_lines(self, model: TypeModel) -> list[str]:
        docs = [model.description, *model.docs, f"Rule: {model.effective_rule}"]
        return self.render("type_alias", name=model.name, kind=model.kind, docs=docs)
