"""
Interface declarations.
"""

from __future__ import annotations

from ..models import InterfaceModel
from ..registry import RegistryEvent
from ..utils import property_key
from .base import OutputCodeLinesFactory


class InterfaceModelsOutputCodeLinesFactory(OutputCodeLinesFactory):
    """Emits an ``export interface`` block for every interface, merged ones included."""

    def subscribe(self) -> None:
        self.registry.on(RegistryEvent.MODEL_REGISTERED, self.process_model)
        if self.config.emit_merged_interfaces:
            self.registry.on(RegistryEvent.MODEL_REGISTERED_SILENTLY, self.process_model)

    def process_model(self, model) -> None:
        if isinstance(model, InterfaceModel):
            self.emit(self.create_output_code_lines(model))

    def create_output_code_lines(self, model: InterfaceModel) -> list[str]:
        properties = [
            {
                "key": property_key(prop.name),
                "type": str(prop.type),
                "optional": prop.is_optional,
                "writable": prop.is_writable,
                "docs": prop.docs,
            }
            for prop in model.properties
        ]
        return self.render(
            "interface",
            name=model.name,
            ancestors=[ancestor.name for ancestor in model.ancestors],
            properties=properties,
            docs=model.docs,
        )
