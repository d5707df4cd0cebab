"""
Factories module.

Contains the factories turning raw schema fragments into registered models.
"""

from __future__ import annotations

from .property_models import PropertyModelsFactory
from .structure_models import (
    AnonymousInterfaceModelsFactory,
    ClassModelsFactory,
    InterfaceModelsFactory,
    LanguageStructureModelsFactory,
    MixModelsFactory,
)
from .type_models import BUILTIN_TYPES, TypeModelsFactory

__all__ = [
    "AnonymousInterfaceModelsFactory",
    "BUILTIN_TYPES",
    "ClassModelsFactory",
    "InterfaceModelsFactory",
    "LanguageStructureModelsFactory",
    "MixModelsFactory",
    "PropertyModelsFactory",
    "TypeModelsFactory",
]
