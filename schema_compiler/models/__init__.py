"""
Models module.

Contains the resolved model kinds stored in the compilation registry.
"""

from __future__ import annotations

from .nodes import (
    KEYWORDS,
    OPTIONAL,
    WRITABLE,
    ClassModel,
    InterfaceModel,
    LanguageStructureModel,
    Leaf,
    Model,
    PropertyModel,
    TypeModel,
    ValueModel,
    unique_properties,
)

__all__ = [
    "ClassModel",
    "InterfaceModel",
    "KEYWORDS",
    "LanguageStructureModel",
    "Leaf",
    "Model",
    "OPTIONAL",
    "PropertyModel",
    "TypeModel",
    "ValueModel",
    "WRITABLE",
    "unique_properties",
]
