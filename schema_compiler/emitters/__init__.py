"""
Emitters module.

Contains the registry listeners turning models into TypeScript source lines.
"""

from __future__ import annotations

from .base import OutputCodeLinesFactory, create_docs
from .classes import ClassModelsOutputCodeLinesFactory
from .formatter import format_lines
from .interfaces import InterfaceModelsOutputCodeLinesFactory
from .procedures import CreationProcedureBuilder, ValidationProcedureBuilder
from .type_aliases import TypeModelsOutputCodeLinesFactory

__all__ = [
    "ClassModelsOutputCodeLinesFactory",
    "CreationProcedureBuilder",
    "InterfaceModelsOutputCodeLinesFactory",
    "OutputCodeLinesFactory",
    "TypeModelsOutputCodeLinesFactory",
    "ValidationProcedureBuilder",
    "create_docs",
    "format_lines",
]
