"""
Merger module.

Flattens interface inheritance into merged shadow interfaces.
"""

from __future__ import annotations

from .merged_interfaces import MergedInterfaceModelsFactory, merge_properties

__all__ = [
    "MergedInterfaceModelsFactory",
    "merge_properties",
]
