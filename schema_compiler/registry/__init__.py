"""
Registry module.

Contains the per-compilation model registry and its events.
"""

from __future__ import annotations

from .registry import CompilationRegistry, RegistryEvent

__all__ = [
    "CompilationRegistry",
    "RegistryEvent",
]
