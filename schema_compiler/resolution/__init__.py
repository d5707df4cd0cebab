"""
Resolution module.

Flattens property types into alternatives and discriminates interface shapes.
"""

from __future__ import annotations

from .classifier import Discriminator, InterfaceClassifier, order_alternatives
from .disjunctive import DisjunctiveResolver

__all__ = [
    "DisjunctiveResolver",
    "Discriminator",
    "InterfaceClassifier",
    "order_alternatives",
]
