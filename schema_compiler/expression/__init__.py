"""
Expression module.

Contains the binary expression tree used for property types and the rule DSL
used by rule-based types.
"""

from __future__ import annotations

from .rules import UNDEFINED, Rule, typeof
from .tree import BinaryExpressionTree, Node, Operator

__all__ = [
    "BinaryExpressionTree",
    "Node",
    "Operator",
    "Rule",
    "UNDEFINED",
    "typeof",
]
