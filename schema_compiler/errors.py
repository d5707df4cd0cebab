"""
Errors raised while compiling a schema.

Every error aborts the whole compilation: nothing is recovered and no
partial output is returned to the caller.
"""

from __future__ import annotations


class SchemaCompilerError(Exception):
    """Base class for all compile-time errors."""

    pass


class SchemaSyntaxError(SchemaCompilerError):
    """Raised when a schema fragment has the wrong shape.

    This can happen when:
    - An entity defines its body neither as an array nor as a dictionary
    - Properties are neither an array nor a dictionary
    - A property does not declare a type, a constant or a default
    - A type entity is missing one of its required string fields
    """

    pass


class RuleSyntaxError(SchemaSyntaxError):
    """Raised when a type rule cannot be parsed by the rule DSL."""

    pass


class DuplicateNameError(SchemaCompilerError):
    """Raised when a model name is registered twice in one compilation."""

    pass


class NotFoundError(SchemaCompilerError):
    """Raised when an ancestor, type, interface or model name is unknown."""

    pass


class IllegalConjunctionError(SchemaCompilerError):
    """Raised when two alternatives joined with ``&`` cannot be combined."""

    def __init__(self, left: object, right: object):
        self.left = left
        self.right = right
        super().__init__(f"Illegal conjunction of {left} and {right}")
