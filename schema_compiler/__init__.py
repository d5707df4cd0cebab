"""Schema Compiler

A Python package compiling declarative entity schemas (interfaces, classes and
rule-based types) into TypeScript declarations with runtime creation and
validation helpers.
"""

__version__ = "1.0.0"

from .compiler import SchemaCompiler
from .config import CompilerConfig
from .errors import (
    DuplicateNameError,
    IllegalConjunctionError,
    NotFoundError,
    RuleSyntaxError,
    SchemaCompilerError,
    SchemaSyntaxError,
)

__all__ = [
    "SchemaCompiler",
    "CompilerConfig",
    "SchemaCompilerError",
    "SchemaSyntaxError",
    "RuleSyntaxError",
    "DuplicateNameError",
    "NotFoundError",
    "IllegalConjunctionError",
]
