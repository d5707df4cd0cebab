"""
Base class for output code line factories.

Output factories are registry listeners: when a model they handle is
registered they render its source block and broadcast it with
``CompilationRegistry.register_output_code_lines``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..config import CompilerConfig
from ..registry import CompilationRegistry


class OutputCodeLinesFactory(ABC):
    """Renders source blocks from jinja2 templates."""

    # Template directory name
    TEMPLATE_LANG: str = "typescript"

    # File extension
    FILE_EXTENSION: str = "ts"

    def __init__(self, registry: CompilationRegistry, config: CompilerConfig):
        """
        Initialize the factory.

        Args:
            registry: Registry of the current compilation
            config: Compiler configuration
        """
        self.registry = registry
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.jinja_env.filters["docs"] = create_docs

    @abstractmethod
    def subscribe(self) -> None:
        """Subscribe to the registry events this factory handles."""

    def render(self, template_name: str, **context: Any) -> list[str]:
        """Render a template and split it into lines."""
        template = self.jinja_env.get_template(f"{template_name}.{self.FILE_EXTENSION}.jinja2")
        return template.render(**context).split("\n")

    def emit(self, lines: list[str]) -> None:
        self.registry.register_output_code_lines(lines)


def create_docs(docs) -> list[str]:
    """
    Documentation comment lines.

    Example:
        ["My description"] -> ["/**", " * My description", " */"]
    """
    if not docs:
        return []
    return ["/**", *(f" * {line}" for line in docs), " */"]
