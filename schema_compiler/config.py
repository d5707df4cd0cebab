"""
Configuration for the schema compiler.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CompilerConfig:
    """Configuration options for compilation."""

    # Suffix appended to an interface name to name its merged counterpart
    merged_interface_suffix: str = "Merged"

    # Prefix of the synthetic names given to inline property groups
    anonymous_interface_prefix: str = "IAnonymousInterface"

    # Number of spaces per brace level in the formatted output
    indent_size: int = 4

    # Emit the merged shadow interfaces alongside the original ones
    emit_merged_interfaces: bool = True

    # Emit `export type` aliases for rule-based types
    emit_type_aliases: bool = True

    # Accept entities without `types` tags and dispatch on their name prefix
    legacy_naming_conventions: bool = True

    # Add generation comment at top of file (CLI only)
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> CompilerConfig:
        """Create a config from a dictionary."""
        config = CompilerConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "merged_interface_suffix": self.merged_interface_suffix,
            "anonymous_interface_prefix": self.anonymous_interface_prefix,
            "indent_size": self.indent_size,
            "emit_merged_interfaces": self.emit_merged_interfaces,
            "emit_type_aliases": self.emit_type_aliases,
            "legacy_naming_conventions": self.legacy_naming_conventions,
            "add_generation_comment": self.add_generation_comment,
        }

    def merged_name(self, interface_name: str) -> str:
        """Name of the merged counterpart of an interface."""
        return f"{interface_name}{self.merged_interface_suffix}"
