"""
Utility functions for naming conventions used by the schema compiler.
"""

import math
import re

# A leading "I" followed by an uppercase letter marks an interface name
_INTERFACE_MARKER = re.compile(r"^I(?=[A-Z])")

# Split points in front of every capital letter
_CAPITAL_BOUNDARY = re.compile(r"(?=[A-Z])")

# Literal forms accepted inside type expressions
_STRING_LITERAL = re.compile(r"^'(.*)'$", re.DOTALL)
_NUMBER_LITERAL = re.compile(r"^-?\d+(\.\d+)?$")

_UPPER_SNAKE = re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)*$")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def strip_interface_marker(name: str) -> str:
    """Remove a leading ``I`` interface marker.

    Examples:
        "IMyMessage" -> "MyMessage"
        "MyMessage" -> "MyMessage"
        "Item" -> "Item"
    """
    return _INTERFACE_MARKER.sub("", name)


def lower_first(text: str) -> str:
    """Lower-case the first character of ``text``."""
    return text[:1].lower() + text[1:]


def to_upper_snake_case(text: str) -> str:
    """Split on capital-letter boundaries and join the upper-cased parts with underscores.

    Examples:
        "myProperty" -> "MY_PROPERTY"
        "MyMessage" -> "MY_MESSAGE"
        "HOST" -> "H_O_S_T"

    Args:
        text: A camelCase or PascalCase name

    Returns:
        UPPER_SNAKE_CASE string
    """
    words = [word for word in _CAPITAL_BOUNDARY.split(text) if word]
    return "_".join(words).upper()


def interface_property_name(dependency_name: str) -> str:
    """Derive an interface property name from a referenced structure name."""
    return lower_first(strip_interface_marker(dependency_name))


def class_property_name(dependency_name: str) -> str:
    """Derive a class property name from a referenced structure name."""
    return to_upper_snake_case(strip_interface_marker(dependency_name))


def class_member_name(key: str) -> str:
    """Derive a class member name from a property key.

    Keys already written in UPPER_SNAKE_CASE are kept as they are.

    Examples:
        "myProperty" -> "MY_PROPERTY"
        "MY_PROPERTY" -> "MY_PROPERTY"
    """
    if _UPPER_SNAKE.match(key):
        return key
    return to_upper_snake_case(key)


def member_access(path: str, name: str) -> str:
    """Render a property access on ``path``, quoting names that are not identifiers."""
    if _IDENTIFIER.match(name):
        return f"{path}.{name}"
    return f"{path}[{to_typescript_literal(name)}]"


def split_names(names: object) -> list[str]:
    """Normalize a comma-separated string or a list of names to a list of names."""
    if names is None:
        return []
    if isinstance(names, str):
        return [name.strip() for name in names.split(",") if name.strip()]
    return list(names)


def parse_literal(token: str) -> tuple[bool, object]:
    """Recognize literal syntax inside a type expression.

    Returns:
        A ``(is_literal, value)`` pair. ``value`` is meaningful only when
        ``is_literal`` is true.
    """
    match = _STRING_LITERAL.match(token)
    if match:
        return True, match.group(1)
    if _NUMBER_LITERAL.match(token):
        return True, float(token) if "." in token else int(token)
    if token in ("true", "false"):
        return True, token == "true"
    if token == "null":
        return True, None
    return False, None


def to_typescript_literal(value: object) -> str:
    """Render a Python value as a TypeScript source literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
        return f"'{escaped}'"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_typescript_literal(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(f"{property_key(str(key))}: {to_typescript_literal(item)}" for key, item in value.items())
        return "{ " + items + " }" if items else "{}"
    raise TypeError(f"Cannot render {type(value).__name__} as a TypeScript literal")


def property_key(key: str) -> str:
    if _IDENTIFIER.match(key):
        return key
    return to_typescript_literal(key)


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))
