"""
Output formatter.

Generated blocks are produced without indentation. The formatter indents every
line by its brace depth and drops blank lines.
"""

from __future__ import annotations

_OPENERS = "{[("
_CLOSERS = "}])"
_COMMENT_PREFIXES = ("/**", "*", "//")


def bracket_balance(line: str) -> int:
    """Opened minus closed brackets on a line, ignoring quoted strings and comments."""
    if line.lstrip().startswith(_COMMENT_PREFIXES):
        return 0
    balance = 0
    quote = None
    escaped = False
    for char in line:
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char in _OPENERS:
            balance += 1
        elif char in _CLOSERS:
            balance -= 1
    return balance


def format_lines(lines: list[str], indent_size: int = 4) -> list[str]:
    """
    Indent lines by bracket depth and remove blank lines.

    A line starting with a closing bracket is written one level up, so
    ``} else {`` lines up with its ``if``. Existing leading spaces are kept,
    which aligns the `` * `` lines of documentation comments.

    Args:
        lines: Unindented source lines
        indent_size: Number of spaces per level

    Returns:
        The formatted lines
    """
    formatted = []
    depth = 0
    for line in lines:
        if not line.strip():
            continue
        line_depth = depth - 1 if line.lstrip().startswith(tuple(_CLOSERS)) else depth
        formatted.append(" " * (indent_size * max(line_depth, 0)) + line)
        depth = max(depth + bracket_balance(line), 0)
    return formatted
