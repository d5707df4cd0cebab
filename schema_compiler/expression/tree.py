"""
Binary expression tree over AND / OR of opaque leaf values.

Type expressions such as ``IHeader & (TPort | 8080)`` are parsed into a tree
whose operator nodes are ``&`` and ``|`` and whose leaves are produced by a
caller-supplied value mapper (registry models, literal values, ...).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Operator(Enum):
    """Operators of a type expression."""

    AND = "&"
    OR = "|"


@dataclass
class Node(Generic[T]):
    """A tree node: either an operator with two children or a leaf value."""

    value: T | None = None
    operator: Operator | None = None
    left: Node[T] | None = None
    right: Node[T] | None = None

    @property
    def is_leaf(self) -> bool:
        return self.operator is None

    @staticmethod
    def leaf(value: T) -> Node[T]:
        return Node(value=value)

    @staticmethod
    def branch(operator: Operator, left: Node[T], right: Node[T]) -> Node[T]:
        return Node(operator=operator, left=left, right=right)


def _identity(token: str) -> Any:
    return token


def _clone_value(value: Any) -> Any:
    # Plain strings are immutable and can be shared between clones
    clone = getattr(value, "clone", None)
    return clone() if callable(clone) else value


class BinaryExpressionTree(Generic[T]):
    """Binary tree representing a boolean expression of typed leaves."""

    def __init__(self, root: Node[T]):
        self.root = root

    @classmethod
    def from_expression(cls, expression: str, value_mapper: Callable[[str], T] | None = None) -> BinaryExpressionTree[T]:
        """
        Parse a textual type expression.

        The operator with the weakest binding (``|`` before ``&``) that lies
        outside every parenthesized group is chosen first, so the tree mirrors
        conventional evaluation order.

        Example::

            ((A | B) & C & D) | F & E

                          OR
                        /    \\
                     AND      AND
                    /  \\     /  \\
                 AND    D   F    E
                /  \\
              OR    C
             / \\
            A   B

        Args:
            expression: The expression text
            value_mapper: Turns an irreducible token into a leaf value

        Returns:
            The parsed tree
        """
        mapper = value_mapper or _identity
        return cls(cls._parse(expression, mapper))

    @classmethod
    def from_value(cls, value: T) -> BinaryExpressionTree[T]:
        """Create a single-leaf tree."""
        return cls(Node.leaf(value))

    @classmethod
    def from_disjunctive_groups(
        cls,
        groups: Sequence[Sequence[str]],
        value_mapper: Callable[[str], T] | None = None,
    ) -> BinaryExpressionTree[T]:
        """
        Build a tree from the array-of-arrays form.

        Each inner array is an AND-group; the groups are joined with OR.
        ``[["IA", "IB"], ["number"]]`` is equivalent to ``IA & IB | number``.
        """
        expression = " | ".join(" & ".join(group) for group in groups)
        return cls.from_expression(expression, value_mapper)

    @classmethod
    def _parse(cls, expression: str, mapper: Callable[[str], T]) -> Node[T]:
        for operator in (Operator.OR, Operator.AND):
            index = find_operator(expression, operator)
            if index is not None:
                left = expression[:index].strip()
                right = expression[index + 1 :].strip()
                return Node.branch(operator, cls._parse(left, mapper), cls._parse(right, mapper))
        return Node.leaf(mapper(strip_token(expression)))

    def map(self, function: Callable[[T], U]) -> BinaryExpressionTree[U]:
        """Return a copy of the tree with every leaf value replaced by ``function(value)``."""

        def visit(node: Node[T]) -> Node[U]:
            if node.is_leaf:
                return Node.leaf(function(node.value))
            return Node.branch(node.operator, visit(node.left), visit(node.right))

        return BinaryExpressionTree(visit(self.root))

    def clone(self) -> BinaryExpressionTree[T]:
        """Deep copy of the tree; every leaf value is cloned."""
        return self.map(_clone_value)

    def leaves(self) -> Iterator[T]:
        """Iterate over leaf values from left to right."""

        def visit(node: Node[T]) -> Iterator[T]:
            if node.is_leaf:
                yield node.value
            else:
                yield from visit(node.left)
                yield from visit(node.right)

        return visit(self.root)

    def to_disjunctive_array(self, conjunction: Callable[[T, T], T]) -> list[T]:
        """
        Flatten the tree into a disjunction of (possibly combined) leaves.

        OR nodes concatenate the alternatives of both sides. AND nodes combine
        every alternative of one side with every alternative of the other via
        ``conjunction(left, right)``; the longer side is iterated outermost.

        Args:
            conjunction: Combines two AND-joined alternatives, raising for
                incompatible pairs

        Returns:
            The list of alternatives
        """

        def visit(node: Node[T]) -> list[T]:
            if node.is_leaf:
                return [node.value]
            left = visit(node.left)
            right = visit(node.right)
            if node.operator is Operator.OR:
                return left + right
            combined = []
            if len(left) >= len(right):
                for left_element in left:
                    for right_element in right:
                        combined.append(conjunction(left_element, right_element))
            else:
                for right_element in right:
                    for left_element in left:
                        combined.append(conjunction(left_element, right_element))
            return combined

        return visit(self.root)

    def __str__(self) -> str:
        def render(node: Node[T], is_root: bool) -> str:
            if node.is_leaf:
                return str(node.value)
            text = f"{render(node.left, False)} {node.operator.value} {render(node.right, False)}"
            return text if is_root else f"({text})"

        return render(self.root, True)

    def __repr__(self) -> str:
        return f"BinaryExpressionTree({self})"


def find_operator(expression: str, operator: Operator) -> int | None:
    """
    Find the index of ``operator`` at the minimal bracket depth.

    The minimal depth is tracked over both operator characters, so an operator
    nested deeper than another top-level operator is never chosen. At equal
    depth the rightmost occurrence wins. Characters inside single-quoted
    strings are skipped.

    Examples:
        find_operator("A & B & C | D", Operator.AND) -> 6
        find_operator("A & (B | C)", Operator.OR) -> None
    """
    minimal_depth = None
    depth = 0
    index = None
    in_string = False
    for i, char in enumerate(expression):
        if char == "'":
            in_string = not in_string
        elif in_string:
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char in "&|":
            if minimal_depth is None or depth < minimal_depth:
                minimal_depth = depth
                index = i if char == operator.value else None
            elif depth == minimal_depth and char == operator.value:
                index = i
    return index


def strip_token(token: str) -> str:
    """Strip whitespace and enclosing parentheses from an irreducible token."""
    token = token.strip()
    if token.startswith("'") and token.endswith("'") and len(token) > 1:
        return token
    return token.strip("() \t\r\n")
