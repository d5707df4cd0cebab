"""
Rule DSL for rule-based types.

A type rule is a boolean expression over the implicit binding ``value``,
written in a small TypeScript-compatible subset so that the same text can be
copied into generated code and evaluated at compile time:

    typeof value === 'number' && value > 0 && value % 1 === 0

Supported syntax:
    - literals: numbers, 'single' or "double" quoted strings, true, false,
      null, undefined, and the identifier ``value``
    - member access: ``.length``
    - unary: ``!``, ``-``, ``typeof``
    - arithmetic: ``*``, ``/``, ``%``, ``+``, ``-``
    - comparison: ``<``, ``<=``, ``>``, ``>=``, ``===``, ``!==``, ``==``, ``!=``
    - logic: ``&&``, ``||`` and parentheses

Rules are evaluated by an interpreter over the parsed tree; no host code is
ever executed.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any

from ..errors import RuleSyntaxError

BINDING = "value"


class _Undefined:
    """JavaScript ``undefined``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<number>\d+(?:\.\d+)?)
    |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<name>[A-Za-z_$][A-Za-z0-9_$]*)
    |(?P<op>===|!==|==|!=|<=|>=|&&|\|\||[<>!+\-*/%().])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "string", "name", "op" or "end"
    text: str
    start: int


def tokenize(text: str) -> list[Token]:
    """Split rule text into tokens, raising ``RuleSyntaxError`` on stray characters."""
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if not match:
            raise RuleSyntaxError(f"Unexpected character {text[position]!r} at {position} in rule: {text}")
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, match.group(), position))
        position = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


# ---------------------------------------------------------------------------
# Syntax tree
# ---------------------------------------------------------------------------


class RuleNode:
    """Base class for rule syntax tree nodes."""

    pass


@dataclass(frozen=True)
class Literal(RuleNode):
    value: Any


@dataclass(frozen=True)
class Binding(RuleNode):
    """The implicit ``value`` binding."""

    pass


@dataclass(frozen=True)
class Member(RuleNode):
    target: RuleNode
    name: str


@dataclass(frozen=True)
class Unary(RuleNode):
    operator: str
    operand: RuleNode


@dataclass(frozen=True)
class Binary(RuleNode):
    operator: str
    left: RuleNode
    right: RuleNode


_BINARY_LEVELS = (
    ("||",),
    ("&&",),
    ("===", "!==", "==", "!="),
    ("<", "<=", ">", ">="),
    ("+", "-"),
    ("*", "/", "%"),
)


class _Parser:
    """Recursive-descent parser, one method per precedence level."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.position = 0

    def parse(self) -> RuleNode:
        node = self._binary(0)
        if self._peek().kind != "end":
            self._fail(f"unexpected {self._peek().text!r}")
        return node

    def _peek(self) -> Token:
        return self.tokens[self.position]

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _fail(self, message: str):
        raise RuleSyntaxError(f"Invalid rule {self.text!r}: {message}")

    def _binary(self, level: int) -> RuleNode:
        if level == len(_BINARY_LEVELS):
            return self._unary()
        node = self._binary(level + 1)
        while self._peek().kind == "op" and self._peek().text in _BINARY_LEVELS[level]:
            operator = self._advance().text
            node = Binary(operator, node, self._binary(level + 1))
        return node

    def _unary(self) -> RuleNode:
        token = self._peek()
        if (token.kind == "op" and token.text in ("!", "-")) or (token.kind == "name" and token.text == "typeof"):
            self._advance()
            return Unary(token.text, self._unary())
        return self._postfix()

    def _postfix(self) -> RuleNode:
        node = self._primary()
        while self._peek().kind == "op" and self._peek().text == ".":
            self._advance()
            name = self._advance()
            if name.kind != "name":
                self._fail("expected a member name after '.'")
            if name.text != "length":
                self._fail(f"unsupported member {name.text!r}")
            node = Member(node, name.text)
        return node

    def _primary(self) -> RuleNode:
        token = self._advance()
        if token.kind == "number":
            return Literal(float(token.text) if "." in token.text else int(token.text))
        if token.kind == "string":
            return Literal(_unquote(token.text))
        if token.kind == "name":
            if token.text == BINDING:
                return Binding()
            constants = {"true": True, "false": False, "null": None, "undefined": UNDEFINED}
            if token.text in constants:
                return Literal(constants[token.text])
            self._fail(f"unknown identifier {token.text!r}")
        if token.kind == "op" and token.text == "(":
            node = self._binary(0)
            if self._advance().text != ")":
                self._fail("missing ')'")
            return node
        self._fail(f"unexpected {token.text or 'end of rule'!r}")


def _unquote(text: str) -> str:
    body = text[1:-1]
    return re.sub(r"\\(.)", lambda match: {"n": "\n", "t": "\t"}.get(match.group(1), match.group(1)), body)


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------


def typeof(value: Any) -> str:
    """JavaScript ``typeof`` for JSON-like Python values."""
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def _strict_equals(left: Any, right: Any) -> bool:
    if typeof(left) != typeof(right):
        return False
    if isinstance(left, (dict, list)):
        return left is right
    return left == right


def _loose_equals(left: Any, right: Any) -> bool:
    if left in (None, UNDEFINED) or right in (None, UNDEFINED):
        return left in (None, UNDEFINED) and right in (None, UNDEFINED)
    if typeof(left) == typeof(right):
        return _strict_equals(left, right)
    try:
        return _to_number(left) == _to_number(right)
    except (TypeError, ValueError):
        return False


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        try:
            return float(value.strip() or 0)
        except ValueError:
            return math.nan
    return math.nan


def _truthy(value: Any) -> bool:
    if value is UNDEFINED or value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _compare(operator: str, left: Any, right: Any) -> bool:
    if not (isinstance(left, str) and isinstance(right, str)):
        left, right = _to_number(left), _to_number(right)
        if math.isnan(left) or math.isnan(right):
            return False
    if operator == "<":
        return left < right
    if operator == "<=":
        return left <= right
    if operator == ">":
        return left > right
    return left >= right


def _arithmetic(operator: str, left: Any, right: Any) -> Any:
    if operator == "+" and (isinstance(left, str) or isinstance(right, str)):
        return f"{left}{right}"
    left, right = _to_number(left), _to_number(right)
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if right == 0:
        return math.nan if operator == "%" or left == 0 else math.copysign(math.inf, left)
    if operator == "/":
        return left / right
    if math.isinf(left):
        return math.nan
    return math.fmod(left, right)


def evaluate_node(node: RuleNode, value: Any) -> Any:
    """Evaluate a rule syntax tree with ``value`` bound to the given Python value."""
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Binding):
        return value
    if isinstance(node, Member):
        target = evaluate_node(node.target, value)
        if isinstance(target, (str, list)):
            return len(target)
        if target is None or target is UNDEFINED:
            raise TypeError(f"Cannot read property '{node.name}' of {typeof(target)}")
        return UNDEFINED
    if isinstance(node, Unary):
        operand = evaluate_node(node.operand, value)
        if node.operator == "!":
            return not _truthy(operand)
        if node.operator == "-":
            return -_to_number(operand)
        return typeof(operand)
    if isinstance(node, Binary):
        if node.operator == "&&":
            left = evaluate_node(node.left, value)
            return evaluate_node(node.right, value) if _truthy(left) else left
        if node.operator == "||":
            left = evaluate_node(node.left, value)
            return left if _truthy(left) else evaluate_node(node.right, value)
        left = evaluate_node(node.left, value)
        right = evaluate_node(node.right, value)
        if node.operator == "===":
            return _strict_equals(left, right)
        if node.operator == "!==":
            return not _strict_equals(left, right)
        if node.operator == "==":
            return _loose_equals(left, right)
        if node.operator == "!=":
            return not _loose_equals(left, right)
        if node.operator in ("<", "<=", ">", ">="):
            return _compare(node.operator, left, right)
        return _arithmetic(node.operator, left, right)
    raise TypeError(f"Unknown rule node {node!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A parsed rule together with its source text."""

    text: str
    node: RuleNode = field(compare=False)
    tokens: tuple[Token, ...] = field(compare=False, repr=False)

    @classmethod
    def parse(cls, text: str) -> Rule:
        """Parse rule text, raising ``RuleSyntaxError`` if it is not valid."""
        if not isinstance(text, str) or not text.strip():
            raise RuleSyntaxError(f"A rule must be a non-empty string, got {text!r}")
        parser = _Parser(text)
        return cls(text=text, node=parser.parse(), tokens=tuple(parser.tokens))

    @classmethod
    def conjunction(cls, left: Rule, right: Rule) -> Rule:
        """Rule that holds when both rules hold."""
        return cls.parse(f"({left.text}) && ({right.text})")

    def evaluate(self, value: Any) -> bool:
        """Evaluate the rule for a literal value.

        A rule that would throw at runtime (e.g. reading ``.length`` of
        ``null``) evaluates to false.
        """
        try:
            return _truthy(evaluate_node(self.node, value))
        except TypeError:
            return False

    def render(self, binding: str) -> str:
        """Source text of the rule with every ``value`` token replaced by ``binding``."""
        parts = []
        cursor = 0
        for token in self.tokens:
            if token.kind == "name" and token.text == BINDING:
                parts.append(self.text[cursor : token.start])
                parts.append(binding)
                cursor = token.start + len(token.text)
        parts.append(self.text[cursor:])
        return "".join(parts)

    def __str__(self) -> str:
        return self.text
