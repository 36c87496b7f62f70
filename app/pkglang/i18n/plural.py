"""Plural-Forms header compiler and evaluator.

Compiles the C-like expression of a gettext ``Plural-Forms`` header into a
small expression tree that selects the plural form index for a count.

Supported grammar (C precedence, lowest first)::

    ternary   ?:
    logical   ||  &&
    equality  ==  !=
    relation  <  <=  >  >=
    additive  +  -
    multiply  *  /  %
    unary     !
    primary   n | <decimal> | ( expr )
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional

from pkglang.i18n.exceptions import (
    PluralExpressionError,
    PluralExpressionErrorReason,
)
from pkglang.i18n.models import DEFAULT_PLURAL_FORMS
from pkglang.logging import get_module_logger

logger = get_module_logger()

_TOKEN_PATTERN = re.compile(
    r"""
        (?P<WHITESPACES>[ \t\r\n]+)                  | # spaces and horizontal tabs
        (?P<NUMBER>[0-9]+\b)                         | # decimal integer
        (?P<NAME>n\b)                                | # only n is allowed
        (?P<PARENTHESIS>[()])                        |
        (?P<OPERATOR>[-*/%+?:]|[><!=]=|[<>!]|&&|\|\|) |
        (?P<INVALID>\w+|.)                             # invalid token
    """,
    re.VERBOSE | re.DOTALL,
)

_STATEMENT_PATTERN = re.compile(r"[^;]+")
_ASSIGNMENT_PATTERN = re.compile(r"\s*([A-Za-z_]\w*)\s*=\s*")

# Deepest nesting of parentheses, ternaries or operator chains accepted.
MAX_EXPRESSION_DEPTH = 50

# Binary operators grouped by precedence level, loosest first.
_BINARY_LEVELS = (
    ("||",),
    ("&&",),
    ("==", "!="),
    ("<", "<=", ">", ">="),
    ("+", "-"),
    ("*", "/", "%"),
)


class _Token(NamedTuple):
    kind: str
    value: str
    offset: int


def _syntax_error(message: str, offset: int) -> PluralExpressionError:
    return PluralExpressionError(PluralExpressionErrorReason.SYNTAX, message, offset)


def _tokenize(expression: str, base_offset: int) -> List[_Token]:
    tokens = []
    for mo in _TOKEN_PATTERN.finditer(expression):
        kind = mo.lastgroup
        if kind == "WHITESPACES":
            continue
        value = mo.group(kind)
        offset = base_offset + mo.start()
        if kind == "INVALID":
            raise _syntax_error(f"invalid token in plural form: {value!r}", offset)
        tokens.append(_Token(kind, value, offset))
    tokens.append(_Token("END", "", base_offset + len(expression)))
    return tokens


def _c_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _c_mod(a: int, b: int) -> int:
    return a - b * _c_div(a, b)


def _apply(op: str, a: int, b: int) -> int:
    if op == "||":
        return int(bool(a) or bool(b))
    if op == "&&":
        return int(bool(a) and bool(b))
    if op == "==":
        return int(a == b)
    if op == "!=":
        return int(a != b)
    if op == "<":
        return int(a < b)
    if op == "<=":
        return int(a <= b)
    if op == ">":
        return int(a > b)
    if op == ">=":
        return int(a >= b)
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    # A divisor that depends on n and happens to be zero yields 0.
    if b == 0:
        return 0
    if op == "/":
        return _c_div(a, b)
    return _c_mod(a, b)


class _Node:
    constant = True
    depth = 1

    def evaluate(self, n: int) -> int:
        raise NotImplementedError


class _Number(_Node):
    def __init__(self, value: int):
        self.value = value

    def evaluate(self, n: int) -> int:
        return self.value


class _Variable(_Node):
    constant = False

    def evaluate(self, n: int) -> int:
        return n


class _Not(_Node):
    def __init__(self, operand: _Node):
        self.operand = operand
        self.constant = operand.constant
        self.depth = operand.depth + 1

    def evaluate(self, n: int) -> int:
        return int(not self.operand.evaluate(n))


class _Binary(_Node):
    def __init__(self, op: str, left: _Node, right: _Node):
        self.op = op
        self.left = left
        self.right = right
        self.constant = left.constant and right.constant
        self.depth = max(left.depth, right.depth) + 1

    def evaluate(self, n: int) -> int:
        return _apply(self.op, self.left.evaluate(n), self.right.evaluate(n))


class _Conditional(_Node):
    def __init__(self, condition: _Node, if_true: _Node, if_false: _Node):
        self.condition = condition
        self.if_true = if_true
        self.if_false = if_false
        self.constant = condition.constant and if_true.constant and if_false.constant
        self.depth = max(condition.depth, if_true.depth, if_false.depth) + 1

    def evaluate(self, n: int) -> int:
        if self.condition.evaluate(n):
            return self.if_true.evaluate(n)
        return self.if_false.evaluate(n)


class _Parser:
    """Recursive-descent parser over a token list.

    Nesting and tree depth are both capped at MAX_EXPRESSION_DEPTH so that
    neither parsing nor evaluation can exhaust the interpreter stack.
    """

    def __init__(self, tokens: List[_Token]):
        self._tokens: Iterator[_Token] = iter(tokens)
        self._current = next(self._tokens)
        self._nesting = 0

    def _advance(self) -> _Token:
        token = self._current
        if token.kind != "END":
            self._current = next(self._tokens)
        return token

    def parse(self) -> _Node:
        node = self._ternary()
        if self._current.kind != "END":
            raise _syntax_error(
                f"unexpected token in plural form: {self._current.value!r}",
                self._current.offset,
            )
        return node

    def _checked(self, node: _Node, offset: int) -> _Node:
        if node.depth > MAX_EXPRESSION_DEPTH:
            raise _syntax_error("plural form nested too deeply", offset)
        return node

    def _ternary(self) -> _Node:
        self._nesting += 1
        if self._nesting > MAX_EXPRESSION_DEPTH:
            raise _syntax_error("plural form nested too deeply", self._current.offset)
        try:
            condition = self._binary(0)
            if self._current.value != "?":
                return condition
            question = self._advance()
            if_true = self._ternary()
            if self._current.value != ":":
                raise self._unexpected()
            self._advance()
            if_false = self._ternary()
            return self._checked(
                _Conditional(condition, if_true, if_false), question.offset
            )
        finally:
            self._nesting -= 1

    def _binary(self, level: int) -> _Node:
        if level == len(_BINARY_LEVELS):
            return self._unary()
        operators = _BINARY_LEVELS[level]
        left = self._binary(level + 1)
        while self._current.kind == "OPERATOR" and self._current.value in operators:
            op_token = self._advance()
            right = self._binary(level + 1)
            if op_token.value in ("/", "%") and right.constant:
                if right.evaluate(0) == 0:
                    raise PluralExpressionError(
                        PluralExpressionErrorReason.DIVISION_BY_ZERO,
                        "division by zero in plural form",
                        op_token.offset,
                    )
            left = self._checked(_Binary(op_token.value, left, right), op_token.offset)
        return left

    def _unary(self) -> _Node:
        negations = []
        while self._current.value == "!":
            negations.append(self._advance())
        node = self._primary()
        for token in reversed(negations):
            node = self._checked(_Not(node), token.offset)
        return node

    def _primary(self) -> _Node:
        token = self._current
        if token.kind == "NUMBER":
            self._advance()
            return _Number(int(token.value, 10))
        if token.kind == "NAME":
            self._advance()
            return _Variable()
        if token.value == "(":
            self._advance()
            node = self._ternary()
            if self._current.value != ")":
                raise _syntax_error(
                    "unbalanced parenthesis in plural form", self._current.offset
                )
            self._advance()
            return node
        raise self._unexpected()

    def _unexpected(self) -> PluralExpressionError:
        token = self._current
        if token.kind == "END":
            return _syntax_error("unexpected end of plural form", token.offset)
        return _syntax_error(
            f"unexpected token in plural form: {token.value!r}", token.offset
        )


@dataclass(frozen=True)
class PluralRule:
    """A compiled Plural-Forms header.

    Attributes:
        header: The header text this rule was compiled from.
        plural_count: Number of plural forms (nplurals).
        expression: Source text of the plural expression.
    """

    header: str
    plural_count: int
    expression: str
    _root: _Node

    def evaluate(self, n: int) -> int:
        """Select the plural form index for a count.

        The result is clamped into ``[0, plural_count - 1]``; an out-of-range
        result is logged rather than raised.

        Args:
            n: Non-negative count.

        Returns:
            Plural form index.
        """
        index = self._root.evaluate(n)
        if 0 <= index < self.plural_count:
            return index

        clamped = min(max(index, 0), self.plural_count - 1)
        logger.warning(
            "plural_index_out_of_range",
            expression=self.expression,
            n=n,
            index=index,
            clamped_index=clamped,
            plural_count=self.plural_count,
        )
        return clamped

    def __call__(self, n: int) -> int:
        return self.evaluate(n)


def compile_expression(expression: str, base_offset: int = 0) -> _Node:
    """Compile a bare plural expression (the part after ``plural=``).

    Raises:
        PluralExpressionError: If the expression is malformed or divides
            by a constant zero.
    """
    return _Parser(_tokenize(expression, base_offset)).parse()


def compile_plural_forms(header: str) -> PluralRule:
    """Compile a Plural-Forms header such as ``nplurals=2; plural=(n != 1);``.

    Args:
        header: Plural-Forms header value.

    Returns:
        PluralRule ready for evaluation.

    Raises:
        PluralExpressionError: If the header is malformed.
    """
    plural_count: Optional[int] = None
    root: Optional[_Node] = None
    expression = ""

    for statement in _STATEMENT_PATTERN.finditer(header):
        if not statement.group().strip():
            continue
        assignment = _ASSIGNMENT_PATTERN.match(statement.group())
        if assignment is None:
            raise _syntax_error("expected 'name=value' in plural forms", statement.start())
        name = assignment.group(1)
        value_offset = statement.start() + assignment.end()
        value = statement.group()[assignment.end():]

        if name == "nplurals":
            if not value.strip().isdigit():
                raise _syntax_error("nplurals must be a decimal integer", value_offset)
            plural_count = int(value.strip())
            if plural_count < 1:
                raise _syntax_error("nplurals must be at least 1", value_offset)
        elif name == "plural":
            expression = value.strip()
            root = compile_expression(value, value_offset)
        else:
            raise _syntax_error(f"unknown plural forms field: {name!r}", statement.start())

    if plural_count is None:
        raise _syntax_error("missing nplurals in plural forms", len(header))
    if root is None:
        raise _syntax_error("missing plural expression in plural forms", len(header))

    return PluralRule(
        header=header, plural_count=plural_count, expression=expression, _root=root
    )


def default_plural_rule() -> PluralRule:
    """The two-form rule of the root culture: singular iff n == 1."""
    return compile_plural_forms(DEFAULT_PLURAL_FORMS)
