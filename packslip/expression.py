"""Arithmetic shorthand for quantity fields.

A description such as ``12+8×2`` resolves to the quantity it spells out. Only
digits, ``+ - * / ( )``, decimal points and spaces are understood (``×`` and
``÷`` are read as ``*`` and ``/``); any other input evaluates to zero, as do
division by zero and malformed expressions.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, DecimalException

from packslip.models import CENTS, ZERO

logger = logging.getLogger(__name__)

_ALLOWED_RE = re.compile(r"[0-9+\-*/.() ]+")
_NUMBER_RE = re.compile(r"\d+\.?\d*|\.\d+")

_SUBSTITUTIONS = {"×": "*", "÷": "/"}


class ExpressionError(ValueError):
    """Malformed arithmetic expression."""


def _tokenize(expression: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    while pos < len(expression):
        char = expression[pos]
        if char == " ":
            pos += 1
            continue
        match = _NUMBER_RE.match(expression, pos)
        if match:
            tokens.append(match.group())
            pos = match.end()
        else:
            tokens.append(char)
            pos += 1
    return tokens


class _Parser:
    """Recursive-descent parser over ``number | (expr) | expr op expr``."""

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> Decimal:
        value = self._expr()
        if self.pos != len(self.tokens):
            raise ExpressionError(f"Unexpected token {self.tokens[self.pos]!r}")
        return value

    def _peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        self.pos += 1
        return token

    def _expr(self) -> Decimal:
        value = self._term()
        while self._peek() in ("+", "-"):
            op = self._next()
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs
        return value

    def _term(self) -> Decimal:
        value = self._factor()
        while self._peek() in ("*", "/"):
            op = self._next()
            rhs = self._factor()
            value = value * rhs if op == "*" else value / rhs
        return value

    def _factor(self) -> Decimal:
        token = self._next()
        if token in ("+", "-"):
            value = self._factor()
            return value if token == "+" else -value
        if token == "(":
            value = self._expr()
            if self._next() != ")":
                raise ExpressionError("Unbalanced parentheses")
            return value
        if _NUMBER_RE.fullmatch(token):
            return Decimal(token)
        raise ExpressionError(f"Unexpected token {token!r}")


def normalize(expression: str) -> str:
    for symbol, operator in _SUBSTITUTIONS.items():
        expression = expression.replace(symbol, operator)
    return expression


def evaluate(expression: str) -> Decimal:
    """Evaluate an arithmetic expression, rounded half-up to 2 decimal places.

    Returns zero for empty, unsafe or malformed input; never raises.
    """
    if not expression:
        return ZERO
    sanitized = normalize(expression)
    if not sanitized.strip() or not _ALLOWED_RE.fullmatch(sanitized):
        return ZERO

    try:
        result = _Parser(_tokenize(sanitized)).parse()
        rounded = result.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (ExpressionError, DecimalException, RecursionError) as exc:
        logger.debug("Expression %r evaluated to 0: %s", expression, exc)
        return ZERO

    if not rounded:
        return ZERO
    return rounded


def format_quantity(value: Decimal) -> str:
    """Render a quantity the way it would be typed: Decimal('28.00') -> '28'"""
    return f"{value.normalize():f}"
