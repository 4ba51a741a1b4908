"""Totals for a packing slip.

Every function here is a plain derivation over the current items and balance
text; nothing is cached between calls.
"""

from __future__ import annotations

from decimal import Decimal

from packslip.expression import evaluate
from packslip.models import ZERO, format_inr, parse_numeric
from packslip.models.line_item import LineItem


def total_pieces(items: list[LineItem]) -> Decimal:
    return sum((parse_numeric(item.pc) for item in items), ZERO)


def gross_amount(items: list[LineItem]) -> Decimal:
    return sum((item.total for item in items), ZERO)


def signed_adjustment(balance_outstanding: str) -> str:
    """'200' -> '+200', '-200' -> '-200', '' -> ''"""
    if not balance_outstanding:
        return ""
    if balance_outstanding.startswith(("+", "-")):
        return balance_outstanding
    return f"+{balance_outstanding}"


def net_expression(items: list[LineItem], balance_outstanding: str) -> str:
    return f"{gross_amount(items):f}{signed_adjustment(balance_outstanding)}"


def net_amount_value(items: list[LineItem], balance_outstanding: str) -> Decimal:
    return evaluate(net_expression(items, balance_outstanding))


def net_amount(items: list[LineItem], balance_outstanding: str) -> str:
    """Gross amount with the balance outstanding applied, formatted as INR."""
    return format_inr(net_amount_value(items, balance_outstanding))
