import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from packslip.constants import CURRENCY_SYMBOL

ZERO = Decimal("0")
CENTS = Decimal("0.01")

_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Keeps products of parsed fields inside the default decimal context.
_MAX_EXPONENT = 10_000


def parse_numeric(text: str | None) -> Decimal:
    """Parse the leading number of a free-text field: '12.5m' -> 12.5, 'abc' -> 0."""
    if not text:
        return ZERO
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return ZERO
    value = Decimal(match.group(1))
    if abs(value.adjusted()) > _MAX_EXPONENT:
        return ZERO
    return value


def _group_indian(digits: str) -> str:
    """Group an integer digit string the en-IN way: '10000000' -> '1,00,00,000'"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_inr(value, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format an amount as INR with Indian grouping: 100000 -> '₹1,00,000.00'

    Anything that is not a finite number formats as the zero amount.
    """
    zero = f"{symbol}0.00"
    if value is None or isinstance(value, bool):
        return zero
    try:
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        if not amount.is_finite():
            return zero
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        return zero

    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):f}".partition(".")
    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"
