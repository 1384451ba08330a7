"""Display helpers for amounts and percentages."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() avoids binary float artifacts such as 0.1 -> 0.1000000000000000055
    return Decimal(str(value))


def format_currency(amount: Number) -> str:
    """Format a dollar amount with no cents, e.g. ``-$1,234``."""
    whole = _to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return f"{sign}${abs(whole):,}"


def calculate_percentage(part: Number, total: Number) -> int:
    """Whole-number percentage of ``part`` in ``total``; 0 when total is 0."""
    total_dec = _to_decimal(total)
    if total_dec == 0:
        return 0
    ratio = _to_decimal(part) / total_dec * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_percentage(fraction: Number) -> str:
    """Format a fraction such as an equity factor, e.g. 0.55 -> ``55%``."""
    return f"{calculate_percentage(fraction, 1)}%"
