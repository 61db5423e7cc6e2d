"""Currency and percent formatting for display."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

CENTS = Decimal("0.01")


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents)."""
    with localcontext() as ctx:
        # quantize needs enough precision for every integer digit
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_usd(value: Any) -> str:
    """Format as en-US currency, e.g. ``$1,234.57`` or ``-$5.00``.

    Non-numeric and non-finite values render as ``$0.00``.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (ArithmeticError, ValueError):
        amount = Decimal("0")
    if not amount.is_finite():
        amount = Decimal("0")

    cents = round_to_cents(amount)
    if cents == 0:
        return "$0.00"
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def format_percent(fraction: Decimal) -> str:
    """Format a fraction as a percent with 2 decimals, e.g. ``6.00%``."""
    return f"{round_to_cents(fraction * 100):.2f}%"


def format_field(value: Decimal) -> str:
    """Format a derived value written back into a form input.

    Non-positive values clear the field.
    """
    if not value.is_finite() or value <= 0:
        return ""
    return f"{round_to_cents(value):.2f}"
