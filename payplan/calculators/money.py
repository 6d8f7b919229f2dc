"""
Money helpers shared by the calculators.

All figures are Decimal and rounded to cents with ROUND_HALF_UP.
"""

from decimal import ROUND_HALF_UP, Decimal

PERCENT = Decimal("100")


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, percentage: Decimal) -> Decimal:
    """Return percentage% of amount, rounded to cents."""
    return quantize_money(amount * percentage / PERCENT)
