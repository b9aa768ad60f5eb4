"""
Utility functions for the application.
"""
from typing import Any
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest value a Numeric(10, 2) money column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value: Any) -> Decimal:
    """Quantize a numeric value to currency scale (2 decimal places)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_percent(part: Decimal, whole: Decimal, places: int = 0):
    """
    Percentage of part over whole, rounded half-up.

    Returns an int when places is 0, otherwise a float with the given number
    of decimal places. A non-positive whole yields 0.
    """
    if whole <= 0:
        return 0 if places == 0 else 0.0
    raw = Decimal(part) / Decimal(whole) * 100
    if places == 0:
        return int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return float(raw.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))
