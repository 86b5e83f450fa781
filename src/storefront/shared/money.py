"""Rounding and display of monetary amounts.

Amounts are stored as floats on aggregates; arithmetic that produces a stored
amount goes through ``Decimal`` and is rounded half-up to the cent.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    return Decimal(str(amount or 0))


def round_money(amount) -> float:
    return float(to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def format_money(amount) -> str:
    return f"${to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)}"
