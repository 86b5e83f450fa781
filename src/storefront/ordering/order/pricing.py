"""Order totals: subtotal, 8% tax and flat shipping waived from $50."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from storefront.shared.money import CENT, to_decimal

TAX_RATE = Decimal("0.08")
SHIPPING_COST = Decimal("5.99")
FREE_SHIPPING_THRESHOLD = Decimal("50")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    tax_amount: float
    shipping_cost: float
    total_amount: float


def order_totals(line_totals) -> OrderTotals:
    """Compute order totals from the frozen line totals.

        >>> order_totals([20.0])
        OrderTotals(subtotal=20.0, tax_amount=1.6, shipping_cost=5.99, total_amount=27.59)
    """
    subtotal = sum((to_decimal(amount) for amount in line_totals), Decimal("0")).quantize(CENT, rounding=ROUND_HALF_UP)
    tax_amount = (subtotal * TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
    shipping_cost = Decimal("0.00") if subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_COST
    total_amount = subtotal + tax_amount + shipping_cost

    return OrderTotals(
        subtotal=float(subtotal),
        tax_amount=float(tax_amount),
        shipping_cost=float(shipping_cost),
        total_amount=float(total_amount),
    )
