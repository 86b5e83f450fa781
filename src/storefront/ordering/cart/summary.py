"""Priced view of a cart, as returned by the cart endpoints."""

from dataclasses import dataclass

from storefront.ordering.line_source import LineSource, load_line_source
from storefront.shared.money import format_money, round_money, to_decimal

MAX_LINE_QUANTITY = 10


@dataclass(frozen=True)
class CartLine:
    """A cart item joined with the catalogue data it currently points at."""

    item_id: str
    quantity: int
    source: LineSource

    @property
    def unit_price(self) -> float:
        return self.source.price

    @property
    def total_price(self) -> float:
        return round_money(to_decimal(self.source.price) * self.quantity)

    @property
    def available_quantity(self) -> int:
        return self.source.inventory_count

    @property
    def in_stock(self) -> bool:
        return self.source.inventory_count >= self.quantity

    @property
    def can_increase_quantity(self) -> bool:
        return self.source.inventory_count > self.quantity

    @property
    def max_quantity(self) -> int:
        return min(self.source.inventory_count, MAX_LINE_QUANTITY)

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "product_id": self.source.product_id,
            "variant_id": self.source.variant_id,
            "name": self.source.name,
            "sku": self.source.sku,
            "description": self.source.description,
            "image_url": self.source.image_url,
            "price": self.unit_price,
            "formatted_price": format_money(self.unit_price),
            "quantity": self.quantity,
            "total_price": self.total_price,
            "formatted_total_price": format_money(self.total_price),
            "max_quantity": self.max_quantity,
            "in_stock": self.in_stock,
            "can_increase_quantity": self.can_increase_quantity,
        }


def cart_lines(cart) -> list[CartLine]:
    return [
        CartLine(
            item_id=str(item.id),
            quantity=item.quantity,
            source=load_line_source(item.product_id, item.variant_id),
        )
        for item in cart.items
    ]


def total_price(lines) -> float:
    return round_money(sum((to_decimal(line.total_price) for line in lines), to_decimal(0)))


def cart_payload(cart) -> dict:
    lines = cart_lines(cart)
    total = total_price(lines)
    return {
        "cart": {
            "id": str(cart.id),
            "total_items": cart.total_items(),
            "total_price": total,
            "formatted_total": format_money(total),
            "items": [line.to_dict() for line in lines],
        }
    }
