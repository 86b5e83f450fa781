"""Cart line management: commands and handler.

Stock is checked against the quantity the line would end up with, and the
check runs before the cart is touched, so a refused request leaves the cart
exactly as it was.
"""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.ordering.line_source import load_line_source, purchasable_source
from storefront.shared.errors import InsufficientInventoryError


@storefront.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    product = String(required=True, max_length=255)  # slug or id
    variant_id = Identifier()
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    cart_id = Identifier(required=True)


def _ensure_available(source, quantity):
    if quantity > source.inventory_count:
        raise InsufficientInventoryError(available=source.inventory_count)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        source = purchasable_source(command.product, command.variant_id)

        quantity = command.quantity or 1
        existing = cart.find_item(source.product_id, source.variant_id)
        _ensure_available(source, quantity + (existing.quantity if existing else 0))

        item = cart.add_item(source.product_id, source.variant_id, quantity)
        repo.add(cart)
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        item = cart.get_item(command.item_id)

        if command.quantity > 0:
            _ensure_available(load_line_source(item.product_id, item.variant_id), command.quantity)

        cart.update_item_quantity(item.id, command.quantity)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
