"""Product visibility toggles and deletion: commands and handler.

Deleting a product also drops the cart lines and reviews that point at it.
Orders keep their own copy of the line, so order history is unaffected.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class ToggleProductActive:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class ToggleProductFeatured:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def discard_product(product):
    from storefront.ordering.cart.cart import Cart
    from storefront.reviews.review.review import Review

    removed_lines = current_domain.repository_for(Cart).drop_product_lines(product.id)
    removed_reviews = current_domain.repository_for(Review).remove_for_product(product.id)
    current_domain.repository_for(Product).remove(product)

    logger.info(
        "product_deleted",
        product_id=str(product.id),
        sku=product.sku,
        cart_lines_removed=removed_lines,
        reviews_removed=removed_reviews,
    )


@storefront.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(ToggleProductActive)
    def toggle_active(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_active()
        repo.add(product)

    @handle(ToggleProductFeatured)
    def toggle_featured(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_featured()
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        discard_product(product)
