"""Bulk product operations for the back-office."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.creation import category_for
from storefront.catalogue.product.lifecycle import discard_product
from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class BulkUpdateProducts:
    product_ids = Text(required=True)  # JSON array of product ids
    active = Boolean()
    featured = Boolean()
    category_id = Identifier()


@storefront.command(part_of="Product")
class BulkDestroyProducts:
    product_ids = Text(required=True)  # JSON array of product ids


def _product_ids(raw):
    try:
        ids = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"product_ids": ["must be a JSON array of product ids"]}) from None
    if not isinstance(ids, list):
        raise ValidationError({"product_ids": ["must be a JSON array of product ids"]})
    return ids


@storefront.command_handler(part_of=Product)
class BulkProductsHandler:
    @handle(BulkUpdateProducts)
    def bulk_update(self, command):
        if command.active is None and command.featured is None and command.category_id is None:
            raise ValidationError({"bulk_update": ["No updates specified."]})

        category_id = category_for(command.category_id).id if command.category_id else None

        repo = current_domain.repository_for(Product)
        products = repo.find_by_ids(_product_ids(command.product_ids))
        for product in products:
            if category_id is not None:
                product.update_details(category_id=category_id)
            if command.active is not None or command.featured is not None:
                product.set_flags(active=command.active, featured=command.featured)
            repo.add(product)

        return len(products)

    @handle(BulkDestroyProducts)
    def bulk_destroy(self, command):
        products = current_domain.repository_for(Product).find_by_ids(_product_ids(command.product_ids))
        for product in products:
            discard_product(product)
        return len(products)
