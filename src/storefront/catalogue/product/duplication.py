"""Product duplication: copies a product under a fresh slug and SKU."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product.creation import category_for, unique_identifiers
from storefront.catalogue.product.product import Product
from storefront.domain import storefront

# Copied verbatim onto the duplicate; variants are not carried over
_COPIED_FIELDS = (
    "description",
    "price",
    "active",
    "featured",
    "inventory_count",
    "weight",
    "dimensions",
    "materials",
    "care_instructions",
    "image_url",
)


@storefront.command(part_of="Product")
class DuplicateProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class DuplicateProductHandler:
    @handle(DuplicateProduct)
    def duplicate_product(self, command):
        repo = current_domain.repository_for(Product)
        original = repo.get(command.product_id)
        category = category_for(original.category_id)

        name = f"{original.name} (Copy)"
        slug, sku = unique_identifiers(name, category.name)

        copy = Product.create(
            name=name,
            sku=sku,
            slug=slug,
            category_id=original.category_id,
            **{field_name: getattr(original, field_name) for field_name in _COPIED_FIELDS},
        )
        repo.add(copy)
        return str(copy.id)
