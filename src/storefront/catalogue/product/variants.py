"""Variant management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import VARIANT_FIELDS, Product
from storefront.catalogue.product.sku import variant_sku
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddVariant:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    sku = String(max_length=80)
    price = Float()
    inventory_count = Integer(default=0, min_value=0)
    color = String(max_length=50)
    size = String(max_length=50)
    style = String(max_length=50)
    active = Boolean(default=True)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class UpdateVariant:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    name = String(max_length=255)
    sku = String(max_length=80)
    price = Float()
    inventory_count = Integer(min_value=0)
    color = String(max_length=50)
    size = String(max_length=50)
    style = String(max_length=50)
    active = Boolean()
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class RemoveVariant:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        sku = command.sku or variant_sku(
            product.sku,
            name=command.name,
            color=command.color,
            size=command.size,
            style=command.style,
        )
        # Derived variant SKUs are not retried: a collision is reported as is
        if repo.variant_sku_taken(sku):
            raise ValidationError({"sku": ["has already been taken"]})

        variant = product.add_variant(
            name=command.name,
            sku=sku,
            price=command.price,
            inventory_count=command.inventory_count,
            color=command.color,
            size=command.size,
            style=command.style,
            active=command.active,
            image_url=command.image_url,
        )
        repo.add(product)
        return str(variant.id)

    @handle(UpdateVariant)
    def update_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {name: getattr(command, name) for name in VARIANT_FIELDS if getattr(command, name) is not None}
        if "sku" in changes and repo.variant_sku_taken(changes["sku"], exclude_variant_id=command.variant_id):
            raise ValidationError({"sku": ["has already been taken"]})

        product.update_variant(command.variant_id, **changes)
        repo.add(product)

    @handle(RemoveVariant)
    def remove_variant(self, command):
        from storefront.ordering.cart.cart import Cart

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.remove_variant(command.variant_id)
        current_domain.repository_for(Cart).drop_product_lines(product.id, command.variant_id)
        repo.add(product)
