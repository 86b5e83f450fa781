"""Product detail updates: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.creation import category_for
from storefront.catalogue.product.product import DETAIL_FIELDS, Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float()
    category_id = Identifier()
    inventory_count = Integer(min_value=0)
    weight = Float()
    dimensions = String(max_length=100)
    materials = Text()
    care_instructions = Text()
    image_url = String(max_length=500)
    active = Boolean()
    featured = Boolean()


@storefront.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        # Unset command fields mean "leave unchanged"
        changes = {name: getattr(command, name) for name in DETAIL_FIELDS if getattr(command, name) is not None}
        if "category_id" in changes:
            changes["category_id"] = category_for(changes["category_id"]).id

        product.update_details(**changes)
        if command.active is not None or command.featured is not None:
            product.set_flags(active=command.active, featured=command.featured)
        repo.add(product)
