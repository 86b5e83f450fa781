"""Product creation: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.sku import generate_product_sku
from storefront.domain import storefront
from storefront.shared.slug import generate_slug


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True)
    category_id = Identifier(required=True)
    sku = String(max_length=50)
    slug = String(max_length=255)
    inventory_count = Integer(default=0, min_value=0)
    active = Boolean(default=True)
    featured = Boolean(default=False)
    weight = Float()
    dimensions = String(max_length=100)
    materials = Text()
    care_instructions = Text()
    image_url = String(max_length=500)


def category_for(category_id) -> Category:
    try:
        return current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError:
        raise ValidationError({"category_id": ["must exist"]}) from None


def unique_identifiers(name, category_name, slug=None, sku=None):
    """Return a ``(slug, sku)`` pair that no other product uses.

    Blank values are generated; explicit values are only checked.
    """
    repo = current_domain.repository_for(Product)

    if slug:
        if repo.slug_exists(slug):
            raise ValidationError({"slug": ["has already been taken"]})
    else:
        slug = generate_slug(name, repo.slug_exists)

    if sku:
        if repo.sku_exists(sku):
            raise ValidationError({"sku": ["has already been taken"]})
    else:
        sku = generate_product_sku(name, category_name, repo.sku_exists)

    return slug, sku


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = category_for(command.category_id)
        slug, sku = unique_identifiers(command.name, category.name, slug=command.slug, sku=command.sku)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            sku=sku,
            slug=slug,
            category_id=category.id,
            inventory_count=command.inventory_count,
            active=command.active,
            featured=command.featured,
            weight=command.weight,
            dimensions=command.dimensions,
            materials=command.materials,
            care_instructions=command.care_instructions,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
