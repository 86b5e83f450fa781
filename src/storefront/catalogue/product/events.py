"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String(required=True)
    slug = String(required=True)
    category_id = Identifier(required=True)
    price = Float(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive, pricing or stock attributes of a product changed."""

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    inventory_count = Integer(required=True)
    category_id = Identifier(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """The base price of a product changed."""

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@storefront.event(part_of="Product")
class ProductFlagsChanged:
    """A product was shown, hidden, featured or unfeatured."""

    product_id = Identifier(required=True)
    active = Boolean(required=True)
    featured = Boolean(required=True)


@storefront.event(part_of="Product")
class VariantAdded:
    """A purchasable variant was added to a product."""

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    sku = String(required=True)
    price = Float(required=True)


@storefront.event(part_of="Product")
class VariantUpdated:
    """A variant's attributes, price or stock changed."""

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    sku = String(required=True)
    price = Float(required=True)
    inventory_count = Integer(required=True)


@storefront.event(part_of="Product")
class VariantRemoved:
    """A variant was removed from a product."""

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
