"""What a cart or order line is made of: a product, or a product variant.

Every price, name, SKU and stock lookup for a line goes through
``resolve_line_source`` so the variant-over-product fallbacks live in one
place.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product

DESCRIPTION_LENGTH = 100


@dataclass(frozen=True)
class LineSource:
    product_id: str
    variant_id: str | None
    name: str
    sku: str
    price: float
    inventory_count: int
    image_url: str | None = None
    description: str = ""
    active: bool = True


def _truncate(text, length=DESCRIPTION_LENGTH):
    text = text or ""
    return text if len(text) <= length else text[: length - 3] + "..."


def resolve_line_source(product, variant=None) -> LineSource:
    if variant is None:
        return LineSource(
            product_id=str(product.id),
            variant_id=None,
            name=product.name,
            sku=product.sku,
            price=product.price,
            inventory_count=product.inventory_count or 0,
            image_url=product.image_url,
            description=_truncate(product.description),
            active=bool(product.active),
        )

    return LineSource(
        product_id=str(product.id),
        variant_id=str(variant.id),
        name=variant.display_name(product.name),
        sku=variant.sku,
        price=variant.price if variant.price is not None else product.price,
        inventory_count=variant.inventory_count or 0,
        image_url=variant.image_url or product.image_url,
        description=variant.description(),
        active=bool(product.active and variant.active),
    )


def load_line_source(product_id, variant_id=None) -> LineSource:
    """Fetch the product (and variant) behind a line; raises ObjectNotFoundError if either is gone."""
    product = current_domain.repository_for(Product).get(product_id)
    variant = product.get_variant(variant_id) if variant_id else None
    return resolve_line_source(product, variant)


def purchasable_source(product_ref, variant_id=None) -> LineSource:
    """Resolve an active product, addressed by slug or id, and an optional active variant."""
    repo = current_domain.repository_for(Product)
    try:
        product = repo.find_by_slug(product_ref, active_only=True)
    except ObjectNotFoundError:
        product = repo.get(product_ref)
        if not product.active:
            raise ObjectNotFoundError("Product not found.") from None

    variant = product.get_variant(variant_id) if variant_id else None
    if variant is not None and not variant.active:
        raise ObjectNotFoundError("Product variant not found.")

    return resolve_line_source(product, variant)
