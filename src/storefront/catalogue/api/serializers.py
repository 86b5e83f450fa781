"""JSON shapes for catalogue records, shared by the storefront and back-office routes."""

from storefront.shared.money import format_money


def _timestamp(value):
    return value.isoformat() if value else None


def category_data(category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "position": category.position,
        "active": category.active,
    }


def variant_data(variant, product_name=None) -> dict:
    return {
        "id": str(variant.id),
        "name": variant.name,
        "display_name": variant.display_name(product_name) if product_name else variant.name,
        "sku": variant.sku,
        "price": variant.price,
        "formatted_price": variant.display_price(),
        "inventory_count": variant.inventory_count,
        "color": variant.color,
        "size": variant.size,
        "style": variant.style,
        "description": variant.description(),
        "active": variant.active,
        "in_stock": variant.in_stock(),
        "image_url": variant.image_url,
    }


def product_data(product, variants=None) -> dict:
    """``variants`` picks which variants to embed; by default only active ones."""
    variants = product.active_variants() if variants is None else variants
    return {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "sku": product.sku,
        "description": product.description,
        "price": product.price,
        "formatted_price": format_money(product.price),
        "display_price": product.display_price(),
        "category_id": str(product.category_id),
        "active": product.active,
        "featured": product.featured,
        "inventory_count": product.inventory_count,
        "total_inventory": product.total_inventory(),
        "in_stock": product.in_stock(),
        "low_stock": product.low_stock(),
        "has_variants": product.has_variants(),
        "weight": product.weight,
        "dimensions": product.dimensions,
        "materials": product.materials,
        "care_instructions": product.care_instructions,
        "image_url": product.image_url,
        "variants": [variant_data(v, product.name) for v in variants],
        "created_at": _timestamp(product.created_at),
    }


def review_data(review) -> dict:
    return {
        "id": str(review.id),
        "product_id": str(review.product_id),
        "user_id": str(review.user_id),
        "rating": review.rating,
        "star_rating": review.star_rating(),
        "title": review.title,
        "content": review.content,
        "verified_purchase": review.verified_purchase,
        "helpful_count": review.helpful_count,
        "approved": review.approved,
        "rejected": review.rejected,
        "created_at": _timestamp(review.created_at),
    }


def page_data(page, serialize) -> dict:
    return {"items": [serialize(item) for item in page.items], "pagination": page.to_dict()}
