"""FastAPI endpoints for browsing the catalogue."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.serializers import category_data, page_data, product_data, review_data
from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.queries import STOREFRONT_PER_PAGE, related_products, storefront_listing
from storefront.reviews.review.ratings import (
    approved_reviews,
    average_rating,
    rating_distribution,
)
from storefront.shared.pagination import paginate

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    search: str | None = None,
    category: str | None = None,
    price_range: str | None = None,
    availability: str | None = None,
    sort: str | None = None,
    page: int = Query(1, ge=1),
) -> dict:
    category_id = None
    if category:
        category_id = current_domain.repository_for(Category).find_by_slug(category).id

    listing = storefront_listing(
        search=search,
        category_id=category_id,
        price_range=price_range,
        availability=availability,
        sort=sort,
        page=page,
    )
    categories = current_domain.repository_for(Category).ordered(active_only=True)
    return {
        "products": page_data(listing, product_data),
        "categories": [category_data(c) for c in categories],
    }


@product_router.get("/search")
async def search_products(q: str = "", page: int = Query(1, ge=1)) -> dict:
    listing = storefront_listing(search=q.strip() or None, sort="relevance", page=page)
    return {"query": q, "products": page_data(listing, product_data)}


@product_router.get("/{slug}")
async def show_product(slug: str) -> dict:
    product = current_domain.repository_for(Product).find_by_slug(slug, active_only=True)
    reviews = approved_reviews(product.id)
    return {
        "product": product_data(product),
        "reviews": [review_data(r) for r in reviews],
        "average_rating": average_rating(reviews),
        "reviews_count": len(reviews),
        "rating_distribution": rating_distribution(reviews),
        "related_products": [product_data(p) for p in related_products(product)],
    }


# --- Category endpoints ---


@category_router.get("")
async def list_categories() -> dict:
    categories = current_domain.repository_for(Category).ordered(active_only=True)
    return {"categories": [category_data(c) for c in categories]}


@category_router.get("/{slug}")
async def show_category(slug: str, page: int = Query(1, ge=1)) -> dict:
    category = current_domain.repository_for(Category).find_by_slug(slug, active_only=True)
    products = current_domain.repository_for(Product).in_category(category.id, active_only=True)
    return {
        "category": category_data(category),
        "products": page_data(paginate(products, page, STOREFRONT_PER_PAGE), product_data),
    }
