"""Ordering API package."""

from storefront.ordering.api.routes import cart_items_router, cart_router, order_router

__all__ = ["cart_router", "cart_items_router", "order_router"]
