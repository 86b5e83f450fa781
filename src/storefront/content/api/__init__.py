"""Content API package."""

from storefront.content.api.routes import router

__all__ = ["router"]
