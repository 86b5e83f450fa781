"""Back-office API package. Every route requires an administrator."""

from fastapi import APIRouter

from storefront.admin.api import articles, categories, dashboard, orders, products, reviews, users

router = APIRouter(prefix="/admin")
router.include_router(dashboard.router)
router.include_router(products.router)
router.include_router(categories.router)
router.include_router(orders.router)
router.include_router(reviews.router)
router.include_router(articles.router)
router.include_router(users.customers_router)
router.include_router(users.admin_users_router)

__all__ = ["router"]
