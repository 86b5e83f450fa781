"""Back-office dashboard endpoints."""

from fastapi import APIRouter, Depends

from storefront.admin.dashboard import (
    analytics,
    dashboard_metrics,
    low_stock_products,
    recent_orders,
    recent_pending_reviews,
)
from storefront.catalogue.api.serializers import product_data, review_data
from storefront.identity.ability import Ability
from storefront.ordering.api.serializers import order_data
from storefront.web.dependencies import admin_ability

router = APIRouter(tags=["admin: dashboard"])


@router.get("/dashboard")
async def dashboard(ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("read", "admin_dashboard")
    return {
        "metrics": dashboard_metrics(),
        "recent_orders": [order_data(o) for o in recent_orders()],
        "low_stock_products": [product_data(p) for p in low_stock_products()],
        "recent_reviews": [review_data(r) for r in recent_pending_reviews()],
    }


@router.get("/analytics")
async def show_analytics(ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("read", "admin_analytics")
    return analytics()
