"""Back-office dashboard and analytics figures.

Everything here is read-only and computed on demand from the repositories.
Revenue counts delivered orders only.
"""

from collections import defaultdict

from protean.utils.globals import current_domain

from storefront.catalogue.product.product import LOW_STOCK_THRESHOLD, Product
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order, OrderStatus
from storefront.reviews.review.review import Review
from storefront.shared.money import round_money, to_decimal

RECENT_ORDERS_LIMIT = 10
LOW_STOCK_LIMIT = 10
RECENT_REVIEWS_LIMIT = 5
TOP_PRODUCTS_LIMIT = 10


def _revenue(orders) -> float:
    return round_money(sum((to_decimal(order.total_amount) for order in orders), to_decimal(0)))


def dashboard_metrics() -> dict:
    products = current_domain.repository_for(Product).everything()
    orders = current_domain.repository_for(Order).everything()

    return {
        "total_products": len(products),
        "active_products": sum(1 for p in products if p.active),
        "total_orders": len(orders),
        "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING.value),
        "total_customers": len(current_domain.repository_for(User).customers()),
        "total_revenue": _revenue(o for o in orders if o.status == OrderStatus.DELIVERED.value),
        "pending_reviews": len(current_domain.repository_for(Review).pending()),
    }


def recent_orders(limit=RECENT_ORDERS_LIMIT) -> list[Order]:
    return current_domain.repository_for(Order).everything()[:limit]


def low_stock_products(limit=LOW_STOCK_LIMIT) -> list[Product]:
    products = current_domain.repository_for(Product).active()
    return [p for p in products if (p.inventory_count or 0) <= LOW_STOCK_THRESHOLD][:limit]


def recent_pending_reviews(limit=RECENT_REVIEWS_LIMIT) -> list[Review]:
    return current_domain.repository_for(Review).pending()[:limit]


def analytics(top_limit=TOP_PRODUCTS_LIMIT) -> dict:
    """Orders and revenue per status, and the best sellers by quantity."""
    orders = current_domain.repository_for(Order).everything()

    by_status = {status.value: {"orders": 0, "revenue": 0.0} for status in OrderStatus}
    sold = defaultdict(lambda: {"name": None, "quantity": 0, "revenue": to_decimal(0)})

    for order in orders:
        bucket = by_status[order.status]
        bucket["orders"] += 1
        bucket["revenue"] = round_money(to_decimal(bucket["revenue"]) + to_decimal(order.total_amount))

        if order.status in (OrderStatus.CANCELLED.value, OrderStatus.REFUNDED.value):
            continue
        for item in order.items:
            entry = sold[str(item.product_id)]
            entry["name"] = entry["name"] or item.name
            entry["quantity"] += item.quantity
            entry["revenue"] += to_decimal(item.total_price)

    top_products = sorted(sold.items(), key=lambda pair: pair[1]["quantity"], reverse=True)[:top_limit]
    return {
        "orders_by_status": by_status,
        "total_revenue": _revenue(o for o in orders if o.status == OrderStatus.DELIVERED.value),
        "top_products": [
            {
                "product_id": product_id,
                "name": entry["name"],
                "quantity": entry["quantity"],
                "revenue": round_money(entry["revenue"]),
            }
            for product_id, entry in top_products
        ],
    }
