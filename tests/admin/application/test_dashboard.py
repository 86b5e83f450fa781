"""Dashboard figures and analytics computed from the repositories."""

import pytest
from protean import current_domain

from storefront.admin.dashboard import analytics, dashboard_metrics, low_stock_products, recent_orders
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.cart.resolution import ResolveCart
from storefront.ordering.order.checkout import PlaceOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.reviews.review.submission import SubmitReview

CONTACT = {
    "email": "guest@example.com",
    "first_name": "Sam",
    "last_name": "Guest",
    "address": "1 Elm Row",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
}


@pytest.fixture()
def place_order():
    def _place(product, quantity=2, session_id="sess-dash"):
        cart_id = current_domain.process(ResolveCart(session_id=session_id), asynchronous=False)
        current_domain.process(
            AddToCart(cart_id=cart_id, product=product.slug, quantity=quantity), asynchronous=False
        )
        number = current_domain.process(PlaceOrder(cart_id=cart_id, **CONTACT), asynchronous=False)
        return current_domain.repository_for(Order).find_by_number(number)

    return _place


def _advance(order, *statuses):
    for status in statuses:
        current_domain.process(UpdateOrderStatus(order_id=order.id, status=status), asynchronous=False)


class TestDashboardMetrics:
    def test_empty_store(self):
        metrics = dashboard_metrics()
        assert metrics["total_products"] == 0
        assert metrics["total_orders"] == 0
        assert metrics["total_revenue"] == 0.0

    def test_revenue_counts_delivered_orders_only(self, product, place_order):
        delivered = place_order(product)
        _advance(delivered, "processing", "shipped", "delivered")
        place_order(product, session_id="sess-other")

        metrics = dashboard_metrics()

        assert metrics["total_orders"] == 2
        assert metrics["pending_orders"] == 1
        assert metrics["total_revenue"] == 27.59

    def test_customers_exclude_administrators(self, customer, admin):
        assert dashboard_metrics()["total_customers"] == 1

    def test_active_products_and_pending_reviews(self, make_product, customer):
        shown = make_product(name="Woven Anklet")
        make_product(name="Retired Anklet", active=False)
        current_domain.process(
            SubmitReview(
                product=shown.slug,
                user_id=customer.id,
                rating=4,
                title="Pretty",
                content="Colours held up after a summer at the beach.",
            ),
            asynchronous=False,
        )

        metrics = dashboard_metrics()

        assert metrics["total_products"] == 2
        assert metrics["active_products"] == 1
        assert metrics["pending_reviews"] == 1


class TestListings:
    def test_low_stock_products(self, make_product):
        make_product(name="Plenty", inventory_count=40)
        scarce = make_product(name="Scarce", inventory_count=2)

        assert [p.id for p in low_stock_products()] == [scarce.id]

    def test_recent_orders_newest_first(self, product, place_order):
        first = place_order(product, quantity=1, session_id="sess-a")
        second = place_order(product, quantity=1, session_id="sess-b")

        assert [o.id for o in recent_orders()] == [second.id, first.id]
        assert len(recent_orders(limit=1)) == 1


class TestAnalytics:
    def test_orders_by_status(self, product, place_order):
        order = place_order(product)
        _advance(order, "cancelled")
        place_order(product, session_id="sess-other")

        by_status = analytics()["orders_by_status"]

        assert by_status["cancelled"]["orders"] == 1
        assert by_status["pending"] == {"orders": 1, "revenue": 27.59}
        assert by_status["delivered"]["orders"] == 0

    def test_top_products_skip_cancelled_orders(self, make_product, place_order):
        mug = make_product(name="Stoneware Mug", price=12.0, inventory_count=20)
        bowl = make_product(name="Stoneware Bowl", price=18.0, inventory_count=20)
        place_order(mug, quantity=3, session_id="sess-a")
        cancelled = place_order(bowl, quantity=5, session_id="sess-b")
        _advance(cancelled, "cancelled")
        place_order(bowl, quantity=1, session_id="sess-c")

        top = analytics()["top_products"]

        assert [entry["name"] for entry in top] == ["Stoneware Mug", "Stoneware Bowl"]
        assert top[0]["quantity"] == 3
        assert top[0]["revenue"] == 36.0
        assert top[1]["quantity"] == 1
