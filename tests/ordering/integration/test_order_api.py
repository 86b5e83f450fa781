"""Integration tests for checkout and order endpoints via TestClient."""

from protean import current_domain

from storefront.ordering.order.order import Order

SHIPPING = {
    "email": "guest@example.com",
    "first_name": "Sam",
    "last_name": "Guest",
    "address": "1 Elm Row",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97201",
}


def _fill_cart(client, headers, product, quantity=2):
    response = client.post("/cart_items", json={"product": product.slug, "quantity": quantity}, headers=headers)
    assert response.status_code == 200


def _checkout(client, headers, **details):
    return client.post("/orders", json={**SHIPPING, **details}, headers=headers, follow_redirects=False)


class TestPlaceOrder:
    def test_guest_checkout(self, client, guest_headers, product):
        _fill_cart(client, guest_headers, product)

        response = _checkout(client, guest_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["order_number"].startswith("BM")
        assert body["order"]["total_amount"] == 27.59
        assert body["order"]["formatted_total"] == "$27.59"
        assert body["order"]["status"] == "pending"
        assert client.get("/cart", headers=guest_headers).json()["cart"]["items"] == []

    def test_empty_cart(self, client, guest_headers):
        response = _checkout(client, guest_headers)
        assert response.status_code == 422
        assert response.json() == {
            "error": {"cart": ["Your cart is empty. Please add some items before checkout."]}
        }

    def test_browser_is_redirected_to_order(self, client, guest_headers, product):
        _fill_cart(client, guest_headers, product)
        response = _checkout(client, {**guest_headers, "Accept": "text/html"})
        assert response.status_code == 303
        order = current_domain.repository_for(Order).everything()[0]
        assert response.headers["location"] == f"/orders/{order.order_number}"

    def test_signed_in_checkout_uses_profile(self, client, customer_headers, product):
        _fill_cart(client, customer_headers, product)
        response = client.post("/orders", json={}, headers=customer_headers)
        assert response.status_code == 201
        assert response.json()["order"]["email"] == "jane@example.com"


class TestViewOrders:
    def test_owner_can_view_order(self, client, guest_headers, product):
        _fill_cart(client, guest_headers, product)
        order_number = _checkout(client, guest_headers).json()["order_number"]

        response = client.get(f"/orders/{order_number}", headers=guest_headers)

        assert response.status_code == 200
        assert response.json()["order"]["items"][0]["quantity"] == 2

    def test_other_session_is_refused(self, client, guest_headers, product):
        _fill_cart(client, guest_headers, product)
        order_number = _checkout(client, guest_headers).json()["order_number"]

        response = client.get(f"/orders/{order_number}", headers={"X-Session-Id": "someone-else"})

        assert response.status_code == 403
        assert response.json() == {"error": "You are not authorized to access this page."}

    def test_unknown_order(self, client, guest_headers):
        assert client.get("/orders/BM00000000FFFFFFFF", headers=guest_headers).status_code == 404

    def test_list_only_own_orders(self, client, guest_headers, customer_headers, product):
        _fill_cart(client, guest_headers, product, 1)
        _checkout(client, guest_headers)
        _fill_cart(client, customer_headers, product, 1)
        client.post("/orders", json={}, headers=customer_headers)

        orders = client.get("/orders", headers=customer_headers).json()["orders"]

        assert len(orders) == 1
        assert orders[0]["email"] == "jane@example.com"
