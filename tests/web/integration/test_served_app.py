"""The application module as uvicorn serves it: domain booted, every command handled."""

from storefront.domain import storefront
from storefront.identity.user.registration import RegisterUser
from storefront.ordering.cart.items import AddToCart


class TestBoot:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "storefront"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-Id": "req-42"})
        assert response.headers["X-Request-Id"] == "req-42"

    def test_nested_commands_are_registered(self):
        registered = {record.cls for record in storefront.registry.commands.values()}
        assert RegisterUser in registered
        assert AddToCart in registered


class TestMutationsOverHttp:
    def test_register_user(self, client):
        response = client.post(
            "/users", json={"email": "ivy@example.com", "first_name": "Ivy", "last_name": "Stone"}
        )
        assert response.status_code == 201

    def test_add_to_cart_and_check_out(self, client, guest_headers, product):
        added = client.post("/cart_items", json={"product": product.slug, "quantity": 1}, headers=guest_headers)
        assert added.status_code == 200

        placed = client.post(
            "/orders",
            json={
                "email": "guest@example.com",
                "first_name": "Sam",
                "last_name": "Guest",
                "address": "1 Elm Row",
                "city": "Portland",
                "state": "OR",
                "zip_code": "97201",
            },
            headers=guest_headers,
        )
        assert placed.status_code == 201
        assert client.get("/cart", headers=guest_headers).json()["cart"]["items"] == []
