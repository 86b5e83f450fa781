"""Integration tests for the account endpoints via TestClient."""

from protean import current_domain

from storefront.identity.user.user import User


class TestRegister:
    def test_register(self, client):
        response = client.post(
            "/users",
            json={"email": "sam@example.com", "first_name": "Sam", "last_name": "Lee", "zip_code": "97201"},
        )

        assert response.status_code == 201
        user = current_domain.repository_for(User).get(response.json()["user_id"])
        assert user.email == "sam@example.com"

    def test_invalid_email(self, client):
        response = client.post("/users", json={"email": "nope", "first_name": "Sam", "last_name": "Lee"})
        assert response.status_code == 422
        assert "email" in response.json()["error"]

    def test_missing_names(self, client):
        assert client.post("/users", json={"email": "sam@example.com"}).status_code == 422


class TestAccount:
    def test_show_own_account(self, client, customer_headers):
        response = client.get("/account", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "jane@example.com"

    def test_guest_is_refused(self, client, guest_headers):
        response = client.get("/account", headers=guest_headers)
        assert response.status_code == 403

    def test_guest_browser_is_sent_home(self, client, guest_headers):
        response = client.get("/account", headers={**guest_headers, "Accept": "text/html"}, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "alert" in response.cookies

    def test_update_account(self, client, customer_headers):
        response = client.patch("/account", json={"city": "Chicago"}, headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["user"]["city"] == "Chicago"
