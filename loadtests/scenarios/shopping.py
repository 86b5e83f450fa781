"""Cart and checkout journeys.

Stateful SequentialTaskSets: each step relies on the previous one, so a
failed step interrupts the journey and the user starts a fresh one.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import review_payload, shipping_details, shopper_profile
from loadtests.helpers.response import fail
from loadtests.helpers.state import ShopperState


class _Journey(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState()

    def pick_products(self):
        with self.client.get(
            "/products",
            params={"availability": "in_stock"},
            headers=self.state.headers(),
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "List products")
                self.interrupt()
            self.state.product_slugs = [p["slug"] for p in resp.json()["products"]["items"]]
        if not self.state.product_slugs:
            self.interrupt()

    def add_random_item(self, quantity=1):
        slug = random.choice(self.state.product_slugs)
        with self.client.post(
            "/cart_items",
            json={"product": slug, "quantity": quantity},
            headers=self.state.headers(),
            catch_response=True,
            name="POST /cart_items",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "Add to cart")
                self.interrupt()
            self.state.cart_item_ids = [item["id"] for item in resp.json()["cart"]["items"]]


class GuestCheckoutJourney(_Journey):
    """Browse -> add two items -> change a quantity -> check out -> view the order."""

    @task
    def browse(self):
        self.pick_products()

    @task
    def fill_cart(self):
        self.add_random_item()
        self.add_random_item()

    @task
    def change_quantity(self):
        item_id = random.choice(self.state.cart_item_ids)
        with self.client.patch(
            f"/cart_items/{item_id}",
            json={"quantity": 2},
            headers=self.state.headers(),
            catch_response=True,
            name="PATCH /cart_items/{id}",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "Update cart item")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=shipping_details(),
            headers=self.state.headers(),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code != 201:
                fail(resp, "Checkout")
                self.interrupt()
            self.state.order_number = resp.json()["order_number"]

    @task
    def view_order(self):
        self.client.get(f"/orders/{self.state.order_number}", headers=self.state.headers(), name="GET /orders/{number}")

    @task
    def done(self):
        self.interrupt()


class AbandonedCartJourney(_Journey):
    """Browse -> add an item -> remove it -> leave. Feeds the abandoned cart cleanup."""

    @task
    def browse(self):
        self.pick_products()

    @task
    def add_item(self):
        self.add_random_item(quantity=random.randint(1, 3))

    @task
    def remove_item(self):
        item_id = self.state.cart_item_ids[0]
        with self.client.delete(
            f"/cart_items/{item_id}", headers=self.state.headers(), catch_response=True, name="DELETE /cart_items/{id}"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "Remove cart item")

    @task
    def done(self):
        self.interrupt()


class RegisteredShopperJourney(_Journey):
    """Register -> shop -> check out with the saved profile -> review a purchase."""

    @task
    def register(self):
        self.state.profile = shopper_profile()
        with self.client.post("/users", json=self.state.profile, catch_response=True, name="POST /users") as resp:
            if resp.status_code != 201:
                fail(resp, "Register")
                self.interrupt()
            self.state.user_id = resp.json()["user_id"]

    @task
    def browse(self):
        self.pick_products()

    @task
    def fill_cart(self):
        self.add_random_item(quantity=random.randint(1, 2))

    @task
    def checkout(self):
        with self.client.post(
            "/orders", json={}, headers=self.state.headers(), catch_response=True, name="POST /orders"
        ) as resp:
            if resp.status_code != 201:
                fail(resp, "Checkout")
                self.interrupt()
            self.state.order_number = resp.json()["order_number"]

    @task
    def order_history(self):
        self.client.get("/orders", headers=self.state.headers(), name="GET /orders")

    @task
    def review(self):
        slug = random.choice(self.state.product_slugs)
        with self.client.post(
            f"/products/{slug}/reviews",
            json=review_payload(),
            headers=self.state.headers(),
            catch_response=True,
            name="POST /products/{slug}/reviews",
        ) as resp:
            # A second review of the same product is refused with 422.
            if resp.status_code not in (201, 422):
                fail(resp, "Submit review")
            else:
                resp.success()

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(0.5, 3.0)
    tasks = {
        GuestCheckoutJourney: 4,
        AbandonedCartJourney: 3,
        RegisteredShopperJourney: 3,
    }
