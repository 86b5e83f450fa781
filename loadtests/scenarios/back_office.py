"""Administrator workload.

Needs an administrator id, passed as ``--admin-id`` or ``STOREFRONT_ADMIN_ID``;
create one with ``python src/manage.py create-admin``. Without it the user stops
at start-up.
"""

import random

from locust import HttpUser, SequentialTaskSet, TaskSet, between, task
from locust.exception import StopUser

from loadtests.data_generators import category_payload, product_payload, variant_payload
from loadtests.helpers.response import fail
from loadtests.helpers.state import BackOfficeState

NEXT_STATUS = {"pending": "processing", "processing": "shipped", "shipped": "delivered"}


def _admin_state(user) -> BackOfficeState:
    options = user.environment.parsed_options
    admin_id = getattr(options, "admin_id", None) if options else None
    if not admin_id:
        raise StopUser()
    return BackOfficeState(admin_id=admin_id)


class CatalogueCuration(SequentialTaskSet):
    """Create a category -> add a product -> add a variant -> feature it."""

    def on_start(self):
        self.state = _admin_state(self.user)

    @task
    def create_category(self):
        with self.client.post(
            "/admin/categories",
            json=category_payload(),
            headers=self.state.headers(),
            catch_response=True,
            name="POST /admin/categories",
        ) as resp:
            if resp.status_code != 201:
                fail(resp, "Create category")
                self.interrupt()
            self.state.category_id = resp.json()["category_id"]

    @task
    def create_product(self):
        with self.client.post(
            "/admin/products",
            json=product_payload(self.state.category_id),
            headers=self.state.headers(),
            catch_response=True,
            name="POST /admin/products",
        ) as resp:
            if resp.status_code != 201:
                fail(resp, "Create product")
                self.interrupt()
            self.state.product_id = resp.json()["product_id"]

    @task
    def add_variant(self):
        with self.client.post(
            f"/admin/products/{self.state.product_id}/variants",
            json=variant_payload(),
            headers=self.state.headers(),
            catch_response=True,
            name="POST /admin/products/{id}/variants",
        ) as resp:
            if resp.status_code != 201:
                fail(resp, "Add variant")

    @task
    def feature_product(self):
        with self.client.post(
            f"/admin/products/{self.state.product_id}/toggle_featured",
            headers=self.state.headers(),
            catch_response=True,
            name="POST /admin/products/{id}/toggle_featured",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "Toggle featured")

    @task
    def done(self):
        self.interrupt()


class OrderDesk(TaskSet):
    """Dashboard checks, order fulfilment and moderation."""

    def on_start(self):
        self.state = _admin_state(self.user)

    @task(3)
    def dashboard(self):
        self.client.get("/admin/dashboard", headers=self.state.headers(), name="GET /admin/dashboard")

    @task(3)
    def advance_an_order(self):
        with self.client.get(
            "/admin/orders", headers=self.state.headers(), catch_response=True, name="GET /admin/orders"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "List orders")
                return
            open_orders = [o for o in resp.json()["orders"] if o["status"] in NEXT_STATUS]
        if not open_orders:
            return
        order = random.choice(open_orders)
        with self.client.post(
            f"/admin/orders/{order['id']}/update_status",
            json={"status": NEXT_STATUS[order["status"]]},
            headers=self.state.headers(),
            catch_response=True,
            name="POST /admin/orders/{id}/update_status",
        ) as resp:
            # Another administrator may have moved the order first.
            if resp.status_code not in (200, 422):
                fail(resp, "Update order status")
            else:
                resp.success()

    @task(2)
    def moderate_a_review(self):
        with self.client.get(
            "/admin/reviews",
            params={"state": "pending"},
            headers=self.state.headers(),
            catch_response=True,
            name="GET /admin/reviews",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "List pending reviews")
                return
            pending = resp.json()["reviews"]
        if pending:
            action = random.choice(["approve", "approve", "reject"])
            self.client.post(
                f"/admin/reviews/{pending[0]['id']}/{action}",
                headers=self.state.headers(),
                name=f"POST /admin/reviews/{{id}}/{action}",
            )

    @task(1)
    def analytics(self):
        self.client.get("/admin/analytics", headers=self.state.headers(), name="GET /admin/analytics")

    @task(1)
    def reclaim_carts(self):
        self.client.post(
            "/admin/carts/cleanup",
            json={"idle_hours": 24},
            headers=self.state.headers(),
            name="POST /admin/carts/cleanup",
        )


class BackOfficeUser(HttpUser):
    wait_time = between(2.0, 6.0)
    tasks = {CatalogueCuration: 1, OrderDesk: 3}
