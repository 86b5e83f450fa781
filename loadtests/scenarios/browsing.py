"""Anonymous catalogue browsing.

Read-only traffic: listings with filters and sorts, search, category pages,
product detail with reviews, and the blog. Most storefront requests look
like this.
"""

import random

from locust import HttpUser, TaskSet, between, task

from loadtests.data_generators import search_term
from loadtests.helpers.response import fail
from loadtests.helpers.state import ShopperState

SORTS = ["newest", "oldest", "name_asc", "name_desc", "price_asc", "price_desc", "featured"]
PRICE_RANGES = ["under_10", "10_25", "25_50", "over_50"]


class CatalogueBrowsing(TaskSet):
    """Random walk over the public catalogue pages."""

    def on_start(self):
        self.state = ShopperState()
        self.category_slugs = []

    @task(5)
    def list_products(self):
        params = {"sort": random.choice(SORTS)}
        if random.random() < 0.3:
            params["price_range"] = random.choice(PRICE_RANGES)
        if random.random() < 0.2:
            params["availability"] = "in_stock"
        with self.client.get(
            "/products", params=params, headers=self.state.headers(), catch_response=True, name="GET /products"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "List products")
                return
            body = resp.json()
            self.state.product_slugs = [p["slug"] for p in body["products"]["items"]]
            self.category_slugs = [c["slug"] for c in body["categories"]]

    @task(3)
    def view_product(self):
        if not self.state.product_slugs:
            return
        slug = random.choice(self.state.product_slugs)
        with self.client.get(
            f"/products/{slug}", headers=self.state.headers(), catch_response=True, name="GET /products/{slug}"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "View product")

    @task(2)
    def search(self):
        with self.client.get(
            "/products/search",
            params={"q": search_term()},
            headers=self.state.headers(),
            catch_response=True,
            name="GET /products/search",
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "Search")

    @task(2)
    def view_category(self):
        if not self.category_slugs:
            return
        slug = random.choice(self.category_slugs)
        with self.client.get(
            f"/categories/{slug}", headers=self.state.headers(), catch_response=True, name="GET /categories/{slug}"
        ) as resp:
            if resp.status_code != 200:
                fail(resp, "View category")

    @task(1)
    def read_blog(self):
        with self.client.get("/articles", catch_response=True, name="GET /articles") as resp:
            if resp.status_code != 200:
                fail(resp, "List articles")
                return
            slugs = [a["slug"] for a in resp.json()["articles"]]
        if slugs:
            self.client.get(f"/articles/{random.choice(slugs)}", name="GET /articles/{slug}")


class BrowsingUser(HttpUser):
    wait_time = between(1.0, 4.0)
    tasks = [CatalogueBrowsing]
