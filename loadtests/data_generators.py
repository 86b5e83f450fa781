"""Faker-based payloads for the storefront load test scenarios.

Every generator returns a dict keyed by the field names of the API's pydantic
request schemas, with values that satisfy the domain's validation rules.
"""

import random
import uuid

from faker import Faker

fake = Faker()

MATERIALS = ["Cotton", "Stoneware", "Walnut", "Linen", "Brass", "Wool"]
COLORS = ["Red", "Blue", "Green", "Ochre", "Charcoal"]
SIZES = ["Small", "Medium", "Large"]


# ---------- Shoppers ----------


def unique_email() -> str:
    """Emails must be unique per user, so a short random tag is appended."""
    return f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def shopper_profile() -> dict:
    """RegisterUserRequest payload."""
    return {
        "email": unique_email(),
        "first_name": fake.first_name()[:100],
        "last_name": fake.last_name()[:100],
        "phone": fake.numerify("+1 ### ### ####"),
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode(),
        "country": "US",
    }


def shipping_details(profile: dict | None = None) -> dict:
    """PlaceOrderRequest payload; reuses a registered shopper's details when given."""
    source = profile or shopper_profile()
    details = {key: source[key] for key in ("email", "first_name", "last_name", "address", "city", "state", "zip_code")}
    details["payment_method"] = random.choice(["card", "paypal"])
    details["shipping_method"] = random.choice(["standard", "express"])
    return details


def review_payload() -> dict:
    """SubmitReviewRequest payload, skewed towards happy customers."""
    return {
        "rating": random.choices([1, 2, 3, 4, 5], weights=[1, 1, 2, 4, 6])[0],
        "title": fake.sentence(nb_words=4)[:100],
        "content": fake.paragraph(nb_sentences=3)[:1000],
    }


def search_term() -> str:
    return random.choice(MATERIALS + COLORS + [fake.word()])


# ---------- Back office ----------


def category_payload() -> dict:
    """CreateCategoryRequest payload with a name unlikely to collide."""
    return {
        "name": f"{fake.word().capitalize()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(nb_words=8),
    }


def product_payload(category_id: str) -> dict:
    """CreateProductRequest payload priced between $5 and $120."""
    material = random.choice(MATERIALS)
    return {
        "name": f"{material} {fake.word().capitalize()} {uuid.uuid4().hex[:4]}",
        "description": fake.paragraph(nb_sentences=2),
        "price": round(random.uniform(5, 120), 2),
        "category_id": category_id,
        "inventory_count": random.randint(20, 200),
        "weight": round(random.uniform(0.1, 3.0), 2),
        "materials": material,
    }


def variant_payload() -> dict:
    """VariantRequest payload; the SKU is derived server-side from colour and size."""
    color, size = random.choice(COLORS), random.choice(SIZES)
    return {
        "name": f"{size} {color}",
        "color": color,
        "size": size,
        "inventory_count": random.randint(5, 50),
    }
