import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay, then boot the application the way uvicorn does.

    Importing ``app`` loads every domain element and initializes the storefront once.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    import app  # noqa: F401


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    from storefront.notifications.channel import reset_channels

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_channels()
    ctx.pop()


# ---------------------------------------------------------------------------
# Catalogue fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_category():
    from protean import current_domain

    from storefront.catalogue.category.category import Category
    from storefront.catalogue.category.management import CreateCategory

    def _make(name="Bracelets", **overrides):
        category_id = current_domain.process(CreateCategory(name=name, **overrides), asynchronous=False)
        return current_domain.repository_for(Category).get(category_id)

    return _make


@pytest.fixture()
def category(make_category):
    return make_category()


@pytest.fixture()
def make_product(category):
    from protean import current_domain

    from storefront.catalogue.product.creation import CreateProduct
    from storefront.catalogue.product.product import Product

    def _make(name="Friendship Bracelet", price=10.0, inventory_count=10, **overrides):
        overrides.setdefault("category_id", category.id)
        overrides.setdefault("description", f"A handmade {name.lower()}.")
        product_id = current_domain.process(
            CreateProduct(name=name, price=price, inventory_count=inventory_count, **overrides),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def product(make_product):
    return make_product()


# ---------------------------------------------------------------------------
# Identity fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    from protean import current_domain

    from storefront.identity.user.registration import CreateAdminUser, RegisterUser
    from storefront.identity.user.user import User

    def _make(email="jane@example.com", first_name="Jane", last_name="Doe", admin=False, **profile):
        command_cls = CreateAdminUser if admin else RegisterUser
        user_id = current_domain.process(
            command_cls(email=email, first_name=first_name, last_name=last_name, **profile),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture()
def customer(make_user):
    return make_user(
        email="jane@example.com",
        address="12 Market Street",
        city="Springfield",
        state="IL",
        zip_code="62701",
    )


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@example.com", first_name="Ada", last_name="Admin", admin=True)


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def app():
    from app import app as storefront_app

    return storefront_app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture()
def guest_headers():
    return {"X-Session-Id": "session-guest-001"}


@pytest.fixture()
def customer_headers(customer):
    return {"X-User-Id": str(customer.id), "X-Session-Id": "session-customer-001"}


@pytest.fixture()
def admin_headers(admin):
    return {"X-User-Id": str(admin.id)}
