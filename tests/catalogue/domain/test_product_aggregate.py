"""Tests for the Product aggregate and its variants."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.product.events import (
    ProductCreated,
    ProductFlagsChanged,
    ProductPriceChanged,
    VariantAdded,
    VariantRemoved,
)
from storefront.catalogue.product.product import Product


def _make_product(**overrides):
    attributes = {
        "name": "Friendship Bracelet",
        "description": "Woven by hand.",
        "price": 10.0,
        "sku": "BRA-FRIE-3FA9C1",
        "slug": "friendship-bracelet",
        "category_id": "cat-001",
        "inventory_count": 8,
    }
    attributes.update(overrides)
    return Product.create(**attributes)


class TestCreation:
    def test_create_sets_defaults(self):
        product = _make_product()
        assert product.active is True
        assert product.featured is False
        assert product.created_at is not None

    def test_create_raises_event(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].sku == "BRA-FRIE-3FA9C1"

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(price=0)
        assert "price" in exc.value.messages

    def test_weight_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(weight=-1.0)
        assert "weight" in exc.value.messages

    def test_inventory_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            _make_product(inventory_count=-1)


class TestDetails:
    def test_update_details(self):
        product = _make_product()
        product.update_details(name="Braided Bracelet", inventory_count=3)
        assert product.name == "Braided Bracelet"
        assert product.inventory_count == 3

    def test_price_change_raises_event(self):
        product = _make_product()
        product.update_details(price=12.5)
        events = [e for e in product._events if isinstance(e, ProductPriceChanged)]
        assert events[0].previous_price == 10.0
        assert events[0].new_price == 12.5

    def test_unchanged_price_raises_no_price_event(self):
        product = _make_product()
        product.update_details(name="Renamed")
        assert not [e for e in product._events if isinstance(e, ProductPriceChanged)]

    def test_unknown_attribute_is_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc:
            product.update_details(sku="NEW")
        assert "sku" in exc.value.messages

    def test_invalid_update_is_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(price=-5)


class TestFlags:
    def test_toggle_active(self):
        product = _make_product()
        product.toggle_active()
        assert product.active is False
        product.toggle_active()
        assert product.active is True

    def test_toggle_featured_raises_event(self):
        product = _make_product()
        product.toggle_featured()
        event = [e for e in product._events if isinstance(e, ProductFlagsChanged)][-1]
        assert event.featured is True


class TestVariants:
    def test_variant_inherits_product_price(self):
        product = _make_product()
        variant = product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red")
        assert variant.price == 10.0

    def test_variant_own_price(self):
        product = _make_product()
        variant = product.add_variant("Large", "BRA-FRIE-3FA9C1-L", price=14.0, size="Large")
        assert variant.price == 14.0

    def test_add_variant_raises_event(self):
        product = _make_product()
        product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red")
        assert any(isinstance(e, VariantAdded) for e in product._events)

    def test_duplicate_variant_sku_is_rejected(self):
        product = _make_product()
        product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red")
        with pytest.raises(ValidationError) as exc:
            product.add_variant("Rose", "BRA-FRIE-3FA9C1-R", color="Rose")
        assert "sku" in exc.value.messages

    def test_update_variant(self):
        product = _make_product()
        variant = product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red", inventory_count=2)
        product.update_variant(variant.id, inventory_count=7)
        assert product.get_variant(variant.id).inventory_count == 7

    def test_remove_variant(self):
        product = _make_product()
        variant = product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red")
        product.remove_variant(variant.id)
        assert product.variants == []
        assert any(isinstance(e, VariantRemoved) for e in product._events)

    def test_unknown_variant(self):
        product = _make_product()
        with pytest.raises(ObjectNotFoundError):
            product.get_variant("missing")

    def test_variant_descriptions(self):
        product = _make_product()
        variant = product.add_variant("Red M", "BRA-FRIE-3FA9C1-RM", color="Red", size="M")
        assert variant.description() == "Color: Red, Size: M"
        assert variant.display_name(product.name) == "Friendship Bracelet - Red, M"

    def test_plain_variant_display_name(self):
        product = _make_product()
        variant = product.add_variant("Gift box", "BRA-FRIE-3FA9C1-GIF")
        assert variant.display_name(product.name) == "Friendship Bracelet - Gift box"


class TestStock:
    def test_total_inventory_without_variants(self):
        assert _make_product(inventory_count=8).total_inventory() == 8

    def test_total_inventory_sums_active_variants(self):
        product = _make_product(inventory_count=8)
        product.add_variant("Red", "BRA-FRIE-3FA9C1-R", color="Red", inventory_count=2)
        product.add_variant("Blue", "BRA-FRIE-3FA9C1-B", color="Blue", inventory_count=3)
        product.add_variant("Green", "BRA-FRIE-3FA9C1-G", color="Green", inventory_count=9, active=False)
        assert product.total_inventory() == 5

    def test_low_stock_threshold(self):
        assert _make_product(inventory_count=5).low_stock() is True
        assert _make_product(inventory_count=6).low_stock() is False

    def test_display_price(self):
        assert _make_product(price=12.5).display_price() == "$12.50"
