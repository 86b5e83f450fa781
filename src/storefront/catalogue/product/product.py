"""Product aggregate root with the ProductVariant entity."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.events import (
    ProductCreated,
    ProductDetailsUpdated,
    ProductFlagsChanged,
    ProductPriceChanged,
    VariantAdded,
    VariantRemoved,
    VariantUpdated,
)
from storefront.domain import storefront
from storefront.shared.money import format_money
from storefront.shared.queries import exists, fetch_all

LOW_STOCK_THRESHOLD = 5

# Attributes an admin may edit through UpdateProduct
DETAIL_FIELDS = (
    "name",
    "description",
    "price",
    "category_id",
    "inventory_count",
    "weight",
    "dimensions",
    "materials",
    "care_instructions",
    "image_url",
)

VARIANT_FIELDS = (
    "name",
    "sku",
    "price",
    "inventory_count",
    "color",
    "size",
    "style",
    "active",
    "image_url",
)


def _positive(value, field_name):
    if value is not None and value <= 0:
        raise ValidationError({field_name: ["must be greater than 0"]})


@storefront.entity(part_of="Product")
class ProductVariant:
    """A purchasable configuration of a product with its own price and stock."""

    name = String(required=True, max_length=255)
    sku = String(required=True, max_length=80, unique=True)
    price = Float(required=True)
    inventory_count = Integer(default=0, min_value=0)
    color = String(max_length=50)
    size = String(max_length=50)
    style = String(max_length=50)
    active = Boolean(default=True)
    image_url = String(max_length=500)
    created_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        _positive(self.price, "price")

    def in_stock(self):
        return (self.inventory_count or 0) > 0

    def low_stock(self, threshold=LOW_STOCK_THRESHOLD):
        return (self.inventory_count or 0) <= threshold

    def display_price(self):
        return format_money(self.price)

    def description(self):
        """``Color: Red, Size: M`` for whichever attributes are set."""
        parts = []
        if self.color:
            parts.append(f"Color: {self.color}")
        if self.size:
            parts.append(f"Size: {self.size}")
        if self.style:
            parts.append(f"Style: {self.style}")
        return ", ".join(parts)

    def display_name(self, product_name):
        attributes = [value for value in (self.color, self.size, self.style) if value]
        if attributes:
            return f"{product_name} - {', '.join(attributes)}"
        return f"{product_name} - {self.name}" if self.name else product_name


@storefront.aggregate
class Product:
    """A catalogue item.

    ``slug`` and ``sku`` are assigned by the creation handlers, which own the
    collision checks against the rest of the catalogue. Variants live inside
    the aggregate; when a product has active variants its stock is the sum of
    theirs.
    """

    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True)
    sku = String(required=True, max_length=50, unique=True)
    slug = String(required=True, max_length=255, unique=True)
    category_id = Identifier(required=True)
    active = Boolean(default=True)
    featured = Boolean(default=False)
    inventory_count = Integer(default=0, min_value=0)
    weight = Float()
    dimensions = String(max_length=100)
    materials = Text()
    care_instructions = Text()
    image_url = String(max_length=500)
    variants = HasMany(ProductVariant)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        _positive(self.price, "price")

    @invariant.post
    def weight_must_be_positive(self):
        _positive(self.weight, "weight")

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, description, price, sku, slug, category_id, **attributes):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            sku=sku,
            slug=slug,
            category_id=category_id,
            created_at=now,
            updated_at=now,
            **{key: value for key, value in attributes.items() if value is not None},
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                sku=sku,
                slug=slug,
                category_id=category_id,
                price=price,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Details and flags
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        unknown = sorted(set(changes) - set(DETAIL_FIELDS))
        if unknown:
            raise ValidationError({field: ["is not an editable attribute"] for field in unknown})

        previous_price = self.price
        with atomic_change(self):
            for field_name, value in changes.items():
                setattr(self, field_name, value)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                inventory_count=self.inventory_count,
                category_id=self.category_id,
            )
        )
        if self.price != previous_price:
            self.raise_(
                ProductPriceChanged(
                    product_id=self.id,
                    previous_price=previous_price,
                    new_price=self.price,
                )
            )

    def set_flags(self, active=None, featured=None):
        if active is not None:
            self.active = bool(active)
        if featured is not None:
            self.featured = bool(featured)
        self.updated_at = datetime.now(UTC)

        self.raise_(ProductFlagsChanged(product_id=self.id, active=self.active, featured=self.featured))

    def toggle_active(self):
        self.set_flags(active=not self.active)

    def toggle_featured(self):
        self.set_flags(featured=not self.featured)

    # -------------------------------------------------------------------
    # Variants
    # -------------------------------------------------------------------
    def get_variant(self, variant_id) -> ProductVariant:
        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ObjectNotFoundError(f"Variant `{variant_id}` does not exist on product `{self.slug}`.")
        return variant

    def add_variant(self, name, sku, price=None, **attributes):
        if any(v.sku == sku for v in self.variants):
            raise ValidationError({"sku": ["has already been taken"]})

        variant = ProductVariant(
            name=name,
            sku=sku,
            price=price if price is not None else self.price,
            created_at=datetime.now(UTC),
            **{key: value for key, value in attributes.items() if value is not None},
        )
        self.add_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=self.id,
                variant_id=variant.id,
                sku=variant.sku,
                price=variant.price,
            )
        )
        return variant

    def update_variant(self, variant_id, **changes):
        unknown = sorted(set(changes) - set(VARIANT_FIELDS))
        if unknown:
            raise ValidationError({field: ["is not an editable attribute"] for field in unknown})

        variant = self.get_variant(variant_id)
        new_sku = changes.get("sku")
        if new_sku and any(v.sku == new_sku and v.id != variant.id for v in self.variants):
            raise ValidationError({"sku": ["has already been taken"]})

        for field_name, value in changes.items():
            setattr(variant, field_name, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantUpdated(
                product_id=self.id,
                variant_id=variant.id,
                sku=variant.sku,
                price=variant.price,
                inventory_count=variant.inventory_count,
            )
        )
        return variant

    def remove_variant(self, variant_id):
        variant = self.get_variant(variant_id)
        self.remove_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(VariantRemoved(product_id=self.id, variant_id=variant_id))

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def active_variants(self):
        return [v for v in self.variants if v.active]

    def available_variants(self):
        return [v for v in self.active_variants() if v.in_stock()]

    def has_variants(self):
        return bool(self.active_variants())

    def in_stock(self):
        return (self.inventory_count or 0) > 0

    def low_stock(self, threshold=LOW_STOCK_THRESHOLD):
        return (self.inventory_count or 0) <= threshold

    def total_inventory(self):
        if self.has_variants():
            return sum(v.inventory_count or 0 for v in self.active_variants())
        return self.inventory_count or 0

    def display_price(self):
        return format_money(self.price)


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_slug(self, slug: str, active_only: bool = False) -> Product:
        filters = {"slug": slug, "active": True} if active_only else {"slug": slug}
        matches = fetch_all(self._dao, **filters)
        if not matches:
            raise ObjectNotFoundError(f"Product with slug `{slug}` does not exist.")
        return matches[0]

    def find_by_ids(self, product_ids) -> list[Product]:
        wanted = sorted({str(pid) for pid in product_ids})
        return fetch_all(self._dao, id__in=wanted) if wanted else []

    def slug_exists(self, slug: str) -> bool:
        return exists(self._dao, slug=slug)

    def sku_exists(self, sku: str) -> bool:
        return exists(self._dao, sku=sku)

    def variant_sku_taken(self, sku: str, exclude_variant_id=None) -> bool:
        variants = current_domain.repository_for(ProductVariant)._dao
        return any(str(v.id) != str(exclude_variant_id) for v in fetch_all(variants, sku=sku))

    def everything(self) -> list[Product]:
        return fetch_all(self._dao, order_by="created_at")

    def active(self) -> list[Product]:
        return fetch_all(self._dao, order_by="created_at", active=True)

    def in_category(self, category_id, active_only: bool = False) -> list[Product]:
        filters = {"category_id": str(category_id)}
        if active_only:
            filters["active"] = True
        return fetch_all(self._dao, order_by="created_at", **filters)

    def count_in_category(self, category_id) -> int:
        return len(self.in_category(category_id))

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
