"""Cart aggregate: the lines a shopper has picked before checkout.

A cart belongs either to a signed-in user or to an anonymous session, never
both. Lines are unique per (product, variant); adding the same pair again
raises the quantity of the existing line. The cart stores references and
quantities only. Prices and names are resolved from the catalogue whenever
the cart is shown or checked out.
"""

from datetime import UTC, datetime, timedelta

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartsMerged,
)
from storefront.shared.queries import fetch_all

ABANDONED_AFTER = timedelta(hours=24)


def _naive_utc(moment):
    if moment is None:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def _same_variant(left, right):
    return str(left or "") == str(right or "")


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier()
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cart_has_exactly_one_owner(self):
        if bool(self.user_id) == bool(self.session_id):
            raise ValidationError({"cart": ["A cart belongs to either a user or a session"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id=None, session_id=None):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            session_id=None if user_id else session_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------
    def find_item(self, product_id, variant_id=None):
        return next(
            (
                i
                for i in self.items
                if str(i.product_id) == str(product_id) and _same_variant(i.variant_id, variant_id)
            ),
            None,
        )

    def get_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError("Cart item not found.")
        return item

    def add_item(self, product_id, variant_id=None, quantity=1):
        """Increase the (product, variant) line by ``quantity``, creating it if needed.

        Stock is not checked here; callers verify availability before adding.
        """
        now = datetime.now(UTC)
        existing = self.find_item(product_id, variant_id)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                variant_id=variant_id,
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=self.id,
                item_id=item.id,
                product_id=product_id,
                variant_id=variant_id,
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        item = self.get_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=self.id, item_id=item.id, product_id=item.product_id))

    def update_item_quantity(self, item_id, quantity):
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(item_id)
            return None

        item = self.get_item(item_id)
        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityChanged(
                cart_id=self.id,
                item_id=item.id,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return item

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=self.id, items_removed=removed))

    def merge_with(self, other_cart):
        """Add every line of ``other_cart`` to this cart.

        The caller discards ``other_cart`` afterwards.
        """
        for item in other_cart.items:
            self.add_item(item.product_id, item.variant_id, item.quantity)

        self.raise_(
            CartsMerged(
                cart_id=self.id,
                source_cart_id=other_cart.id,
                source_session_id=other_cart.session_id,
                items_merged=len(other_cart.items),
            )
        )

    def drop_lines_for(self, product_id, variant_id=None):
        """Remove lines pointing at a product, or at one of its variants when ``variant_id`` is given."""
        doomed = [
            i
            for i in self.items
            if str(i.product_id) == str(product_id) and (variant_id is None or _same_variant(i.variant_id, variant_id))
        ]
        for item in doomed:
            self.remove_item(item.id)
        return len(doomed)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def total_items(self):
        return sum(item.quantity for item in self.items)

    def is_empty(self):
        return not self.items

    def belongs_to(self, user_id=None, session_id=None):
        if self.user_id:
            return bool(user_id) and str(self.user_id) == str(user_id)
        return bool(session_id) and self.session_id == session_id

    def is_abandoned(self, as_of=None, idle_for=ABANDONED_AFTER):
        as_of = _naive_utc(as_of or datetime.now(UTC))
        last_touched = _naive_utc(self.updated_at or self.created_at)
        return last_touched is not None and last_touched < as_of - idle_for


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        matches = fetch_all(self._dao, user_id=str(user_id))
        return matches[0] if matches else None

    def for_session(self, session_id) -> Cart | None:
        matches = fetch_all(self._dao, session_id=session_id)
        return matches[0] if matches else None

    def everything(self) -> list[Cart]:
        return fetch_all(self._dao)

    def drop_product_lines(self, product_id, variant_id=None) -> int:
        filters = {"product_id": str(product_id)}
        if variant_id is not None:
            filters["variant_id"] = str(variant_id)
        lines = fetch_all(current_domain.repository_for(CartItem)._dao, **filters)
        cart_ids = sorted({str(line.cart_id) for line in lines})
        if not cart_ids:
            return 0

        removed = 0
        for cart in fetch_all(self._dao, id__in=cart_ids):
            dropped = cart.drop_lines_for(product_id, variant_id)
            if dropped:
                self.add(cart)
                removed += dropped
        return removed

    def remove(self, cart: Cart) -> None:
        self._dao.delete(cart)
