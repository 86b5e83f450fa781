"""Order aggregate: the frozen record of a checked-out cart.

State Machines (independent of each other):

    status:
        pending → processing | cancelled
        processing → shipped | cancelled
        shipped → delivered
        delivered → refunded | partially_refunded
        partially_refunded → refunded
        (refunded only within 30 days of the order being placed)

    payment_status:
        payment_pending → paid | failed
        failed → payment_pending | paid
        paid → failed | payment_refunded | partially_refunded
        partially_refunded → payment_refunded

Line items are copied from the cart once, when the order is built; later
catalogue changes never reach them.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import (
    OrderPlaced,
    OrderStatusChanged,
    PaymentStatusChanged,
    TrackingNumberAssigned,
)
from storefront.ordering.order.pricing import order_totals
from storefront.shared.email import is_valid_email
from storefront.shared.money import format_money, round_money, to_decimal
from storefront.shared.queries import fetch_all

REFUND_WINDOW = timedelta(days=30)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class PaymentStatus(Enum):
    PAYMENT_PENDING = "payment_pending"
    PAID = "paid"
    FAILED = "failed"
    PAYMENT_REFUNDED = "payment_refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


# ---------------------------------------------------------------------------
# State Machines
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED, OrderStatus.PARTIALLY_REFUNDED},
    OrderStatus.PARTIALLY_REFUNDED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: set(),
    OrderStatus.REFUNDED: set(),
}

_PAYMENT_TRANSITIONS = {
    PaymentStatus.PAYMENT_PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.PAYMENT_PENDING, PaymentStatus.PAID},
    PaymentStatus.PAID: {PaymentStatus.FAILED, PaymentStatus.PAYMENT_REFUNDED, PaymentStatus.PARTIALLY_REFUNDED},
    PaymentStatus.PARTIALLY_REFUNDED: {PaymentStatus.PAYMENT_REFUNDED},
    PaymentStatus.PAYMENT_REFUNDED: set(),
}

# Colour hints for the back-office badges
STATUS_COLORS = {
    OrderStatus.PENDING: "yellow",
    OrderStatus.PROCESSING: "blue",
    OrderStatus.SHIPPED: "purple",
    OrderStatus.DELIVERED: "green",
    OrderStatus.CANCELLED: "red",
    OrderStatus.REFUNDED: "gray",
    OrderStatus.PARTIALLY_REFUNDED: "orange",
}

PAYMENT_STATUS_COLORS = {
    PaymentStatus.PAYMENT_PENDING: "yellow",
    PaymentStatus.PAID: "green",
    PaymentStatus.FAILED: "red",
    PaymentStatus.PAYMENT_REFUNDED: "gray",
    PaymentStatus.PARTIALLY_REFUNDED: "orange",
}


def _parse(enum_cls, value, field_name):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError({field_name: [f"'{value}' is not a valid {field_name}"]}) from None


def _aware(moment):
    return moment.replace(tzinfo=UTC) if moment is not None and moment.tzinfo is None else moment


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    name = String(required=True, max_length=255)
    sku = String(max_length=80)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True)
    total_price = Float(required=True)

    @invariant.post
    def prices_must_be_positive(self):
        for field_name in ("unit_price", "total_price"):
            value = getattr(self, field_name)
            if value is not None and value <= 0:
                raise ValidationError({field_name: ["must be greater than 0"]})

    def formatted_unit_price(self):
        return format_money(self.unit_price)

    def formatted_total_price(self):
        return format_money(self.total_price)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    user_id = Identifier()
    session_id = String(max_length=255)

    email = String(required=True, max_length=254)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    phone = String(max_length=30)
    address = Text(required=True)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="US")

    notes = Text()
    shipping_method = String(max_length=50)
    payment_method = String(max_length=50)
    tracking_number = String(max_length=100)

    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PAYMENT_PENDING.value)

    subtotal = Float(default=0.0)
    tax_amount = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total_amount = Float(default=0.0)

    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_has_an_owner(self):
        if not self.user_id and not self.session_id:
            raise ValidationError({"order": ["An order belongs to a user or a session"]})

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not is_valid_email(self.email):
            raise ValidationError({"email": ["is invalid"]})

    @invariant.post
    def built_order_has_positive_total(self):
        if self.items and (self.total_amount or 0) <= 0:
            raise ValidationError({"total_amount": ["must be greater than 0"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_number, user_id=None, session_id=None, **details):
        now = datetime.now(UTC)
        return cls(
            order_number=order_number,
            user_id=user_id,
            session_id=None if user_id else session_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PAYMENT_PENDING.value,
            created_at=now,
            updated_at=now,
            **{key: value for key, value in details.items() if value is not None},
        )

    def build_from_cart(self, lines):
        """Copy priced cart lines into order items and compute the totals.

        ``lines`` carry a ``quantity`` and a ``source`` (a ``LineSource``) whose
        price is read exactly once, here. Building an order twice is refused;
        an empty cart leaves the order untouched.
        """
        if self.items:
            raise ValidationError({"order": ["Order items have already been built"]})
        if not lines:
            return

        with atomic_change(self):
            for line in lines:
                unit_price = round_money(line.source.price)
                self.add_items(
                    OrderItem(
                        product_id=line.source.product_id,
                        variant_id=line.source.variant_id,
                        name=line.source.name,
                        sku=line.source.sku,
                        quantity=line.quantity,
                        unit_price=unit_price,
                        total_price=round_money(to_decimal(unit_price) * line.quantity),
                    )
                )

            totals = order_totals(item.total_price for item in self.items)
            self.subtotal = totals.subtotal
            self.tax_amount = totals.tax_amount
            self.shipping_cost = totals.shipping_cost
            self.total_amount = totals.total_amount

        self.raise_(
            OrderPlaced(
                order_id=self.id,
                order_number=self.order_number,
                user_id=self.user_id,
                email=self.email,
                items_count=self.items_count(),
                total_amount=self.total_amount,
                placed_at=self.created_at,
            )
        )

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target, as_of=None):
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})
        if target == OrderStatus.REFUNDED and not self.within_refund_window(as_of):
            raise ValidationError({"status": ["Orders can only be fully refunded within 30 days"]})

    def transition_to(self, new_status, as_of=None):
        target = _parse(OrderStatus, new_status, "status")
        self._assert_can_transition(target, as_of)

        previous_status = self.status
        self.status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                previous_status=previous_status,
                new_status=target.value,
            )
        )

    def update_payment_status(self, new_status):
        target = _parse(PaymentStatus, new_status, "payment_status")
        current = PaymentStatus(self.payment_status)
        if target not in _PAYMENT_TRANSITIONS[current]:
            raise ValidationError(
                {"payment_status": [f"Cannot transition from {current.value} to {target.value}"]}
            )

        self.payment_status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                previous_status=current.value,
                new_status=target.value,
            )
        )

    def update_notes(self, notes):
        self.notes = notes
        self.updated_at = datetime.now(UTC)

    def assign_tracking_number(self, tracking_number):
        self.tracking_number = tracking_number
        self.updated_at = datetime.now(UTC)

        self.raise_(
            TrackingNumberAssigned(
                order_id=self.id,
                order_number=self.order_number,
                tracking_number=tracking_number,
            )
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def within_refund_window(self, as_of=None):
        as_of = _aware(as_of) or datetime.now(UTC)
        placed_at = _aware(self.created_at)
        return placed_at is not None and placed_at > as_of - REFUND_WINDOW

    def can_be_cancelled(self):
        return self.status in (OrderStatus.PENDING.value, OrderStatus.PROCESSING.value)

    def can_be_refunded(self, as_of=None):
        return self.status == OrderStatus.DELIVERED.value and self.within_refund_window(as_of)

    def items_count(self):
        return sum(item.quantity for item in self.items)

    def customer_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def status_color(self):
        return STATUS_COLORS.get(OrderStatus(self.status), "gray")

    def payment_status_color(self):
        return PAYMENT_STATUS_COLORS.get(PaymentStatus(self.payment_status), "gray")

    def formatted_totals(self):
        return {
            "formatted_subtotal": format_money(self.subtotal),
            "formatted_tax": format_money(self.tax_amount),
            "formatted_shipping": format_money(self.shipping_cost),
            "formatted_total": format_money(self.total_amount),
        }


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at.timestamp() if o.created_at else 0, reverse=True)


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_number(self, order_number: str) -> Order:
        matches = fetch_all(self._dao, order_number=order_number)
        if not matches:
            raise ObjectNotFoundError(f"Order `{order_number}` does not exist.")
        return matches[0]

    def number_exists(self, order_number: str) -> bool:
        return bool(fetch_all(self._dao, order_number=order_number))

    def everything(self) -> list[Order]:
        return _newest_first(fetch_all(self._dao))

    def for_owner(self, user_id=None, session_id=None) -> list[Order]:
        if user_id:
            orders = fetch_all(self._dao, user_id=str(user_id))
        elif session_id:
            orders = fetch_all(self._dao, session_id=session_id)
        else:
            orders = []
        return _newest_first(orders)

    def with_status(self, status: str) -> list[Order]:
        return fetch_all(self._dao, status=status)
