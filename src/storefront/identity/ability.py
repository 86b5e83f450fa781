"""Role-based permissions: ordered allow and deny rules per actor.

An :class:`Ability` is built for one :class:`~storefront.identity.actor.Actor`
and holds an ordered list of rules. ``can`` walks the rules from the last one
defined to the first and the first relevant rule decides, so later rules
override earlier ones.

A rule may carry a condition on the resource. When ``can`` is asked about a
subject without a resource (a class-level check such as "may this actor
create reviews at all?"), a conditional ``can`` rule counts as a match and a
conditional ``cannot`` rule does not.

Subjects are names: aggregate names (``"Product"``, ``"Order"``) or area
names (``"admin_panel"``). ``"manage"`` matches every action and ``"all"``
every subject.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from storefront.identity.actor import Actor
from storefront.shared.errors import AuthorizationDenied

MANAGE = "manage"
ALL = "all"

# Actions implied by the generic ones
ACTION_ALIASES = {
    "read": ("index", "show"),
    "update": ("edit",),
    "create": ("new",),
}


def _as_set(value) -> frozenset:
    return frozenset((value,) if isinstance(value, str) else value)


@dataclass(frozen=True)
class Rule:
    allowed: bool
    actions: frozenset
    subjects: frozenset
    condition: Callable[[Any], bool] | None = None

    def relevant(self, action: str, subject: str) -> bool:
        return self._covers(action) and (ALL in self.subjects or subject in self.subjects)

    def _covers(self, action: str) -> bool:
        if MANAGE in self.actions or action in self.actions:
            return True
        return any(action in ACTION_ALIASES.get(granted, ()) for granted in self.actions)

    def matches(self, resource) -> bool:
        if self.condition is None:
            return True
        if resource is None:
            return self.allowed
        return bool(self.condition(resource))


def _same(left, right) -> bool:
    return left is not None and right is not None and str(left) == str(right)


class Ability:
    def __init__(self, actor: Actor):
        self.actor = actor
        self._rules: list[Rule] = []

        self._shopper_rules()
        if actor.is_admin:
            self._admin_rules()

    # -------------------------------------------------------------------
    # Rule definition
    # -------------------------------------------------------------------
    def allow(self, actions, subjects, condition=None):
        self._rules.append(Rule(True, _as_set(actions), _as_set(subjects), condition))

    def deny(self, actions, subjects, condition=None):
        self._rules.append(Rule(False, _as_set(actions), _as_set(subjects), condition))

    def _shopper_rules(self):
        actor = self.actor

        self.allow("read", "Product", lambda product: product.active)
        self.allow("read", "Category", lambda category: category.active)
        self.allow("read", "Article", lambda article: article.published)
        self.allow("read", "Review", lambda review: review.approved)

        if actor.signed_in:
            self.allow(MANAGE, "Cart", lambda cart: _same(cart.user_id, actor.user_id))
            self.allow(MANAGE, "Order", lambda order: _same(order.user_id, actor.user_id))
            self.allow(MANAGE, "Review", lambda review: _same(review.user_id, actor.user_id))
            self.allow("mark_helpful", "Review")
            self.deny("mark_helpful", "Review", lambda review: _same(review.user_id, actor.user_id))
            self.allow(("read", "update"), "User", lambda user: _same(user.id, actor.user_id))
        elif actor.session_id:
            self.allow(MANAGE, "Cart", lambda cart: _same(cart.session_id, actor.session_id))
            self.allow(("read", "create"), "Order", lambda order: _same(order.session_id, actor.session_id))

    def _admin_rules(self):
        actor = self.actor

        self.allow("access", "admin_panel")
        self.allow("read", ("admin_dashboard", "admin_analytics"))

        # manage covers toggles, duplicate, bulk actions and export
        self.allow(MANAGE, ("Product", "ProductVariant", "Category", "Review", "Article"))

        self.allow(
            ("read", "update", "update_status", "update_payment_status", "send_tracking_email", "print_invoice"),
            "Order",
        )
        self.allow("reclaim_abandoned", "Cart")

        self.allow(("read", "create", "destroy"), "User")
        self.allow("update", "User", lambda user: user.role == "customer" or _same(user.id, actor.user_id))
        self.deny("destroy", "User", lambda user: _same(user.id, actor.user_id))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def can(self, action: str, subject: str, resource=None) -> bool:
        for rule in reversed(self._rules):
            if rule.relevant(action, subject) and rule.matches(resource):
                return rule.allowed
        return False

    def cannot(self, action: str, subject: str, resource=None) -> bool:
        return not self.can(action, subject, resource)

    def authorize(self, action: str, subject: str, resource=None) -> None:
        """Raise :class:`AuthorizationDenied` unless the actor may act on ``subject``."""
        if not self.can(action, subject, resource):
            raise AuthorizationDenied()
