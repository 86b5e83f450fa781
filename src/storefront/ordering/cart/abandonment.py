"""Reclaiming abandoned carts.

Triggered from the back-office (or an external scheduler hitting the same
endpoint). A cart counts as abandoned when it has not been modified for the
idle threshold, 24 hours by default. Abandoned carts are deleted along with
their lines.
"""

from datetime import UTC, datetime, timedelta

from protean import handle
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class ReclaimAbandonedCarts:
    idle_hours = Integer(default=24, min_value=1)
    as_of = DateTime()  # defaults to now


@storefront.command_handler(part_of=Cart)
class ReclaimAbandonedCartsHandler:
    @handle(ReclaimAbandonedCarts)
    def reclaim(self, command):
        as_of = command.as_of or datetime.now(UTC)
        idle_for = timedelta(hours=command.idle_hours or 24)

        repo = current_domain.repository_for(Cart)
        abandoned = [cart for cart in repo.everything() if cart.is_abandoned(as_of, idle_for)]
        for cart in abandoned:
            repo.remove(cart)

        logger.info("abandoned_carts_reclaimed", count=len(abandoned), idle_hours=idle_for.total_seconds() / 3600)
        return len(abandoned)
