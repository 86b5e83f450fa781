"""Imports every module that registers elements on the storefront domain.

Protean's traversal only reaches one directory below ``domain.py``; the
aggregates here sit two levels down, so they are loaded explicitly. Import
this module before ``storefront.init()``.
"""

from storefront.catalogue.category import category, events, management, positioning  # noqa: F401
from storefront.catalogue.product import (  # noqa: F401
    bulk,
    creation,
    details,
    duplication,
    lifecycle,
    product,
    variants,
)
from storefront.catalogue.product import events as product_events  # noqa: F401
from storefront.content.article import article, authoring  # noqa: F401
from storefront.content.article import events as article_events  # noqa: F401
from storefront.identity.user import management as user_management  # noqa: F401
from storefront.identity.user import registration, user  # noqa: F401
from storefront.identity.user import events as user_events  # noqa: F401
from storefront.ordering.cart import abandonment, cart, items, resolution  # noqa: F401
from storefront.ordering.cart import events as cart_events  # noqa: F401
from storefront.ordering.order import checkout, order, status, tracking  # noqa: F401
from storefront.ordering.order import events as order_events  # noqa: F401
from storefront.reviews.review import helpful, moderation, review, submission  # noqa: F401
from storefront.reviews.review import events as review_events  # noqa: F401
