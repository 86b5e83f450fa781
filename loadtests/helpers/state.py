"""Per-user state for the Locust scenarios.

Each simulated user owns its state; nothing is shared between users. Ids and
slugs returned by earlier steps are kept here for the steps that follow.
"""

import uuid
from dataclasses import dataclass, field


def new_session_id() -> str:
    return f"lt-{uuid.uuid4().hex}"


@dataclass
class ShopperState:
    """A guest or registered shopper moving from browsing to checkout."""

    session_id: str = field(default_factory=new_session_id)
    user_id: str | None = None
    profile: dict | None = None
    product_slugs: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_number: str | None = None

    def headers(self) -> dict:
        headers = {"X-Session-Id": self.session_id}
        if self.user_id:
            headers["X-User-Id"] = self.user_id
        return headers


@dataclass
class BackOfficeState:
    """An administrator curating the catalogue and working the order queue."""

    admin_id: str
    category_id: str | None = None
    product_id: str | None = None
    variant_id: str | None = None

    def headers(self) -> dict:
        return {"X-User-Id": self.admin_id}
