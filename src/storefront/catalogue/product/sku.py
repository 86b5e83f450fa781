"""Human-readable SKU codes for products and variants.

Product SKUs carry a random suffix and are regenerated until unused. Variant
SKUs are derived deterministically from the parent SKU, so two variants with
the same initials collide and the second one is rejected.
"""

import re
import secrets
from collections.abc import Callable

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def _alnum_prefix(text: str | None, length: int) -> str:
    return _NON_ALNUM.sub("", text or "")[:length].upper()


def product_sku(name: str | None, category_name: str | None = None, token_hex=secrets.token_hex) -> str:
    """``<CAT>-<NAME>-<HEX6>``, e.g. ``BRA-FRIE-3FA9C1`` for "Friendship Bracelet" in "Bracelets"."""
    category_code = _alnum_prefix(category_name, 3) or "PRD"
    name_code = _alnum_prefix(name, 4) or "ITEM"
    return f"{category_code}-{name_code}-{token_hex(3).upper()}"


def generate_product_sku(
    name: str | None,
    category_name: str | None,
    exists: Callable[[str], bool],
    token_hex=secrets.token_hex,
) -> str:
    candidate = product_sku(name, category_name, token_hex)
    while exists(candidate):
        candidate = product_sku(name, category_name, token_hex)
    return candidate


def variant_sku(
    parent_sku: str,
    name: str | None = None,
    color: str | None = None,
    size: str | None = None,
    style: str | None = None,
) -> str:
    """Parent SKU plus the initials of colour, size and style.

    Without any of those attributes the first three alphanumerics of the
    variant name are used, and ``VAR`` when the name has none.
    """
    code = "".join(value[0] for value in (color, size, style) if value).upper()
    if not code:
        code = _alnum_prefix(name, 3) or "VAR"
    return f"{parent_sku}-{code}"
