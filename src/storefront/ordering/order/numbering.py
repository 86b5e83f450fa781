"""Order numbers: ``BM`` + order date + 8 upper-case hex characters."""

import secrets
from collections.abc import Callable
from datetime import UTC, date, datetime


def order_number(on: date | None = None, token_hex=secrets.token_hex) -> str:
    on = on or datetime.now(UTC).date()
    return f"BM{on:%Y%m%d}{token_hex(4).upper()}"


def generate_order_number(exists: Callable[[str], bool], on: date | None = None, token_hex=secrets.token_hex) -> str:
    """Draw candidates until ``exists`` reports one as unused."""
    candidate = order_number(on, token_hex)
    while exists(candidate):
        candidate = order_number(on, token_hex)
    return candidate
