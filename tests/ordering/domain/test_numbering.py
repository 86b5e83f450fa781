"""Tests for order number generation."""

import re
from datetime import date

from storefront.ordering.order.numbering import generate_order_number, order_number


def test_format():
    assert order_number(date(2024, 3, 9), token_hex=lambda _n: "a1b2c3d4") == "BM20240309A1B2C3D4"


def test_default_number_shape():
    assert re.fullmatch(r"BM\d{8}[0-9A-F]{8}", order_number())


def test_generation_skips_taken_numbers():
    suffixes = iter(["00000001", "00000002"])
    taken = {"BM2024030900000001"}

    number = generate_order_number(taken.__contains__, on=date(2024, 3, 9), token_hex=lambda _n: next(suffixes))

    assert number == "BM2024030900000002"
