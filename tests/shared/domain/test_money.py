"""Tests for money rounding and formatting."""

from decimal import Decimal

from storefront.shared.money import format_money, round_money, to_decimal


def test_format_money_always_shows_cents():
    assert format_money(12.5) == "$12.50"
    assert format_money(0) == "$0.00"
    assert format_money(None) == "$0.00"


def test_round_money_rounds_half_up():
    assert round_money(2.675) == 2.68
    assert round_money("0.125") == 0.13


def test_to_decimal_goes_through_str():
    assert to_decimal(0.1) == Decimal("0.1")
