"""Unit tests for amount sanitizing"""

import math
from decimal import Decimal

import pytest

from pixelfin.domain.money import round_half_up, sanitize_amount, sanitize_amount_cents


@pytest.mark.parametrize(
    "value, expected_cents",
    [
        (12.34, 1234),
        (1.125, 113),  # exact tie rounds up
        (0.004, 0),
        (0.005, 1),
        (-5, 500),  # negative is absolute-valued
        (7, 700),
        ("19.99", 1999),
        (Decimal("3.10"), 310),
    ],
)
def test_sanitize_amount_cents(value, expected_cents):
    assert sanitize_amount_cents(value) == expected_cents


@pytest.mark.parametrize(
    "value",
    [math.nan, math.inf, -math.inf, "abc", "", None, True, object(), 1e308],
)
def test_sanitize_amount_rejects_unusable_input(value):
    """Non-numeric, non-finite and overflowing input all become 0, never raise"""
    assert sanitize_amount_cents(value) == 0
    assert sanitize_amount(value) == 0


def test_sanitize_amount_returns_two_decimal_currency():
    assert sanitize_amount(10.456) == 10.46
    assert sanitize_amount(-0.1) == 0.1


def test_round_half_up_ties_toward_positive_infinity():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(-2.6) == -3
