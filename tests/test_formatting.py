import pytest

from market_scout.utils.formatting import clamp, format_amount, format_money, round_half_away


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (62.5, 63), (37.5, 38), (-2.5, -3), (2.4999, 2), (0, 0), (-0.4, 0)],
)
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_clamp():
    assert clamp(-5) == 0
    assert clamp(150) == 100
    assert clamp(42) == 42
    assert clamp(7, 10, 20) == 10


def test_format_amount():
    assert format_amount(96, "ر.س") == "96.00 ر.س"
    assert format_amount(24.5, "$") == "24.50 $"


def test_format_money():
    assert format_money(1234567.4, "SAR") == "SAR 1,234,567"
    assert format_money(999.5, "SAR") == "SAR 1,000"
