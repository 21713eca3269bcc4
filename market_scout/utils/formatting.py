"""Number rounding and display helpers shared by the report builders."""

import math


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    ``round()`` uses banker's rounding (``round(62.5) == 62``); report
    figures must round 62.5 up to 63.
    """
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp a value into ``[low, high]``."""
    return max(low, min(high, value))


def format_amount(value: float, suffix: str) -> str:
    """Two-decimal amount followed by a currency suffix, e.g. ``96.00 ر.س``."""
    return f"{value:.2f} {suffix}"


def format_money(value: float, code: str) -> str:
    """Whole amount with thousands separators after a currency code, e.g. ``SAR 1,900``."""
    return f"{code} {round_half_away(value):,}"
