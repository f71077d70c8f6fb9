"""
insights/formatting.py

Display formatting for report cards (en-US convention).
"""

from __future__ import annotations

import math


def _finite(value: float | int | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_currency(value: float | int | None, symbol: str = "$") -> str:
    """``1234.5`` -> ``"$1,234.50"``; missing or non-finite values -> ``"$0.00"``."""
    number = _finite(value)
    if number is None:
        number = 0.0
    sign = "-" if round(number, 2) < 0 else ""
    return f"{sign}{symbol}{abs(number):,.2f}"


def format_number(value: float | int | None) -> str:
    """``1234`` -> ``"1,234"``; missing or non-finite values -> ``"0"``."""
    number = _finite(value)
    if number is None:
        return "0"
    return f"{number:,.0f}"
