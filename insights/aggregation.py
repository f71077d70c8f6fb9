"""
insights/aggregation.py

Grouping primitives shared by reports, ranking and the geo table.

Keying rule
-----------
key = trim(stringify(cell)); an empty key becomes ``"Unknown"``.
Only surrounding whitespace is removed: ``"Bob"`` and ``"bob"`` stay two
distinct groups.

Numeric coercion
----------------
Numbers pass through (NaN contributes 0). Text is parsed for a leading
decimal number, so ``"12.5 USD"`` is 12.5 while ``"$12.50"`` and ``"n/a"``
contribute 0. A row that fails coercion still exists; it just adds nothing
to the sum.

All primitives are total over the given rows and return an empty
breakdown when a required column is unresolved.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Sequence

from insights.dataset import Cell, Row

UNKNOWN_KEY = "Unknown"

Breakdown = dict[str, float]

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def to_number(cell: Cell) -> float:
    if cell is None or isinstance(cell, bool):
        return 0.0
    if isinstance(cell, (int, float)):
        number = float(cell)
        return 0.0 if math.isnan(number) else number
    match = _LEADING_NUMBER.match(str(cell))
    if match is None:
        return 0.0
    number = float(match.group(1))
    return number if math.isfinite(number) else 0.0


def stringify(cell: Cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell)


def group_key(cell: Cell) -> str:
    key = stringify(cell).strip()
    return key if key else UNKNOWN_KEY


def is_blank(cell: Cell) -> bool:
    return not stringify(cell).strip()


def group_count(rows: Iterable[Row], column: str | None) -> Breakdown:
    """
    Count rows per group key of *column*; ``{}`` when the column is unresolved.
    """

    if column is None:
        return {}
    counts: dict[str, int] = {}
    for row in rows:
        key = group_key(row.get(column))
        counts[key] = counts.get(key, 0) + 1
    return counts


def group_sum(
    rows: Iterable[Row],
    group_column: str | None,
    value_column: str | None,
) -> Breakdown:
    """
    Sum the coerced *value_column* per group key of *group_column*.

    Returns ``{}`` when either column is unresolved.
    """

    if group_column is None or value_column is None:
        return {}
    sums: dict[str, float] = {}
    for row in rows:
        key = group_key(row.get(group_column))
        sums[key] = sums.get(key, 0.0) + to_number(row.get(value_column))
    return sums


def column_values(rows: Sequence[Row], column: str | None) -> list[float]:
    """Coerce every cell of *column*; empty list when the column is unresolved."""
    if column is None:
        return []
    return [to_number(row.get(column)) for row in rows]


def top_items(breakdown: Breakdown, limit: int | None = None) -> list[tuple[str, float]]:
    """
    Breakdown items sorted by value descending; ties keep first-seen order.
    """

    ordered = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    if limit is None:
        return ordered
    return ordered[: max(0, limit)]
