"""
insights/ranking.py

Bounded leaderboard of entities by an aggregated numeric value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from insights.aggregation import group_key, to_number
from insights.dataset import Row

DEFAULT_RANKING_LIMIT = 20


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    name: str
    total: float
    count: int

    def to_dict(self) -> dict[str, object]:
        return {"rank": self.rank, "name": self.name, "total": self.total, "count": self.count}


def rank(
    rows: Iterable[Row],
    name_column: str | None,
    value_column: str | None,
    limit: int = DEFAULT_RANKING_LIMIT,
) -> list[RankedEntry]:
    """
    Aggregate *value_column* per name and return the top *limit* entries.

    Entries are sorted by total descending. Equal totals keep the order in
    which each name first appeared. Unresolved columns yield ``[]``.
    """

    if name_column is None or value_column is None or limit <= 0:
        return []

    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for row in rows:
        name = group_key(row.get(name_column))
        totals[name] = totals.get(name, 0.0) + to_number(row.get(value_column))
        counts[name] = counts.get(name, 0) + 1

    ordered = sorted(totals, key=lambda name: totals[name], reverse=True)[:limit]
    return [
        RankedEntry(rank=position, name=name, total=totals[name], count=counts[name])
        for position, name in enumerate(ordered, start=1)
    ]
