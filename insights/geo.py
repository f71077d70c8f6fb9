"""
insights/geo.py

Location concentration table for heat-map style presentation.

Rows are grouped by trimmed location value (empty -> "Unknown"), sorted by
member count descending (ties keep first-seen order), and scored with
``intensity = count / max_count`` so the top location is always 1.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from insights.aggregation import group_key
from insights.dataset import Row


@dataclass(frozen=True)
class GeoEntry:
    location: str
    count: int
    intensity: float
    row_indices: tuple[int, ...] = ()

    def share(self, total_rows: int) -> float:
        """Fraction of all dataset rows in this location."""
        if total_rows <= 0:
            return 0.0
        return self.count / total_rows

    def to_dict(self, total_rows: int | None = None) -> dict[str, object]:
        payload: dict[str, object] = {
            "location": self.location,
            "count": self.count,
            "intensity": self.intensity,
        }
        if total_rows is not None:
            payload["share"] = self.share(total_rows)
        return payload


def geo_breakdown(rows: Sequence[Row], location_column: str | None) -> list[GeoEntry]:
    if location_column is None:
        return []

    members: dict[str, list[int]] = {}
    for index, row in enumerate(rows):
        members.setdefault(group_key(row.get(location_column)), []).append(index)
    if not members:
        return []

    ordered = sorted(members.items(), key=lambda item: len(item[1]), reverse=True)
    max_count = len(ordered[0][1])
    return [
        GeoEntry(
            location=location,
            count=len(indices),
            intensity=len(indices) / max_count,
            row_indices=tuple(indices),
        )
        for location, indices in ordered
    ]
