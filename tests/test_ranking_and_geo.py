"""
tests/test_ranking_and_geo.py

Leaderboard ranking and location concentration table.
"""

from __future__ import annotations

import pytest

from insights.dataset import Dataset
from insights.geo import GeoEntry, geo_breakdown
from insights.ranking import rank


def _rows(headers: list[str], *records: list[object]) -> tuple:
    return Dataset.from_records(headers, records).rows


# ---------------------------------------------------------------------------
# rank
# ---------------------------------------------------------------------------


class TestRank:
    HEADERS = ["Customer", "Spent"]

    def test_aggregates_per_name_and_sorts_descending(self) -> None:
        rows = _rows(
            self.HEADERS,
            ["Ana", "10"],
            ["Bo", "40"],
            ["Ana", "35"],
            ["Cy", "5"],
        )

        entries = rank(rows, "Customer", "Spent")

        assert [(e.rank, e.name, e.total, e.count) for e in entries] == [
            (1, "Ana", 45.0, 2),
            (2, "Bo", 40.0, 1),
            (3, "Cy", 5.0, 1),
        ]

    def test_limit_bounds_the_result(self) -> None:
        rows = _rows(self.HEADERS, *([f"c{i}", str(i)] for i in range(30)))

        entries = rank(rows, "Customer", "Spent", limit=20)

        assert len(entries) == 20
        assert entries[0].name == "c29"
        assert [e.rank for e in entries] == list(range(1, 21))

    def test_fewer_names_than_limit_returns_all(self) -> None:
        rows = _rows(self.HEADERS, ["Ana", "1"], ["Bo", "2"])
        assert len(rank(rows, "Customer", "Spent", limit=20)) == 2

    def test_ties_keep_first_seen_order(self) -> None:
        rows = _rows(self.HEADERS, ["Zed", "5"], ["Amy", "5"], ["Max", "5"])

        names = [e.name for e in rank(rows, "Customer", "Spent")]

        assert names == ["Zed", "Amy", "Max"]

    def test_totals_are_non_increasing(self) -> None:
        rows = _rows(self.HEADERS, *([name, value] for name, value in [
            ("a", "3"), ("b", "9"), ("c", "1"), ("a", "7"), ("d", "x"), ("b", "-2"),
        ]))

        totals = [e.total for e in rank(rows, "Customer", "Spent")]

        assert totals == sorted(totals, reverse=True)

    def test_blank_names_group_as_unknown(self) -> None:
        rows = _rows(self.HEADERS, [None, "3"], ["  ", "4"])

        entries = rank(rows, "Customer", "Spent")

        assert [(e.name, e.total) for e in entries] == [("Unknown", 7.0)]

    @pytest.mark.parametrize("name_col, value_col", [(None, "Spent"), ("Customer", None)])
    def test_unresolved_columns_yield_empty(self, name_col, value_col) -> None:
        rows = _rows(self.HEADERS, ["Ana", "1"])
        assert rank(rows, name_col, value_col) == []

    def test_non_positive_limit_yields_empty(self) -> None:
        rows = _rows(self.HEADERS, ["Ana", "1"])
        assert rank(rows, "Customer", "Spent", limit=0) == []


# ---------------------------------------------------------------------------
# geo_breakdown
# ---------------------------------------------------------------------------


class TestGeoBreakdown:
    def test_counts_sorted_descending_with_normalized_intensity(self) -> None:
        rows = _rows(
            ["City"],
            ["Austin"], ["Boston"], ["Austin"], ["Chicago"], ["Austin"], ["Boston"],
        )

        entries = geo_breakdown(rows, "City")

        assert [(e.location, e.count) for e in entries] == [
            ("Austin", 3),
            ("Boston", 2),
            ("Chicago", 1),
        ]
        assert entries[0].intensity == 1.0
        assert entries[1].intensity == pytest.approx(2 / 3)
        assert all(0 < e.intensity <= 1 for e in entries)

    def test_member_rows_are_kept_in_source_order(self) -> None:
        rows = _rows(["City"], ["Lyon"], ["Nice"], ["Lyon"])

        entries = geo_breakdown(rows, "City")

        assert entries[0].row_indices == (0, 2)
        assert entries[1].row_indices == (1,)

    def test_ties_keep_first_seen_order(self) -> None:
        rows = _rows(["City"], ["Oslo"], ["Bergen"], ["Bergen"], ["Oslo"])

        assert [e.location for e in geo_breakdown(rows, "City")] == ["Oslo", "Bergen"]

    def test_blank_locations_are_unknown_and_counts_cover_every_row(self) -> None:
        rows = _rows(["City"], [" Austin "], [None], [""], ["Austin"])

        entries = geo_breakdown(rows, "City")

        assert {e.location: e.count for e in entries} == {"Austin": 2, "Unknown": 2}
        assert sum(e.count for e in entries) == len(rows)

    def test_unresolved_location_yields_empty(self) -> None:
        assert geo_breakdown(_rows(["City"], ["Austin"]), None) == []

    def test_share_and_payload(self) -> None:
        entry = GeoEntry(location="Austin", count=3, intensity=1.0, row_indices=(0, 1, 2))

        assert entry.share(12) == 0.25
        assert entry.share(0) == 0.0
        assert entry.to_dict(12) == {
            "location": "Austin",
            "count": 3,
            "intensity": 1.0,
            "share": 0.25,
        }
        assert "share" not in entry.to_dict()
