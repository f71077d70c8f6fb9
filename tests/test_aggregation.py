"""
tests/test_aggregation.py

Grouping primitives and numeric coercion.

Pure Python, no I/O. Rows are built through Dataset.from_dicts so every row
carries exactly the dataset headers.
"""

from __future__ import annotations

import pytest

from insights.aggregation import (
    UNKNOWN_KEY,
    column_values,
    group_count,
    group_key,
    group_sum,
    to_number,
    top_items,
)
from insights.dataset import Dataset


def _rows(*records: dict) -> tuple:
    return Dataset.from_dicts(list(records)).rows


# ---------------------------------------------------------------------------
# Coercion and keying
# ---------------------------------------------------------------------------


class TestToNumber:
    @pytest.mark.parametrize(
        "cell, expected",
        [
            (100, 100.0),
            (12.5, 12.5),
            ("100", 100.0),
            (" 42.75 ", 42.75),
            ("-3", -3.0),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("12.5 USD", 12.5),
            ("1,234", 1.0),
        ],
    )
    def test_parses_leading_decimal_number(self, cell: object, expected: float) -> None:
        assert to_number(cell) == pytest.approx(expected)

    @pytest.mark.parametrize("cell", [None, "", "abc", "$12.50", "n/a", float("nan"), True])
    def test_unparsable_cells_contribute_zero(self, cell: object) -> None:
        assert to_number(cell) == 0.0


class TestGroupKey:
    def test_trims_surrounding_whitespace_only(self) -> None:
        assert group_key("  New York ") == "New York"

    def test_does_not_case_fold(self) -> None:
        assert group_key("bob") != group_key("Bob")

    @pytest.mark.parametrize("cell", [None, "", "   "])
    def test_empty_keys_become_unknown(self, cell: object) -> None:
        assert group_key(cell) == UNKNOWN_KEY

    def test_integral_floats_drop_the_fraction(self) -> None:
        assert group_key(2024.0) == "2024"
        assert group_key(0) == "0"


# ---------------------------------------------------------------------------
# group_count
# ---------------------------------------------------------------------------


class TestGroupCount:
    def test_counts_per_key(self) -> None:
        rows = _rows({"Tier": "Gold"}, {"Tier": "Silver"}, {"Tier": "Gold"})

        assert group_count(rows, "Tier") == {"Gold": 2, "Silver": 1}

    def test_blank_cells_count_as_unknown(self) -> None:
        rows = _rows({"City": "Austin"}, {"City": None}, {"City": "  "})

        assert group_count(rows, "City") == {"Austin": 1, "Unknown": 2}

    def test_sum_of_counts_equals_row_count(self) -> None:
        rows = _rows(*({"City": city} for city in ["A", "B", "A", None, "C", " A "]))

        assert sum(group_count(rows, "City").values()) == len(rows)

    def test_unresolved_column_returns_empty(self) -> None:
        assert group_count(_rows({"City": "A"}), None) == {}

    def test_keys_keep_first_seen_order(self) -> None:
        rows = _rows({"M": "Card"}, {"M": "Cash"}, {"M": "Card"}, {"M": "Wire"})

        assert list(group_count(rows, "M")) == ["Card", "Cash", "Wire"]


# ---------------------------------------------------------------------------
# group_sum
# ---------------------------------------------------------------------------


class TestGroupSum:
    def test_trims_but_does_not_case_fold(self) -> None:
        rows = _rows({"Name": "Bob", "Revenue": "100"}, {"Name": "bob ", "Revenue": "50"})

        assert group_sum(rows, "Name", "Revenue") == {"Bob": 100, "bob": 50}

    def test_non_numeric_values_contribute_zero(self) -> None:
        rows = _rows(
            {"City": "Austin", "Total": "10"},
            {"City": "Austin", "Total": "pending"},
            {"City": "Boston", "Total": None},
        )

        assert group_sum(rows, "City", "Total") == {"Austin": 10.0, "Boston": 0.0}

    def test_total_matches_coerced_column_sum(self) -> None:
        rows = _rows(
            {"City": "A", "Total": "1.10"},
            {"City": "B", "Total": 2.2},
            {"City": None, "Total": "x"},
            {"City": "A", "Total": "3.3"},
        )

        breakdown = group_sum(rows, "City", "Total")

        assert sum(breakdown.values()) == pytest.approx(sum(column_values(rows, "Total")))
        assert sum(breakdown.values()) == pytest.approx(6.6)

    @pytest.mark.parametrize("group_col, value_col", [(None, "Total"), ("City", None), (None, None)])
    def test_unresolved_columns_return_empty(self, group_col, value_col) -> None:
        rows = _rows({"City": "A", "Total": "1"})

        assert group_sum(rows, group_col, value_col) == {}


class TestHelpers:
    def test_column_values_of_unresolved_column_is_empty(self) -> None:
        assert column_values(_rows({"a": "1"}), None) == []

    def test_top_items_sorts_descending_and_keeps_ties_in_order(self) -> None:
        breakdown = {"a": 1, "b": 3, "c": 3, "d": 2}

        assert top_items(breakdown) == [("b", 3), ("c", 3), ("d", 2), ("a", 1)]
        assert top_items(breakdown, 2) == [("b", 3), ("c", 3)]
