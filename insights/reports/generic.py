"""
insights/reports/generic.py

Fallback report for unrecognised report types: a single row-count card.
"""

from __future__ import annotations

from typing import Mapping

from insights.aggregation import Breakdown
from insights.dataset import Dataset
from insights.formatting import format_number
from insights.reports.base import BaseReport, Card, ReportType
from insights.resolver import ColumnRole


class GenericReport(BaseReport):
    report_type = ReportType.GENERIC
    keywords = {}

    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        cards = [Card("Total Rows", format_number(dataset.row_count))]
        return cards, {}, {"total_rows": float(dataset.row_count)}
