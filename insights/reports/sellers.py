"""
insights/reports/sellers.py

Sellers report. Each row is treated as one seller record.

Cards
-----
Total Revenue   = sum(sales)
Total Sellers   = row count
Avg Revenue     = Total Revenue / row count (0 without a sales column)
Top Performer   = largest single-row sales value

``min_sales`` / ``max_sales`` are exposed as metrics for underperformer views.
"""

from __future__ import annotations

from typing import Mapping

from insights.aggregation import Breakdown, column_values, group_count, group_sum
from insights.dataset import Dataset
from insights.formatting import format_currency, format_number
from insights.reports.base import BaseReport, Card, ReportType, average
from insights.resolver import SELLERS_KEYWORDS, ColumnRole


class SellersReport(BaseReport):
    report_type = ReportType.SELLERS
    keywords = SELLERS_KEYWORDS

    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        rows = dataset.rows
        sales_col = columns[ColumnRole.REVENUE]

        sales = column_values(rows, sales_col)
        total = sum(sales)
        avg = average(total, len(sales))
        max_sales = max(sales) if sales else 0.0
        min_sales = min(sales) if sales else 0.0

        breakdowns = {
            "city": group_sum(rows, columns[ColumnRole.CITY], sales_col),
            "payment_method": group_count(rows, columns[ColumnRole.PAYMENT_METHOD]),
        }
        cards = [
            Card("Total Revenue", format_currency(total)),
            Card("Total Sellers", format_number(dataset.row_count)),
            Card("Avg Revenue", format_currency(avg)),
            Card("Top Performer", format_currency(max_sales)),
        ]
        metrics = {
            "total_revenue": total,
            "total_sellers": float(dataset.row_count),
            "avg_revenue": avg,
            "max_sales": max_sales,
            "min_sales": min_sales,
        }
        return cards, breakdowns, metrics
