"""
insights/reports/customers.py

Customers report: geographic spread and e-mail coverage.

A row counts as "with email" when its email cell is non-blank. Without an
email column nothing can be confirmed, so With Email is 0 and every row
counts as missing.
"""

from __future__ import annotations

from typing import Mapping

from insights.aggregation import Breakdown, group_count, is_blank
from insights.dataset import Dataset
from insights.formatting import format_number
from insights.reports.base import BaseReport, Card, ReportType
from insights.resolver import CUSTOMERS_KEYWORDS, ColumnRole


class CustomersReport(BaseReport):
    report_type = ReportType.CUSTOMERS
    keywords = CUSTOMERS_KEYWORDS

    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        rows = dataset.rows
        email_col = columns[ColumnRole.EMAIL]
        city_breakdown = group_count(rows, columns[ColumnRole.CITY])

        with_email = 0
        if email_col is not None:
            with_email = sum(1 for row in rows if not is_blank(row.get(email_col)))
        missing_email = dataset.row_count - with_email

        cards = [
            Card("Total Customers", format_number(dataset.row_count)),
            Card("Cities Represented", format_number(len(city_breakdown))),
            Card("With Email", format_number(with_email)),
            Card("Missing Email", format_number(missing_email)),
        ]
        metrics = {
            "total_customers": float(dataset.row_count),
            "cities_represented": float(len(city_breakdown)),
            "with_email": float(with_email),
            "missing_email": float(missing_email),
        }
        return cards, {"city": city_breakdown}, metrics
