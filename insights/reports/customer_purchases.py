"""
insights/reports/customer_purchases.py

Customer purchases report.

Cards
-----
Total Revenue    = sum(revenue)
Total Orders     = row count
Avg Order Value  = Total Revenue / row count (0 without a revenue column)
Unique Tiers     = distinct tier keys (0 without a tier column)

Breakdowns
----------
tier             count per tier
revenue_by_tier  revenue sum per tier
city             revenue sum per city
payment_method   count per payment method
"""

from __future__ import annotations

from typing import Mapping

from insights.aggregation import Breakdown, column_values, group_count, group_sum
from insights.dataset import Dataset
from insights.formatting import format_currency, format_number
from insights.reports.base import BaseReport, Card, ReportType, average
from insights.resolver import CUSTOMER_PURCHASES_KEYWORDS, ColumnRole


class CustomerPurchasesReport(BaseReport):
    report_type = ReportType.CUSTOMER_PURCHASES
    keywords = CUSTOMER_PURCHASES_KEYWORDS

    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        rows = dataset.rows
        revenue_col = columns[ColumnRole.REVENUE]
        tier_col = columns[ColumnRole.TIER]

        revenues = column_values(rows, revenue_col)
        total_revenue = sum(revenues)
        avg_order = average(total_revenue, len(revenues))

        tier_breakdown = group_count(rows, tier_col)
        breakdowns = {
            "tier": tier_breakdown,
            "revenue_by_tier": group_sum(rows, tier_col, revenue_col),
            "city": group_sum(rows, columns[ColumnRole.CITY], revenue_col),
            "payment_method": group_count(rows, columns[ColumnRole.PAYMENT_METHOD]),
        }

        cards = [
            Card("Total Revenue", format_currency(total_revenue)),
            Card("Total Orders", format_number(dataset.row_count)),
            Card("Avg Order Value", format_currency(avg_order)),
            Card("Unique Tiers", format_number(len(tier_breakdown))),
        ]
        metrics = {
            "total_revenue": total_revenue,
            "total_orders": float(dataset.row_count),
            "avg_order_value": avg_order,
            "unique_tiers": float(len(tier_breakdown)),
        }
        return cards, breakdowns, metrics
