"""
insights/reports/payment_tickets.py

Payment tickets report: payment methods, sales channels and seller totals.

Cards
-----
Total Sales      = sum(amount)
Total Tickets    = row count
Payment Methods  = distinct payment method keys
Avg Ticket       = Total Sales / row count (0 without an amount column)

The city column is resolved but not aggregated here; it feeds the geo table.
"""

from __future__ import annotations

from typing import Mapping

from insights.aggregation import Breakdown, column_values, group_count, group_sum
from insights.dataset import Dataset
from insights.formatting import format_currency, format_number
from insights.reports.base import BaseReport, Card, ReportType, average
from insights.resolver import PAYMENT_TICKETS_KEYWORDS, ColumnRole


class PaymentTicketsReport(BaseReport):
    report_type = ReportType.PAYMENT_TICKETS
    keywords = PAYMENT_TICKETS_KEYWORDS

    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        rows = dataset.rows
        amount_col = columns[ColumnRole.REVENUE]

        amounts = column_values(rows, amount_col)
        total = sum(amounts)
        avg_ticket = average(total, len(amounts))
        method_breakdown = group_count(rows, columns[ColumnRole.PAYMENT_METHOD])

        breakdowns = {
            "payment_method": method_breakdown,
            "channel": group_count(rows, columns[ColumnRole.CHANNEL]),
            "seller": group_sum(rows, columns[ColumnRole.SELLER], amount_col),
        }
        cards = [
            Card("Total Sales", format_currency(total)),
            Card("Total Tickets", format_number(dataset.row_count)),
            Card("Payment Methods", format_number(len(method_breakdown))),
            Card("Avg Ticket", format_currency(avg_ticket)),
        ]
        metrics = {
            "total_sales": total,
            "total_tickets": float(dataset.row_count),
            "payment_methods": float(len(method_breakdown)),
            "avg_ticket": avg_ticket,
        }
        return cards, breakdowns, metrics
