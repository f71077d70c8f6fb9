"""
insights/views.py

Chart-ready series derived from a computed report.

Views reuse ``ReportResult.columns`` and its breakdowns; nothing here
resolves columns again. A breakdown that came back empty produces no series.
"""

from __future__ import annotations

from dataclasses import dataclass

from insights.aggregation import Breakdown, group_count, top_items
from insights.dataset import Dataset
from insights.reports import ReportResult, ReportType
from insights.resolver import ColumnRole

BAR_TOP_N = 15
PIE_TOP_N = 8


@dataclass(frozen=True)
class ChartSeries:
    kind: str
    title: str
    labels: tuple[str, ...]
    values: tuple[float, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "title": self.title,
            "labels": list(self.labels),
            "values": list(self.values),
        }


def _series(kind: str, title: str, breakdown: Breakdown, limit: int | None = None) -> ChartSeries | None:
    if not breakdown:
        return None
    items = top_items(breakdown, limit) if limit is not None else list(breakdown.items())
    return ChartSeries(
        kind=kind,
        title=title,
        labels=tuple(label for label, _ in items),
        values=tuple(value for _, value in items),
    )


def build_charts(dataset: Dataset, report: ReportResult) -> list[ChartSeries]:
    """
    Return the bar and pie series for *report* (Generic reports have none).
    """

    breakdowns = report.breakdowns
    candidates: list[ChartSeries | None] = []

    if report.report_type is ReportType.CUSTOMER_PURCHASES:
        if report.column(ColumnRole.REVENUE) is not None:
            candidates.append(_series("bar", "Revenue by Tier", breakdowns.get("revenue_by_tier", {})))
        else:
            # no revenue column: fall back to order counts per tier
            tier_counts = breakdowns.get("tier") or group_count(
                dataset.rows, report.column(ColumnRole.TIER)
            )
            candidates.append(_series("bar", "Orders by Tier", tier_counts))
        candidates.append(_series("pie", "Payment Methods", breakdowns.get("payment_method", {})))
    elif report.report_type is ReportType.CUSTOMERS:
        city = breakdowns.get("city", {})
        candidates.append(_series("bar", "Customers by City", city, BAR_TOP_N))
        candidates.append(_series("pie", "Top Cities", city, PIE_TOP_N))
    elif report.report_type is ReportType.PAYMENT_TICKETS:
        candidates.append(_series("bar", "Tickets by Channel", breakdowns.get("channel", {})))
        candidates.append(_series("pie", "Payment Methods", breakdowns.get("payment_method", {})))
    elif report.report_type is ReportType.SELLERS:
        candidates.append(_series("bar", "Revenue by Location", breakdowns.get("city", {}), BAR_TOP_N))
        candidates.append(_series("pie", "Sales Methods", breakdowns.get("payment_method", {})))

    return [series for series in candidates if series is not None]
