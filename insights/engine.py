"""
insights/engine.py

Synchronous entry points for the insights pipeline.

    compute(content, filename, report_type)
        bytes -> Dataset -> InsightsResult (ingestion errors propagate)

    analyze(dataset, report_type)
        Dataset -> InsightsResult; used when only the report type changes.

Both are pure with respect to their inputs: every call recomputes the
report, geo table, leaderboard and chart series from scratch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from insights.dataset import Dataset
from insights.geo import GeoEntry, geo_breakdown
from insights.ingestor import extension_from_filename, ingest
from insights.ranking import DEFAULT_RANKING_LIMIT, RankedEntry, rank
from insights.reports import ReportResult, ReportType, compute_report
from insights.resolver import BUYER_NAME_KEYWORDS, LOCATION_KEYWORDS, ColumnRole, resolve
from insights.views import ChartSeries, build_charts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsightsResult:
    dataset: Dataset
    report: ReportResult
    geo: tuple[GeoEntry, ...] = ()
    top_entries: tuple[RankedEntry, ...] = ()
    charts: tuple[ChartSeries, ...] = field(default_factory=tuple)
    location_column: str | None = None


def compute(
    content: bytes,
    filename: str,
    report_type: ReportType | str | None,
    *,
    ranking_limit: int = DEFAULT_RANKING_LIMIT,
) -> InsightsResult:
    """
    Ingest *content* (format taken from *filename*'s extension) and analyze it.

    Raises the ``IngestionError`` subclasses from :func:`insights.ingestor.ingest`.
    """

    dataset = ingest(content, extension_from_filename(filename))
    return analyze(dataset, report_type, ranking_limit=ranking_limit)


def analyze(
    dataset: Dataset,
    report_type: ReportType | str | None,
    *,
    ranking_limit: int = DEFAULT_RANKING_LIMIT,
) -> InsightsResult:
    report = compute_report(dataset, report_type)

    location_column = report.column(ColumnRole.CITY) or resolve(dataset.headers, LOCATION_KEYWORDS)
    geo = geo_breakdown(dataset.rows, location_column)

    top_entries: list[RankedEntry] = []
    if report.report_type is ReportType.CUSTOMER_PURCHASES:
        top_entries = rank(
            dataset.rows,
            resolve(dataset.headers, BUYER_NAME_KEYWORDS),
            report.column(ColumnRole.REVENUE),
            limit=ranking_limit,
        )

    charts = build_charts(dataset, report)
    logger.info(
        "Insights computed report=%s rows=%d unresolved=%d locations=%d top_entries=%d",
        report.report_type.value,
        dataset.row_count,
        len(report.unresolved),
        len(geo),
        len(top_entries),
    )
    return InsightsResult(
        dataset=dataset,
        report=report,
        geo=tuple(geo),
        top_entries=tuple(top_entries),
        charts=tuple(charts),
        location_column=location_column,
    )
