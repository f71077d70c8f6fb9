"""
insights package marker.
"""

from insights.dataset import Cell, Dataset, Row
from insights.engine import InsightsResult, analyze, compute
from insights.errors import (
    EmptyDatasetError,
    IngestionError,
    ParseFailureError,
    UnresolvedColumn,
    UnsupportedExtensionError,
)
from insights.ingestor import ingest
from insights.reports import ReportResult, ReportType, compute_report

__all__ = [
    "Cell",
    "Dataset",
    "EmptyDatasetError",
    "IngestionError",
    "InsightsResult",
    "ParseFailureError",
    "ReportResult",
    "ReportType",
    "Row",
    "UnresolvedColumn",
    "UnsupportedExtensionError",
    "analyze",
    "compute",
    "compute_report",
    "ingest",
]
