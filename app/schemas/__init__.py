"""
app/schemas package marker.
"""

from app.schemas.insights import (
    CardResponse,
    ChartSeriesResponse,
    DatasetPreviewResponse,
    GeoEntryResponse,
    InsightsResponse,
    RankedEntryResponse,
    ReportResponse,
    ReportTypeResponse,
    SelectReportRequest,
)

__all__ = [
    "CardResponse",
    "ChartSeriesResponse",
    "DatasetPreviewResponse",
    "GeoEntryResponse",
    "InsightsResponse",
    "RankedEntryResponse",
    "ReportResponse",
    "ReportTypeResponse",
    "SelectReportRequest",
]
