"""
app/schemas/insights.py

Request and response schemas for insights endpoints.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field

from app.services.insights_session_service import InsightsSession
from insights.engine import InsightsResult
from insights.reports import ReportType

CellValue = Union[str, int, float, None]


class ReportTypeResponse(BaseModel):
    value: str
    label: str
    description: str


class CardResponse(BaseModel):
    label: str
    value: str


class UnresolvedColumnResponse(BaseModel):
    role: str
    keywords: list[str] = Field(default_factory=list)


class ReportResponse(BaseModel):
    """
    Cards, breakdowns and the column resolutions used to build them.
    """

    report_type: str
    cards: list[CardResponse] = Field(default_factory=list)
    breakdowns: dict[str, dict[str, float]] = Field(default_factory=dict)
    columns: dict[str, str | None] = Field(default_factory=dict)
    metrics: dict[str, float] = Field(default_factory=dict)
    unresolved: list[UnresolvedColumnResponse] = Field(default_factory=list)


class GeoEntryResponse(BaseModel):
    location: str
    count: int = Field(..., ge=0)
    intensity: float = Field(..., ge=0.0, le=1.0)
    share: float = Field(..., ge=0.0, le=1.0)


class RankedEntryResponse(BaseModel):
    rank: int = Field(..., ge=1)
    name: str
    total: float
    count: int = Field(..., ge=1)


class ChartSeriesResponse(BaseModel):
    kind: str
    title: str
    labels: list[str] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)


class DatasetPreviewResponse(BaseModel):
    headers: list[str]
    row_count: int = Field(..., ge=0)
    column_count: int = Field(..., ge=0)
    source_format: str
    rows: list[dict[str, CellValue]] = Field(default_factory=list)


class InsightsResponse(BaseModel):
    """
    API response for one computed insights view of an uploaded dataset.
    """

    session_id: str
    filename: str
    report: ReportResponse
    geo: list[GeoEntryResponse] = Field(default_factory=list)
    location_column: str | None = None
    top_entries: list[RankedEntryResponse] = Field(default_factory=list)
    charts: list[ChartSeriesResponse] = Field(default_factory=list)
    dataset: DatasetPreviewResponse

    @classmethod
    def from_result(
        cls,
        *,
        session: InsightsSession,
        result: InsightsResult,
        preview_rows: int,
    ) -> "InsightsResponse":
        dataset = result.dataset
        total_rows = dataset.row_count
        return cls(
            session_id=session.session_id,
            filename=session.filename,
            report=ReportResponse.model_validate(result.report.to_dict()),
            geo=[GeoEntryResponse.model_validate(entry.to_dict(total_rows)) for entry in result.geo],
            location_column=result.location_column,
            top_entries=[
                RankedEntryResponse.model_validate(entry.to_dict()) for entry in result.top_entries
            ],
            charts=[ChartSeriesResponse.model_validate(series.to_dict()) for series in result.charts],
            dataset=DatasetPreviewResponse(
                headers=list(dataset.headers),
                row_count=total_rows,
                column_count=dataset.column_count,
                source_format=dataset.source_format,
                rows=[dict(row) for row in dataset.preview(preview_rows)],
            ),
        )


class SelectReportRequest(BaseModel):
    report_type: str = Field(..., description="Report type label or value; unknown values use the generic report")


def report_type_catalog() -> list[ReportTypeResponse]:
    return [
        ReportTypeResponse(value=member.value, label=member.label, description=member.description)
        for member in ReportType
    ]
