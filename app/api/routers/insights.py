"""
app/api/routers/insights.py

Insights upload and analysis endpoints.

Upload flow
-----------
1. Read the uploaded bytes (the only asynchronous step).
2. Run ingestion and analysis in the thread pool.
3. Store the dataset in the caller's session, replacing any previous one.

Changing the report type re-analyzes the stored dataset without a new
upload. A failed upload into an existing session discards that session's
previous dataset. Uploads may only target a session the server created;
an unknown session id is rejected with 404.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_tabular_upload
from app.config import InsightsSettings, get_insights_settings
from app.logging_utils import log_event
from app.schemas.insights import (
    InsightsResponse,
    ReportTypeResponse,
    SelectReportRequest,
    report_type_catalog,
)
from app.services.insights_session_service import (
    InsightsSessionNotFoundError,
    InsightsSessionStore,
    get_insights_session_store,
)
from insights.engine import analyze, compute
from insights.errors import EmptyDatasetError, IngestionError
from insights.reports import ReportType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["insights"])

_CONTENT_TOO_LARGE = 413
_UNPROCESSABLE_CONTENT = 422


def _ingestion_http_error(exc: IngestionError) -> HTTPException:
    status_code = (
        _UNPROCESSABLE_CONTENT
        if isinstance(exc, EmptyDatasetError)
        else status.HTTP_400_BAD_REQUEST
    )
    return HTTPException(status_code=status_code, detail=exc.to_dict())


def _session_not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Insights session '{session_id}' not found.",
    )


@router.get("/report-types", response_model=list[ReportTypeResponse])
def list_report_types() -> list[ReportTypeResponse]:
    return report_type_catalog()


@router.post("/upload", response_model=InsightsResponse)
async def upload_dataset(
    file: UploadFile = Depends(get_tabular_upload),
    report_type: str = Query(default=ReportType.GENERIC.value, description="Report type label or value"),
    session_id: str | None = Query(default=None, description="Existing session to replace"),
    settings: InsightsSettings = Depends(get_insights_settings),
    store: InsightsSessionStore = Depends(get_insights_session_store),
) -> InsightsResponse:
    """
    Ingest one tabular file and return its dashboard for *report_type*.
    """

    filename = file.filename or ""
    if session_id:
        try:
            store.get(session_id)
        except InsightsSessionNotFoundError as exc:
            await file.close()
            raise _session_not_found(session_id) from exc

    try:
        content = await file.read(settings.max_upload_bytes + 1)
    finally:
        await file.close()

    if len(content) > settings.max_upload_bytes:
        if session_id:
            store.discard(session_id)
        log_event(
            logger,
            logging.WARNING,
            "insights_upload_rejected",
            filename=filename,
            code="content_too_large",
            max_upload_mb=settings.max_upload_mb,
        )
        raise HTTPException(
            status_code=_CONTENT_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_mb} MB upload limit.",
        )

    selected = ReportType.parse(report_type)
    try:
        result = await run_in_threadpool(
            compute,
            content,
            filename,
            selected,
            ranking_limit=settings.ranking_limit,
        )
    except IngestionError as exc:
        if session_id:
            store.discard(session_id)
        log_event(
            logger,
            logging.WARNING,
            "insights_upload_rejected",
            filename=filename,
            code=exc.code,
            message=exc.message,
        )
        raise _ingestion_http_error(exc) from exc

    try:
        session = store.save(
            dataset=result.dataset,
            filename=filename,
            report_type=selected,
            session_id=session_id,
        )
    except InsightsSessionNotFoundError as exc:
        raise _session_not_found(session_id or "") from exc
    return InsightsResponse.from_result(
        session=session,
        result=result,
        preview_rows=settings.preview_rows,
    )


@router.post("/sessions/{session_id}/report", response_model=InsightsResponse)
async def select_report(
    session_id: str,
    body: SelectReportRequest,
    settings: InsightsSettings = Depends(get_insights_settings),
    store: InsightsSessionStore = Depends(get_insights_session_store),
) -> InsightsResponse:
    """
    Re-aggregate the stored dataset for a different report type.
    """

    try:
        session = store.select_report(session_id, ReportType.parse(body.report_type))
    except InsightsSessionNotFoundError as exc:
        raise _session_not_found(session_id) from exc

    result = await run_in_threadpool(
        analyze,
        session.dataset,
        session.report_type,
        ranking_limit=settings.ranking_limit,
    )
    return InsightsResponse.from_result(
        session=session,
        result=result,
        preview_rows=settings.preview_rows,
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def reset_session(
    session_id: str,
    store: InsightsSessionStore = Depends(get_insights_session_store),
) -> Response:
    try:
        store.reset(session_id)
    except InsightsSessionNotFoundError as exc:
        raise _session_not_found(session_id) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
