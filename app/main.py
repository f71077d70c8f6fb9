from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import get_insights_settings, get_log_level
from app.logging_utils import configure_logging, log_event
from insights.resolver import KEYWORD_TABLE_VERSION


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Log the effective settings on boot and the shutdown on exit."""
    logger = logging.getLogger(__name__)
    settings = get_insights_settings()
    log_event(
        logger,
        logging.INFO,
        "insights_api_started",
        max_upload_mb=settings.max_upload_mb,
        preview_rows=settings.preview_rows,
        ranking_limit=settings.ranking_limit,
        keyword_table_version=KEYWORD_TABLE_VERSION,
    )
    try:
        yield
    finally:
        log_event(logger, logging.INFO, "insights_api_stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    configure_logging(get_log_level())

    application = FastAPI(
        title="Insights Engine API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import insights_router

    application.include_router(insights_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
