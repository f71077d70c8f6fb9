"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, Query, UploadFile, status

from app.services.insights_session_service import (
    InsightsSessionStore,
    get_insights_session_store,
)
from insights.errors import UnsupportedExtensionError
from insights.ingestor import SUPPORTED_EXTENSIONS, extension_from_filename, is_supported_extension


def get_tabular_upload(
    file: UploadFile = File(...),
    session_id: str | None = Query(default=None, description="Existing session to replace"),
    store: InsightsSessionStore = Depends(get_insights_session_store),
) -> UploadFile:
    """
    Validate that the uploaded file has a supported tabular extension.

    A rejected upload into an existing session discards that session.
    """

    extension = extension_from_filename(file.filename or "")
    if not is_supported_extension(extension):
        if session_id:
            store.discard(session_id)
        error = UnsupportedExtensionError(
            f"Please upload a valid {', '.join(SUPPORTED_EXTENSIONS)} file."
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error.to_dict(),
        )

    return file
