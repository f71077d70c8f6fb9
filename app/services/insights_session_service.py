"""
app/services/insights_session_service.py

In-memory session store for uploaded datasets.

Each session holds at most one Dataset. A new upload into an existing
session replaces the previous Dataset (and with it every derived result);
a reset removes the session. The store keeps at most ``max_sessions``
entries; saving a new session past that bound evicts the oldest uploads.
Stored values are immutable, so readers never observe a partially updated
dataset.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache

from app.config import get_insights_settings
from app.logging_utils import log_event
from insights.dataset import Dataset
from insights.reports import ReportType

logger = logging.getLogger(__name__)


class InsightsSessionNotFoundError(KeyError):
    """Raised when a session id is unknown or was reset."""


@dataclass(frozen=True)
class InsightsSession:
    session_id: str
    filename: str
    dataset: Dataset
    report_type: ReportType
    uploaded_at: datetime


class InsightsSessionStore:
    """
    Thread-safe, bounded map of session id -> latest uploaded dataset.
    """

    def __init__(self, max_sessions: int = 100) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._max_sessions = max_sessions
        self._sessions: dict[str, InsightsSession] = {}
        self._lock = threading.Lock()

    def _evict_oldest_locked(self) -> list[str]:
        evicted: list[str] = []
        while len(self._sessions) >= self._max_sessions:
            # dict order is upload order
            oldest_id = next(iter(self._sessions))
            del self._sessions[oldest_id]
            evicted.append(oldest_id)
        return evicted

    def save(
        self,
        *,
        dataset: Dataset,
        filename: str,
        report_type: ReportType,
        session_id: str | None = None,
    ) -> InsightsSession:
        """
        Store *dataset*, replacing whatever the session held before.

        Without *session_id* a new session is created, evicting the oldest
        uploads once the store holds ``max_sessions`` entries. A given
        *session_id* must name an existing session.
        """

        session = InsightsSession(
            session_id=session_id or uuid.uuid4().hex,
            filename=filename,
            dataset=dataset,
            report_type=report_type,
            uploaded_at=datetime.now(tz=timezone.utc),
        )
        with self._lock:
            replaced = session.session_id in self._sessions
            if session_id and not replaced:
                raise InsightsSessionNotFoundError(session_id)
            if replaced:
                del self._sessions[session.session_id]
                evicted: list[str] = []
            else:
                evicted = self._evict_oldest_locked()
            self._sessions[session.session_id] = session
        for evicted_id in evicted:
            log_event(logger, logging.INFO, "insights_session_evicted", session_id=evicted_id)
        log_event(
            logger,
            logging.INFO,
            "insights_session_saved",
            session_id=session.session_id,
            filename=filename,
            rows=dataset.row_count,
            replaced=replaced,
        )
        return session

    def get(self, session_id: str) -> InsightsSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise InsightsSessionNotFoundError(session_id)
        return session

    def select_report(self, session_id: str, report_type: ReportType) -> InsightsSession:
        """
        Record a new report type for the stored dataset without re-uploading.
        """

        with self._lock:
            current = self._sessions.get(session_id)
            if current is None:
                raise InsightsSessionNotFoundError(session_id)
            updated = InsightsSession(
                session_id=current.session_id,
                filename=current.filename,
                dataset=current.dataset,
                report_type=report_type,
                uploaded_at=current.uploaded_at,
            )
            self._sessions[session_id] = updated
        return updated

    def reset(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            raise InsightsSessionNotFoundError(session_id)
        log_event(logger, logging.INFO, "insights_session_reset", session_id=session_id)

    def discard(self, session_id: str) -> bool:
        """Remove the session if present; returns whether anything was removed."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


@lru_cache(maxsize=1)
def get_insights_session_store() -> InsightsSessionStore:
    """
    Process-wide session store used by the API dependencies.
    """

    return InsightsSessionStore(max_sessions=get_insights_settings().max_sessions)
