"""
app/services package marker.
"""

from app.services.insights_session_service import (
    InsightsSession,
    InsightsSessionNotFoundError,
    InsightsSessionStore,
    get_insights_session_store,
)

__all__ = [
    "InsightsSession",
    "InsightsSessionNotFoundError",
    "InsightsSessionStore",
    "get_insights_session_store",
]
