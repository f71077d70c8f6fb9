"""
app/api/routers package marker.
"""

from app.api.routers.insights import router as insights_router

__all__ = [
    "insights_router",
]
