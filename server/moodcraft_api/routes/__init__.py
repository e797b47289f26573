"""API route modules."""
from .entries import router as entries_router
from .dashboard import router as dashboard_router
from .music import router as music_router
from .stream import router as stream_router

__all__ = [
    "entries_router",
    "dashboard_router",
    "music_router",
    "stream_router",
]
