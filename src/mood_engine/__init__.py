"""
MoodCraft mood engine.

Turns free-text feelings into mood entries, keeps a local append-only
history of them, and derives dashboard aggregates from that history.
"""

from .aggregation import (
    build_dashboard,
    daily_mood_series,
    emotion_distribution,
    mood_insight,
    mood_score,
    top_influencer,
)
from .classifier import classify
from .models import (
    Classification,
    MoodEntry,
    MoodLabel,
    MusicCategory,
    SubmissionResult,
    TimeWindow,
)
from .narratives import NarrativePicker
from .service import EntryService
from .storage import (
    JsonFileBackend,
    MemoryBackend,
    SqliteBackend,
    StorageError,
    StorageQuotaExceeded,
)
from .store import ChangeNotifier, EntryStore, HistoryReader

__all__ = [
    "build_dashboard",
    "daily_mood_series",
    "emotion_distribution",
    "mood_insight",
    "mood_score",
    "top_influencer",
    "classify",
    "Classification",
    "MoodEntry",
    "MoodLabel",
    "MusicCategory",
    "SubmissionResult",
    "TimeWindow",
    "NarrativePicker",
    "EntryService",
    "JsonFileBackend",
    "MemoryBackend",
    "SqliteBackend",
    "StorageError",
    "StorageQuotaExceeded",
    "ChangeNotifier",
    "EntryStore",
    "HistoryReader",
]
