"""Pydantic models for MoodCraft API requests and responses."""
from .entries import (
    MoodEntryModel,
    ClassificationModel,
    FeelingRequest,
    ManualEntryRequest,
    SubmissionResponse,
)
from .dashboard import (
    SeriesPointModel,
    EmotionSliceModel,
    EmotionDistributionModel,
    MoodInsightModel,
    DashboardResponse,
    MusicSuggestion,
)
from .music import TrackModel, PlaylistModel, PlaylistGroupModel

__all__ = [
    "MoodEntryModel",
    "ClassificationModel",
    "FeelingRequest",
    "ManualEntryRequest",
    "SubmissionResponse",
    "SeriesPointModel",
    "EmotionSliceModel",
    "EmotionDistributionModel",
    "MoodInsightModel",
    "DashboardResponse",
    "MusicSuggestion",
    "TrackModel",
    "PlaylistModel",
    "PlaylistGroupModel",
]
