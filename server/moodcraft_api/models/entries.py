"""Mood entry request/response models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MoodEntryModel(BaseModel):
    """One persisted mood entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    mood: str
    intensity: int = Field(ge=0, le=10)
    notes: str
    created_at: datetime
    music_played: list[str]
    actions: list[str]


class ClassificationModel(BaseModel):
    """Classifier output shown to the user."""

    model_config = ConfigDict(from_attributes=True)

    mood: str
    intensity: int = Field(ge=0, le=10)
    suggested_actions: list[str]
    music_recommendations: list[str]
    summary: str
    scores: dict[str, int]


class FeelingRequest(BaseModel):
    """Free-text feeling submission."""

    text: str = Field(description="How the user is feeling, in their own words")


class ManualEntryRequest(BaseModel):
    """Entry with a user-chosen mood, bypassing the classifier."""

    mood: str = Field(min_length=1)
    intensity: int = Field(ge=0, le=10)
    notes: str = ""
    music_played: list[str] = []
    actions: list[str] = []


class SubmissionResponse(BaseModel):
    """Result of a submission; `saved` is False when the history could not be written."""

    model_config = ConfigDict(from_attributes=True)

    entry: MoodEntryModel
    saved: bool
    classification: Optional[ClassificationModel] = None
    narrative: Optional[str] = None
    error: Optional[str] = None
