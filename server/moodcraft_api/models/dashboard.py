"""Dashboard aggregate models."""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

MusicCategoryName = Literal["happy", "calm", "focus", "lofi"]


class SeriesPointModel(BaseModel):
    """One chart slot; `synthetic` points are placeholders with no entries behind them."""

    model_config = ConfigDict(from_attributes=True)

    label: str
    start: date
    average_mood_score: float
    entry_count: int
    synthetic: bool


class EmotionSliceModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    count: int


class EmotionDistributionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slices: list[EmotionSliceModel]
    is_fallback: bool
    total: int


class MoodInsightModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level: str
    message: str
    average: float


class DashboardResponse(BaseModel):
    """Everything the dashboard renders for one time window."""

    model_config = ConfigDict(from_attributes=True)

    window: Literal["week", "month", "year"]
    series: list[SeriesPointModel]
    distribution: EmotionDistributionModel
    insight: MoodInsightModel
    top_influencer: str
    suggested_music_category: Optional[MusicCategoryName] = None


class MusicSuggestion(BaseModel):
    """Background music category for the audio player."""

    category: MusicCategoryName
    based_on_entry: Optional[str] = None
