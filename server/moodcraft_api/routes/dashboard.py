"""Dashboard API routes."""
from fastapi import APIRouter, Depends, Query

from mood_engine.aggregation import build_dashboard
from mood_engine.models import TimeWindow

from ..engine import MoodEngine, get_engine
from ..models.dashboard import DashboardResponse

router = APIRouter(prefix="/api/mood", tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    window: TimeWindow = Query(default=TimeWindow.WEEK, description="week, month or year"),
    engine: MoodEngine = Depends(get_engine),
):
    """
    Get chart-ready aggregates for the selected time window.

    Includes the mood trend series, emotion distribution, a short insight,
    the most frequent positive influence, and the suggested music category.
    """
    dashboard = build_dashboard(
        engine.store.load(),
        window,
        suggested_category=engine.service.suggested_music_category(),
    )
    return DashboardResponse.model_validate(dashboard.to_dict())
