"""Mood entry API routes: feeling submission, manual entries and history."""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..engine import MoodEngine, get_engine
from ..models.entries import (
    FeelingRequest,
    ManualEntryRequest,
    MoodEntryModel,
    SubmissionResponse,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mood", tags=["Mood Entries"])


@router.post("/feelings", response_model=SubmissionResponse)
async def submit_feeling(payload: FeelingRequest, engine: MoodEngine = Depends(get_engine)):
    """
    Analyze a free-text feeling and add it to the history.

    The analysis is returned even when the history could not be written;
    in that case `saved` is false and `error` explains why.
    """
    result = engine.service.submit_feeling(payload.text)
    if result is None:
        raise HTTPException(status_code=422, detail="Tell us how you're feeling first.")

    delay = engine.settings.response_delay_seconds
    if delay > 0:
        await asyncio.sleep(delay)

    return SubmissionResponse.model_validate(result.to_dict())


@router.post("/entries", response_model=SubmissionResponse, status_code=201)
async def create_manual_entry(
    payload: ManualEntryRequest,
    response: Response,
    engine: MoodEngine = Depends(get_engine),
):
    """Record an entry with a mood chosen by the user instead of the classifier."""
    try:
        result = engine.service.log_manual_entry(
            mood=payload.mood,
            intensity=payload.intensity,
            notes=payload.notes,
            music_played=payload.music_played,
            actions=payload.actions,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not result.saved:
        response.status_code = 507
    return SubmissionResponse.model_validate(result.to_dict())


@router.get("/entries", response_model=list[MoodEntryModel])
async def get_entries(
    mood: Optional[str] = Query(default=None, description="Mood to filter by, or 'all'"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000, description="Maximum entries to return"),
    engine: MoodEngine = Depends(get_engine),
):
    """Get the mood history, newest first."""
    entries = engine.service.history(mood_filter=mood, limit=limit)
    return [MoodEntryModel.model_validate(e.to_dict()) for e in entries]


@router.delete("/entries")
async def purge_entries(engine: MoodEngine = Depends(get_engine)):
    """Delete the whole mood history."""
    if not engine.store.purge():
        raise HTTPException(status_code=507, detail="History could not be cleared.")
    log.info("[API] History purged on request")
    return {"status": "purged"}
