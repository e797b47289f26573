"""Music API routes: suggested category and the playlist catalog."""
from fastapi import APIRouter, Depends, HTTPException

from mood_engine.catalog import PLAYLIST_GROUPS, get_playlist

from ..engine import MoodEngine, get_engine
from ..models.dashboard import MusicSuggestion
from ..models.music import PlaylistGroupModel, PlaylistModel

router = APIRouter(prefix="/api/mood/music", tags=["Music"])


@router.get("/suggested", response_model=MusicSuggestion)
async def get_suggested_category(engine: MoodEngine = Depends(get_engine)):
    """Background music category matching the most recent mood entry."""
    latest = engine.store.latest()
    return MusicSuggestion(
        category=engine.service.suggested_music_category().value,
        based_on_entry=latest.id if latest else None,
    )


@router.get("/playlists", response_model=list[PlaylistGroupModel])
async def get_playlists():
    """Curated playlists grouped by mood."""
    return [PlaylistGroupModel.model_validate(group.to_dict()) for group in PLAYLIST_GROUPS]


@router.get("/playlists/{slug}", response_model=PlaylistModel)
async def get_playlist_by_slug(slug: str):
    """One playlist with its tracks."""
    playlist = get_playlist(slug)
    if playlist is None:
        raise HTTPException(status_code=404, detail=f"Playlist '{slug}' not found")
    return PlaylistModel.model_validate(playlist.to_dict())
