"""Playlist catalog models."""
from pydantic import BaseModel, ConfigDict


class TrackModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    length: str
    src: str


class PlaylistModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    description: str
    tracks: list[TrackModel]


class PlaylistGroupModel(BaseModel):
    """Playlists curated for one mood."""

    model_config = ConfigDict(from_attributes=True)

    mood: str
    description: str
    playlists: list[PlaylistModel]
