"""Curated playlist catalog, grouped by the mood each group is meant for."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Track:
    name: str
    length: str
    src: str

    def to_dict(self) -> dict:
        return {"name": self.name, "length": self.length, "src": self.src}


@dataclass(frozen=True)
class Playlist:
    name: str
    slug: str
    description: str = ""
    tracks: Tuple[Track, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "tracks": [t.to_dict() for t in self.tracks],
        }


@dataclass(frozen=True)
class PlaylistGroup:
    mood: str
    description: str
    playlists: Tuple[Playlist, ...]

    def to_dict(self) -> dict:
        return {
            "mood": self.mood,
            "description": self.description,
            "playlists": [p.to_dict() for p in self.playlists],
        }


_FREESOUND = "https://cdn.freesound.org/previews"

GENTLE_PIANO = Playlist(
    name="Gentle Piano",
    slug="gentle-piano",
    description="Soothing piano melodies to calm your mind and relax your body.",
    tracks=(
        Track("Peaceful Morning", "3:45", f"{_FREESOUND}/612/612095_5674468-lq.mp3"),
        Track("Rainy Day Reflections", "4:20", f"{_FREESOUND}/651/651713_5674468-lq.mp3"),
        Track("Moonlight Sonata", "5:10", f"{_FREESOUND}/368/368332_1676145-lq.mp3"),
    ),
)

ACOUSTIC_BALLADS = Playlist(
    name="Acoustic Ballads",
    slug="acoustic-ballads",
    description="Heartfelt acoustic songs that touch your soul and calm your mind.",
    tracks=(
        Track("Mountain Road", "4:12", f"{_FREESOUND}/635/635586_14159485-lq.mp3"),
        Track("Starry Night", "3:50", f"{_FREESOUND}/612/612117_5674468-lq.mp3"),
        Track("Sunset Drive", "4:45", f"{_FREESOUND}/583/583545_7616568-lq.mp3"),
    ),
)

MELANCHOLY_SYMPHONIES = Playlist(
    name="Melancholy Symphonies",
    slug="melancholy-symphonies",
    description="Embrace your emotions with these beautiful melancholy compositions.",
    tracks=(
        Track("Winter's Tale", "5:23", f"{_FREESOUND}/612/612092_5674468-lq.mp3"),
        Track("Rainy Memories", "4:15", f"{_FREESOUND}/344/344430_1676145-lq.mp3"),
        Track("Quiet Reflection", "6:05", f"{_FREESOUND}/368/368326_1676145-lq.mp3"),
    ),
)

SOOTHING_AMBIENT = Playlist(
    name="Soothing Ambient",
    slug="soothing-ambient",
    description="Ambient sounds to create a peaceful atmosphere and calm your thoughts.",
    tracks=(
        Track("Ocean Waves", "6:12", f"{_FREESOUND}/517/517407_11019257-lq.mp3"),
        Track("Forest Dreams", "5:30", f"{_FREESOUND}/398/398715_7552264-lq.mp3"),
        Track("Gentle Rain", "7:45", f"{_FREESOUND}/419/419827_230356-lq.mp3"),
    ),
)

PLAYLIST_GROUPS: Tuple[PlaylistGroup, ...] = (
    PlaylistGroup(
        mood="Happy",
        description="Uplifting music to boost your happiness and energy",
        playlists=(
            Playlist("Feel-good classics", "feel-good-classics"),
            Playlist("Upbeat pop", "upbeat-pop"),
            Playlist("Dance hits", "dance-hits"),
        ),
    ),
    PlaylistGroup(
        mood="Calm",
        description="Soothing music to help you relax and find peace",
        playlists=(GENTLE_PIANO, ACOUSTIC_BALLADS, SOOTHING_AMBIENT),
    ),
    PlaylistGroup(
        mood="Focused",
        description="Music to help you concentrate and boost productivity",
        playlists=(
            Playlist("Study beats", "study-beats"),
            Playlist("Deep focus", "deep-focus"),
            Playlist("Instrumental jazz", "instrumental-jazz"),
        ),
    ),
    PlaylistGroup(
        mood="Reflective",
        description="Music for introspection and deep thinking",
        playlists=(
            MELANCHOLY_SYMPHONIES,
            Playlist("Classical masterpieces", "classical-masterpieces"),
            Playlist("Acoustic covers", "acoustic-covers"),
        ),
    ),
)

_BY_SLUG: Dict[str, Playlist] = {
    playlist.slug: playlist
    for group in PLAYLIST_GROUPS
    for playlist in group.playlists
}


def get_playlist(slug: str) -> Optional[Playlist]:
    """Look up a playlist by slug; None if the catalog has no such playlist."""
    return _BY_SLUG.get(slug)


def all_slugs() -> List[str]:
    return list(_BY_SLUG)
