"""
Playback queue over an audio backend.

The engine never decodes audio. It drives an AudioBackend that knows how
to load and play one track, and keeps the queue state around it: which
track is current, what to do when a track fails to load or ends, and the
volume/mute settings.
"""

import logging
from typing import Callable, Optional, Protocol, Sequence

from .catalog import Playlist, Track

logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 0.3


class AudioBackend(Protocol):
    """What the queue needs from an audio player."""

    def load(self, track: Track) -> bool:
        """Load a track; False if it could not be loaded."""
        ...

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def set_volume(self, level: float) -> None:
        ...

    def on_track_ended(self, callback: Callable[[], None]) -> None:
        ...


class PlaybackQueue:
    """
    Plays the tracks of one playlist in order, wrapping around at both ends.

    A track that fails to load is skipped in favour of the next one; after a
    full cycle of failures the queue gives up and stays stopped.
    """

    def __init__(self, backend: AudioBackend, tracks: Sequence[Track], volume: float = DEFAULT_VOLUME):
        self.backend = backend
        self.tracks = list(tracks)
        self.index = 0
        self.playing = False
        self.muted = False
        self.volume = self._clamp(volume)
        self.loaded: Optional[Track] = None
        self.failed_tracks: list = []

        backend.on_track_ended(self.next)
        backend.set_volume(self.volume)

    @classmethod
    def for_playlist(cls, backend: AudioBackend, playlist: Playlist, **kwargs) -> "PlaybackQueue":
        return cls(backend, playlist.tracks, **kwargs)

    @staticmethod
    def _clamp(level: float) -> float:
        return max(0.0, min(1.0, float(level)))

    @property
    def current(self) -> Optional[Track]:
        if not self.tracks:
            return None
        return self.tracks[self.index]

    def _load_from(self, start: int) -> bool:
        """Load the first loadable track starting at `start`, in queue order."""
        for offset in range(len(self.tracks)):
            index = (start + offset) % len(self.tracks)
            track = self.tracks[index]
            if self.backend.load(track):
                self.index = index
                self.loaded = track
                return True
            logger.warning(f"[PLAYBACK] Could not load '{track.name}', trying the next track")
            self.failed_tracks.append(track)

        logger.error("[PLAYBACK] No track in the queue could be loaded")
        self.loaded = None
        self.playing = False
        return False

    def _switch_to(self, index: int) -> bool:
        was_playing = self.playing
        if self.playing:
            self.backend.pause()
            self.playing = False
        if not self._load_from(index):
            return False
        if was_playing:
            self.backend.play()
            self.playing = True
        return True

    def toggle_play(self) -> bool:
        """Play or pause; returns whether the queue is now playing."""
        if not self.tracks:
            return False
        if self.playing:
            self.backend.pause()
            self.playing = False
            return False
        if self.loaded is None and not self._load_from(self.index):
            return False
        self.backend.play()
        self.playing = True
        return True

    def next(self) -> bool:
        if not self.tracks:
            return False
        return self._switch_to((self.index + 1) % len(self.tracks))

    def previous(self) -> bool:
        if not self.tracks:
            return False
        return self._switch_to((self.index - 1) % len(self.tracks))

    def set_volume(self, level: float) -> float:
        self.volume = self._clamp(level)
        if not self.muted:
            self.backend.set_volume(self.volume)
        return self.volume

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        self.backend.set_volume(0.0 if self.muted else self.volume)
        return self.muted
