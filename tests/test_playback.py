"""
Unit tests for the playback queue.

A recording fake stands in for the audio player, so these tests only check
queue state: skipping unloadable tracks, wrap-around, volume and mute.

Usage:
    pytest tests/test_playback.py -v
"""
import pytest

from mood_engine.catalog import GENTLE_PIANO, Track
from mood_engine.playback import DEFAULT_VOLUME, PlaybackQueue


class FakeAudio:
    """Records calls; tracks named in `broken` fail to load."""

    def __init__(self, broken=()):
        self.broken = set(broken)
        self.calls = []
        self.volume = None
        self.ended_callback = None

    def load(self, track):
        self.calls.append(("load", track.name))
        return track.name not in self.broken

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def set_volume(self, level):
        self.volume = level

    def on_track_ended(self, callback):
        self.ended_callback = callback


def tracks(*names):
    return [Track(name, "1:00", f"https://example.test/{name}.mp3") for name in names]


class TestQueueNavigation:
    """Test play, next and previous."""

    def test_toggle_play_loads_first_track(self):
        audio = FakeAudio()
        queue = PlaybackQueue(audio, tracks("a", "b", "c"))

        assert queue.toggle_play() is True
        assert queue.current.name == "a"
        assert audio.calls == [("load", "a"), ("play",)]

        assert queue.toggle_play() is False
        assert audio.calls[-1] == ("pause",)

    def test_next_and_previous_wrap_around(self):
        queue = PlaybackQueue(FakeAudio(), tracks("a", "b", "c"))

        queue.previous()
        assert queue.current.name == "c"
        queue.next()
        assert queue.current.name == "a"
        queue.next()
        queue.next()
        queue.next()
        assert queue.current.name == "a"

    def test_next_keeps_playing_state(self):
        audio = FakeAudio()
        queue = PlaybackQueue(audio, tracks("a", "b"))
        queue.toggle_play()

        queue.next()

        assert queue.playing is True
        assert audio.calls[-2:] == [("load", "b"), ("play",)]

    def test_track_end_advances_queue(self):
        audio = FakeAudio()
        queue = PlaybackQueue(audio, tracks("a", "b"))
        queue.toggle_play()

        audio.ended_callback()

        assert queue.current.name == "b"
        assert queue.playing is True

    def test_empty_queue_does_nothing(self):
        queue = PlaybackQueue(FakeAudio(), [])

        assert queue.current is None
        assert queue.toggle_play() is False
        assert queue.next() is False
        assert queue.previous() is False

    def test_for_playlist_uses_catalog_tracks(self):
        queue = PlaybackQueue.for_playlist(FakeAudio(), GENTLE_PIANO)
        assert [t.name for t in queue.tracks] == [t.name for t in GENTLE_PIANO.tracks]


class TestLoadFailures:
    """Tracks that fail to load are skipped."""

    def test_broken_track_is_skipped(self):
        queue = PlaybackQueue(FakeAudio(broken={"b"}), tracks("a", "b", "c"))
        queue.toggle_play()

        queue.next()

        assert queue.current.name == "c"
        assert [t.name for t in queue.failed_tracks] == ["b"]

    def test_gives_up_after_full_cycle(self):
        audio = FakeAudio(broken={"a", "b"})
        queue = PlaybackQueue(audio, tracks("a", "b"))

        assert queue.toggle_play() is False
        assert queue.playing is False
        assert queue.loaded is None
        assert ("play",) not in audio.calls
        assert len(queue.failed_tracks) == 2


class TestVolume:
    """Volume is clamped and mute restores the previous level."""

    def test_default_volume_applied(self):
        audio = FakeAudio()
        PlaybackQueue(audio, tracks("a"))
        assert audio.volume == DEFAULT_VOLUME

    @pytest.mark.parametrize("level,expected", [(-0.5, 0.0), (0.6, 0.6), (4, 1.0)])
    def test_set_volume_clamps(self, level, expected):
        audio = FakeAudio()
        queue = PlaybackQueue(audio, tracks("a"))

        assert queue.set_volume(level) == expected
        assert audio.volume == expected

    def test_mute_and_unmute(self):
        audio = FakeAudio()
        queue = PlaybackQueue(audio, tracks("a"), volume=0.8)

        assert queue.toggle_mute() is True
        assert audio.volume == 0.0

        queue.set_volume(0.5)
        assert audio.volume == 0.0

        assert queue.toggle_mute() is False
        assert audio.volume == 0.5
