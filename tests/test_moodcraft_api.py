"""
Tests for the MoodCraft API routes.

Each test builds its own app over an in-memory backend, so no server or
data directory is needed.

Usage:
    pytest tests/test_moodcraft_api.py -v
"""
import pytest
from fastapi.testclient import TestClient

from mood_engine.storage import MemoryBackend
from server.moodcraft_api.config import Settings
from server.moodcraft_api.main import create_app


def make_client(backend=None):
    settings = Settings(storage_backend="memory", log_level="WARNING")
    return TestClient(create_app(settings, backend=backend or MemoryBackend()))


@pytest.fixture
def client():
    with make_client() as client:
        yield client


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "moodcraft-api"}


class TestFeelingSubmission:
    """Test POST /api/mood/feelings."""

    def test_happy_feeling_is_saved(self, client):
        response = client.post("/api/mood/feelings", json={"text": "I am so happy and excited today!!!"})

        assert response.status_code == 200
        data = response.json()
        assert data["saved"] is True
        assert data["entry"]["mood"] == "Happy"
        assert data["classification"]["mood"] == "Happy"
        assert data["classification"]["scores"]["happy"] == 2
        assert data["narrative"]

        history = client.get("/api/mood/entries").json()
        assert history[0]["id"] == data["entry"]["id"]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text_rejected(self, client, text):
        response = client.post("/api/mood/feelings", json={"text": text})

        assert response.status_code == 422
        assert client.get("/api/mood/entries").json() == []

    def test_failed_write_still_returns_analysis(self):
        with make_client(MemoryBackend(quota_bytes=50)) as client:
            response = client.post("/api/mood/feelings", json={"text": "I feel so sad and lonely"})

            assert response.status_code == 200
            data = response.json()
            assert data["saved"] is False
            assert data["error"]
            assert data["classification"]["mood"] == "Sad"
            assert client.get("/api/mood/entries").json() == []


class TestManualEntries:
    """Test POST/GET/DELETE /api/mood/entries."""

    def test_create_manual_entry(self, client):
        response = client.post(
            "/api/mood/entries",
            json={"mood": "Energetic", "intensity": 8, "actions": ["Running"]},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["saved"] is True
        assert data["classification"] is None
        assert data["entry"]["actions"] == ["Running"]

    def test_blank_mood_rejected(self, client):
        response = client.post("/api/mood/entries", json={"mood": "   ", "intensity": 5})
        assert response.status_code == 422

    def test_intensity_out_of_range_rejected(self, client):
        response = client.post("/api/mood/entries", json={"mood": "Happy", "intensity": 11})
        assert response.status_code == 422

    def test_save_failure_returns_507(self):
        with make_client(MemoryBackend(quota_bytes=50)) as client:
            response = client.post("/api/mood/entries", json={"mood": "Calm", "intensity": 4})

            assert response.status_code == 507
            assert response.json()["saved"] is False

    def test_filter_and_limit(self, client):
        for mood in ("Happy", "Sad", "happy"):
            client.post("/api/mood/entries", json={"mood": mood, "intensity": 5})

        happy = client.get("/api/mood/entries", params={"mood": "Happy"}).json()
        assert sorted(e["mood"] for e in happy) == ["Happy", "happy"]

        limited = client.get("/api/mood/entries", params={"limit": 1}).json()
        assert len(limited) == 1

    def test_purge(self, client):
        client.post("/api/mood/entries", json={"mood": "Calm", "intensity": 4})

        response = client.delete("/api/mood/entries")

        assert response.status_code == 200
        assert client.get("/api/mood/entries").json() == []


class TestDashboard:
    """Test GET /api/mood/dashboard."""

    @pytest.mark.parametrize("window,slots", [("week", 7), ("month", 30), ("year", 12)])
    def test_series_length_per_window(self, client, window, slots):
        response = client.get("/api/mood/dashboard", params={"window": window})

        assert response.status_code == 200
        data = response.json()
        assert data["window"] == window
        assert len(data["series"]) == slots
        assert all(p["average_mood_score"] is not None for p in data["series"])

    def test_empty_history_uses_fallbacks(self, client):
        data = client.get("/api/mood/dashboard").json()

        assert data["distribution"]["is_fallback"] is True
        assert data["distribution"]["total"] == 100
        assert data["top_influencer"] == "Music"
        assert data["suggested_music_category"] == "lofi"

    def test_real_entry_shows_in_current_slot(self, client):
        client.post("/api/mood/entries", json={"mood": "Happy", "intensity": 7})

        data = client.get("/api/mood/dashboard").json()

        today = data["series"][-1]
        assert today["synthetic"] is False
        assert today["average_mood_score"] == 9.0
        assert data["distribution"]["slices"] == [{"label": "Happy", "count": 1}]

    def test_unknown_window_rejected(self, client):
        response = client.get("/api/mood/dashboard", params={"window": "decade"})
        assert response.status_code == 422


class TestMusic:
    """Test the music category and playlist catalog routes."""

    def test_suggested_category_follows_latest_entry(self, client):
        assert client.get("/api/mood/music/suggested").json()["category"] == "lofi"

        created = client.post("/api/mood/entries", json={"mood": "Anxious", "intensity": 6}).json()
        data = client.get("/api/mood/music/suggested").json()

        assert data["category"] == "calm"
        assert data["based_on_entry"] == created["entry"]["id"]

    def test_playlist_groups(self, client):
        groups = client.get("/api/mood/music/playlists").json()
        assert [g["mood"] for g in groups] == ["Happy", "Calm", "Focused", "Reflective"]

    def test_playlist_by_slug(self, client):
        response = client.get("/api/mood/music/playlists/gentle-piano")

        assert response.status_code == 200
        assert len(response.json()["tracks"]) == 3

    def test_unknown_playlist_404(self, client):
        response = client.get("/api/mood/music/playlists/not-a-playlist")
        assert response.status_code == 404


class TestChangeStream:
    def test_stream_stats_count_publishes(self, client):
        client.post("/api/mood/entries", json={"mood": "Calm", "intensity": 4})

        stats = client.get("/api/mood/stream/stats").json()

        assert stats["total_published"] == 1
        assert stats["current_subscribers"] == 0
