"""
Pytest fixtures for MoodCraft tests.
"""
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure src/ and the project root are on sys.path so tests can import
# mood_engine and the server package without an install.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from mood_engine.models import MoodEntry, new_entry_id  # noqa: E402
from mood_engine.narratives import NarrativePicker  # noqa: E402
from mood_engine.service import EntryService  # noqa: E402
from mood_engine.storage import MemoryBackend  # noqa: E402
from mood_engine.store import EntryStore  # noqa: E402

# Fixed reference time: a Saturday afternoon
NOW = datetime(2026, 10, 17, 15, 30, tzinfo=timezone.utc)


class FakeClock:
    """Clock that returns a fixed time and can be advanced."""

    def __init__(self, start: datetime = NOW):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return EntryStore(backend)


@pytest.fixture
def service(store, clock):
    return EntryService(store, narratives=NarrativePicker(random.Random(7)), clock=clock)


@pytest.fixture
def make_entry():
    """
    Factory fixture for entries.

    Accepts either `created_at` or `days_ago` (relative to NOW).
    """
    def _make_entry(mood="Happy", intensity=5, notes="", days_ago=0, created_at=None, **kwargs):
        created_at = created_at or (NOW - timedelta(days=days_ago))
        return MoodEntry(
            id=new_entry_id(created_at),
            mood=mood,
            intensity=intensity,
            notes=notes,
            created_at=created_at,
            **kwargs,
        )

    return _make_entry
