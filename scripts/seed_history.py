#!/usr/bin/env python3
"""
Seed the local mood history with sample entries.

Writes a handful of manual entries (the sample week shown on the history
page) plus a few classified feelings into the store configured through
MOODCRAFT_* environment variables, so the dashboard has real data to chart.

Usage:
    python scripts/seed_history.py
    python scripts/seed_history.py --purge --backend sqlite
"""
import argparse
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
for path in (BASE_DIR / "src", BASE_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from mood_engine.service import EntryService  # noqa: E402
from mood_engine.store import EntryStore  # noqa: E402
from server.moodcraft_api.config import Settings  # noqa: E402
from server.moodcraft_api.engine import build_backend  # noqa: E402

# (days ago, mood, intensity, notes, music, actions)
SAMPLE_ENTRIES = [
    (5, "Happy", 8, "Great day with friends. Feeling connected and grateful.",
     ["feel-good-classics", "upbeat-pop"], ["Socializing", "Gratitude practice", "Creative hobbies"]),
    (4, "Tired", 3, "Didn't sleep well last night. Focusing on rest and recovery today.",
     ["gentle-piano"], ["Rest", "Hydration", "Early bedtime"]),
    (3, "Contemplative", 5, "Feeling thoughtful today. Took time to journal and reflect on goals.",
     ["acoustic-ballads", "classical-masterpieces"], ["Journaling", "Planning", "Self-reflection"]),
    (2, "Energetic", 8, "Productive day at work. Completed all tasks ahead of schedule.",
     ["upbeat-pop"], ["Exercise", "Deep work", "Socializing"]),
    (1, "Relaxed", 7, "Had a peaceful day with minimal stress. Enjoyed some reading time.",
     ["gentle-piano", "soothing-ambient"], ["Reading", "Meditation", "Walking"]),
]

SAMPLE_FEELINGS = [
    "I'm a bit worried about my exam tomorrow, feeling nervous",
    "Feeling calm and relaxed after a long walk",
    "I am so happy and excited today!!!",
]


def seed(service: EntryService, now: datetime) -> int:
    """
    Write sample entries, oldest first so the newest ends up on top.

    Returns:
        Number of entries saved
    """
    saved = 0
    for days_ago, mood, intensity, notes, music, actions in SAMPLE_ENTRIES:
        service.clock = lambda d=days_ago: now - timedelta(days=d)
        result = service.log_manual_entry(mood, intensity, notes, music, actions)
        saved += int(result.saved)
        print(f"  {'saved ' if result.saved else 'FAILED'} {mood:<14} {notes[:50]}")

    service.clock = lambda: now
    for text in SAMPLE_FEELINGS:
        result = service.submit_feeling(text)
        saved += int(result.saved)
        print(f"  {'saved ' if result.saved else 'FAILED'} {result.entry.mood:<14} {text[:50]}")

    return saved


def main():
    parser = argparse.ArgumentParser(description="Seed the MoodCraft history with sample entries")
    parser.add_argument(
        "--backend",
        choices=["json", "sqlite"],
        help="Storage backend (default: MOODCRAFT_STORAGE_BACKEND or json)",
    )
    parser.add_argument(
        "--data-path",
        help="Directory holding the history record (default: MOODCRAFT_DATA_PATH)",
    )
    parser.add_argument(
        "--purge",
        action="store_true",
        help="Clear the existing history before seeding",
    )
    args = parser.parse_args()

    overrides = {}
    if args.backend:
        overrides["storage_backend"] = args.backend
    if args.data_path:
        overrides["data_path"] = args.data_path
    settings = Settings(**overrides)

    store = EntryStore(build_backend(settings), key=settings.history_key)
    service = EntryService(store)

    print("=" * 60)
    print("MoodCraft History Seed Script")
    print("=" * 60)
    print(f"\nBackend: {settings.storage_backend} ({settings.data_path})\n")

    if args.purge:
        store.purge()
        print("Existing history cleared\n")

    count = seed(service, datetime.now(timezone.utc))

    print()
    print("=" * 60)
    print(f"Complete! {count} entries saved, history now holds {len(store.load())}")
    print("=" * 60)


if __name__ == "__main__":
    main()
