"""
Entry Service.

Orchestrates the "submit a feeling" use case (classify, build entry, store)
and the read-side conveniences built on the store: filtered history and the
background music category.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .classifier import classify
from .models import (
    Classification,
    MoodEntry,
    MoodLabel,
    MusicCategory,
    SubmissionResult,
    new_entry_id,
    utc_now,
)
from .narratives import NarrativePicker
from .store import EntryStore

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Your entry could not be saved. Your analysis is shown below but will not appear in your history."

MUSIC_CATEGORY_BY_MOOD = {
    MoodLabel.HAPPY: MusicCategory.HAPPY,
    MoodLabel.CALM: MusicCategory.CALM,
    MoodLabel.SAD: MusicCategory.CALM,
    MoodLabel.ANXIOUS: MusicCategory.CALM,
    MoodLabel.ANGRY: MusicCategory.FOCUS,
    MoodLabel.NEUTRAL: MusicCategory.FOCUS,
}
DEFAULT_MUSIC_CATEGORY = MusicCategory.LOFI


class EntryService:
    """
    Use-case layer over one Entry Store.

    Args:
        store: The Entry Store to append to and read from
        classifier: Text -> Classification function
        narratives: Picker for the display-only response sentence
        clock: Returns the current aware UTC time
    """

    def __init__(
        self,
        store: EntryStore,
        classifier: Callable[[str], Classification] = classify,
        narratives: Optional[NarrativePicker] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.classifier = classifier
        self.narratives = narratives or NarrativePicker()
        self.clock = clock

    def submit_feeling(self, text: str) -> Optional[SubmissionResult]:
        """
        Classify a free-text feeling and record it.

        Args:
            text: What the user wrote

        Returns:
            None for blank input (nothing is classified or stored).
            Otherwise a SubmissionResult; `saved` is False and `error` is set
            when the store refused the write, but the analysis is still there.
        """
        if not text or not text.strip():
            logger.debug("[SERVICE] Ignoring blank submission")
            return None

        classification = self.classifier(text)
        created_at = self.clock()
        entry = MoodEntry(
            id=new_entry_id(created_at),
            mood=classification.mood.value,
            intensity=classification.intensity,
            notes=text,
            created_at=created_at,
            music_played=classification.music_recommendations,
            actions=classification.suggested_actions,
        )

        saved = self.store.append(entry)
        if not saved:
            logger.warning(f"[SERVICE] Submission classified as {entry.mood} but not saved")

        return SubmissionResult(
            entry=entry,
            saved=saved,
            classification=classification,
            narrative=self.narratives.pick(entry.mood),
            error=None if saved else SAVE_FAILED_MESSAGE,
        )

    def log_manual_entry(
        self,
        mood: str,
        intensity: int,
        notes: str = "",
        music_played: Sequence[str] = (),
        actions: Sequence[str] = (),
    ) -> SubmissionResult:
        """
        Record an entry with a user-chosen mood, skipping the classifier.

        Raises:
            ValueError: if mood is blank or intensity is outside 0-10
        """
        if not mood or not mood.strip():
            raise ValueError("mood must not be blank")

        created_at = self.clock()
        entry = MoodEntry(
            id=new_entry_id(created_at),
            mood=mood.strip(),
            intensity=intensity,
            notes=notes,
            created_at=created_at,
            music_played=tuple(music_played),
            actions=tuple(actions),
        )
        saved = self.store.append(entry)
        return SubmissionResult(
            entry=entry,
            saved=saved,
            error=None if saved else "Your entry could not be saved.",
        )

    def history(self, mood_filter: Optional[str] = None, limit: Optional[int] = None) -> List[MoodEntry]:
        """Newest-first history, optionally filtered by mood (case-insensitive)."""
        entries = self.store.load()
        if mood_filter and mood_filter.strip().lower() != "all":
            wanted = mood_filter.strip().lower()
            entries = [e for e in entries if e.mood.strip().lower() == wanted]
        if limit is not None:
            entries = entries[:limit]
        return entries

    def suggested_music_category(self) -> MusicCategory:
        """Music category for the most recent entry; lofi when there is none."""
        latest = self.store.latest()
        if latest is None or latest.label is None:
            return DEFAULT_MUSIC_CATEGORY
        return MUSIC_CATEGORY_BY_MOOD[latest.label]
