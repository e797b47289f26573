"""
Core data types for the mood engine.

MoodEntry is the only persisted record. Everything else here is either a
classification result handed to the UI or a small closed enum used at the
collaborator boundary.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MoodLabel(str, Enum):
    """Closed set of labels produced by the classifier."""

    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"
    ANXIOUS = "Anxious"
    CALM = "Calm"
    NEUTRAL = "Neutral"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MoodLabel"]:
        """Map a raw mood string to a known label, or None if unrecognized.

        Matching ignores case and surrounding whitespace so manually typed
        moods like "happy" resolve to the same label as classifier output.
        """
        if not value:
            return None
        wanted = value.strip().lower()
        for label in cls:
            if label.value.lower() == wanted:
                return label
        return None


class TimeWindow(str, Enum):
    """Time range applied before aggregation."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class MusicCategory(str, Enum):
    """Background music category handed to the audio collaborator."""

    HAPPY = "happy"
    CALM = "calm"
    FOCUS = "focus"
    LOFI = "lofi"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_entry_id(created_at: datetime) -> str:
    """Timestamp-derived id with a random suffix to separate same-millisecond entries."""
    millis = int(created_at.timestamp() * 1000)
    return f"{millis}-{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True)
class MoodEntry:
    """One persisted mood submission."""

    id: str
    mood: str
    intensity: int
    notes: str
    created_at: datetime
    music_played: Tuple[str, ...] = ()
    actions: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.intensity, int) or isinstance(self.intensity, bool):
            raise ValueError(f"intensity must be an int, got {self.intensity!r}")
        if not 0 <= self.intensity <= 10:
            raise ValueError(f"intensity must be within 0-10, got {self.intensity}")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")
        # Accept lists from callers but keep the stored value immutable
        object.__setattr__(self, "music_played", tuple(self.music_played))
        object.__setattr__(self, "actions", tuple(self.actions))

    @property
    def label(self) -> Optional[MoodLabel]:
        """Known label for this entry, None for free-form moods."""
        return MoodLabel.parse(self.mood)

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "mood": self.mood,
            "intensity": self.intensity,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "music_played": list(self.music_played),
            "actions": list(self.actions),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MoodEntry":
        """Build an entry from its persisted shape.

        Raises:
            ValueError: if the data is not a well-formed entry object.
        """
        if not isinstance(data, dict):
            raise ValueError(f"entry must be an object, got {type(data).__name__}")
        try:
            created_at = datetime.fromisoformat(str(data["created_at"]).replace("Z", "+00:00"))
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            music_played = data.get("music_played") or []
            actions = data.get("actions") or []
            if not isinstance(music_played, list) or not isinstance(actions, list):
                raise ValueError("music_played and actions must be arrays")
            return cls(
                id=str(data["id"]),
                mood=str(data["mood"]),
                intensity=int(data["intensity"]),
                notes=str(data.get("notes") or ""),
                created_at=created_at,
                music_played=tuple(str(m) for m in music_played),
                actions=tuple(str(a) for a in actions),
            )
        except (KeyError, TypeError, OverflowError) as e:
            raise ValueError(f"malformed entry: {e}") from e


@dataclass(frozen=True)
class Classification:
    """Result of classifying one piece of free text."""

    mood: MoodLabel
    intensity: int
    suggested_actions: Tuple[str, ...]
    music_recommendations: Tuple[str, ...]
    summary: str
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mood": self.mood.value,
            "intensity": self.intensity,
            "suggested_actions": list(self.suggested_actions),
            "music_recommendations": list(self.music_recommendations),
            "summary": self.summary,
            "scores": dict(self.scores),
        }


@dataclass
class SubmissionResult:
    """Outcome of a submission: the entry, what was shown, and whether it was saved."""

    entry: MoodEntry
    saved: bool
    classification: Optional[Classification] = None
    narrative: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "entry": self.entry.to_dict(),
            "saved": self.saved,
            "classification": self.classification.to_dict() if self.classification else None,
            "narrative": self.narrative,
            "error": self.error,
        }

