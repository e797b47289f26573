"""
Aggregation and insight engine for the mood dashboard.

Derives chart-ready series from a history snapshot for a time window:
- daily (or monthly, for the year window) average mood scores
- emotion distribution by raw mood string
- a canned insight sentence and the most frequent positive influence

Every function takes `now` explicitly, so identical history, window and
`now` always produce identical output. Empty history is valid input and
yields the documented fallbacks.
"""

import math
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import MoodEntry, MoodLabel, MusicCategory, TimeWindow, utc_now

MOOD_SCORES: Dict[MoodLabel, float] = {
    MoodLabel.HAPPY: 9,
    MoodLabel.CALM: 7,
    MoodLabel.NEUTRAL: 5,
    MoodLabel.ANXIOUS: 3,
    MoodLabel.SAD: 2,
    MoodLabel.ANGRY: 1,
}

# Shown when the window holds no entries; counts sum to 100
FALLBACK_DISTRIBUTION: Tuple[Tuple[str, int], ...] = (
    ("Happy", 45),
    ("Relaxed", 25),
    ("Anxious", 15),
    ("Sad", 10),
    ("Angry", 5),
)

DEFAULT_INFLUENCER = "Music"
POSITIVE_SCORE_THRESHOLD = 7
INSIGHT_LOOKBACK = 3


class InsightLevel(str, Enum):
    POSITIVE_HIGH = "positive_high"
    POSITIVE = "positive"
    LOW = "low"
    CONCERNING = "concerning"


INSIGHT_MESSAGES: Dict[InsightLevel, str] = {
    InsightLevel.POSITIVE_HIGH: "Your mood has been consistently great lately. Keep doing what works for you!",
    InsightLevel.POSITIVE: "Your mood has been improving. Small wins are adding up.",
    InsightLevel.LOW: "Your mood has been a little low recently. A calming playlist or a short walk might help.",
    InsightLevel.CONCERNING: "You've been having a tough time lately. Consider reaching out to someone you trust.",
}


@dataclass(frozen=True)
class SeriesPoint:
    """One chart slot. `synthetic` marks placeholder values with no real data behind them."""

    label: str
    start: date
    average_mood_score: float
    entry_count: int
    synthetic: bool

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "start": self.start.isoformat(),
            "average_mood_score": self.average_mood_score,
            "entry_count": self.entry_count,
            "synthetic": self.synthetic,
        }


@dataclass(frozen=True)
class EmotionSlice:
    label: str
    count: int

    def to_dict(self) -> dict:
        return {"label": self.label, "count": self.count}


@dataclass(frozen=True)
class EmotionDistribution:
    slices: Tuple[EmotionSlice, ...]
    is_fallback: bool

    @property
    def total(self) -> int:
        return sum(s.count for s in self.slices)

    def to_dict(self) -> dict:
        return {
            "slices": [s.to_dict() for s in self.slices],
            "is_fallback": self.is_fallback,
            "total": self.total,
        }


@dataclass(frozen=True)
class MoodInsight:
    level: InsightLevel
    message: str
    average: float

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message, "average": self.average}


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view renders for one window."""

    window: TimeWindow
    series: Tuple[SeriesPoint, ...]
    distribution: EmotionDistribution
    insight: MoodInsight
    top_influencer: str
    suggested_music_category: Optional[MusicCategory] = None

    def to_dict(self) -> dict:
        return {
            "window": self.window.value,
            "series": [p.to_dict() for p in self.series],
            "distribution": self.distribution.to_dict(),
            "insight": self.insight.to_dict(),
            "top_influencer": self.top_influencer,
            "suggested_music_category": (
                self.suggested_music_category.value if self.suggested_music_category else None
            ),
        }


# ============================================================================
# Scoring and windowing
# ============================================================================


def mood_score(entry: MoodEntry) -> float:
    """Fixed score for known labels; free-form moods fall back to the entry's intensity."""
    label = entry.label
    if label is None:
        return float(entry.intensity)
    return float(MOOD_SCORES[label])


def _shift_month(day: date, months: int) -> date:
    """First day of the month `months` away from `day`'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def _entry_day(entry: MoodEntry, now: datetime) -> date:
    return entry.created_at.astimezone(now.tzinfo).date()


def _slot_starts(window: TimeWindow, today: date) -> List[date]:
    if window == TimeWindow.WEEK:
        return [today - timedelta(days=6 - i) for i in range(7)]
    if window == TimeWindow.MONTH:
        return [today - timedelta(days=29 - i) for i in range(30)]
    return [_shift_month(today, i - 11) for i in range(12)]


def _slot_label(window: TimeWindow, start: date) -> str:
    if window == TimeWindow.WEEK:
        return start.strftime("%a")
    if window == TimeWindow.MONTH:
        return f"{start.strftime('%b')} {start.day}"
    return start.strftime("%b")


def _slot_key(window: TimeWindow, day: date) -> date:
    return date(day.year, day.month, 1) if window == TimeWindow.YEAR else day


def window_start(window: TimeWindow, now: datetime) -> date:
    """First calendar day covered by the window (inclusive)."""
    return _slot_starts(window, now.date())[0]


def filter_window(
    history: Iterable[MoodEntry],
    window: TimeWindow,
    now: Optional[datetime] = None,
) -> List[MoodEntry]:
    """Entries whose calendar day falls between the window start and today."""
    now = now or utc_now()
    start = window_start(window, now)
    today = now.date()
    return [e for e in history if start <= _entry_day(e, now) <= today]


def synthetic_fill(index: int) -> float:
    """Placeholder score for an empty slot: a gentle wave between 3 and 7."""
    return round(5 + 2 * math.sin(index / 2), 1)


# ============================================================================
# Aggregates
# ============================================================================


def daily_mood_series(
    history: Sequence[MoodEntry],
    window: TimeWindow,
    now: Optional[datetime] = None,
) -> List[SeriesPoint]:
    """
    Average mood score per slot, oldest slot first and the current slot last.

    Slots: 7 days for a week, 30 days for a month, 12 months for a year.
    Slots with no entries get a synthetic placeholder so the chart has no
    gaps; those points carry synthetic=True and entry_count=0.

    Args:
        history: Entries in any order
        window: week, month or year
        now: Reference time (aware); defaults to the current UTC time

    Returns:
        One SeriesPoint per slot, never a null score
    """
    now = now or utc_now()
    starts = _slot_starts(window, now.date())

    buckets: Dict[date, List[float]] = defaultdict(list)
    for entry in filter_window(history, window, now):
        buckets[_slot_key(window, _entry_day(entry, now))].append(mood_score(entry))

    points = []
    for index, start in enumerate(starts):
        scores = buckets.get(start, [])
        if scores:
            points.append(SeriesPoint(
                label=_slot_label(window, start),
                start=start,
                average_mood_score=round(sum(scores) / len(scores), 1),
                entry_count=len(scores),
                synthetic=False,
            ))
        else:
            points.append(SeriesPoint(
                label=_slot_label(window, start),
                start=start,
                average_mood_score=synthetic_fill(index),
                entry_count=0,
                synthetic=True,
            ))
    return points


def emotion_distribution(
    history: Sequence[MoodEntry],
    window: TimeWindow,
    now: Optional[datetime] = None,
) -> EmotionDistribution:
    """
    Count in-window entries per raw mood string.

    Mood strings are not normalized: "Happy" and "happy" are separate
    slices. With no entries in the window, the fixed fallback distribution
    is returned with is_fallback=True.
    """
    entries = filter_window(history, window, now)
    if not entries:
        return EmotionDistribution(
            slices=tuple(EmotionSlice(label, count) for label, count in FALLBACK_DISTRIBUTION),
            is_fallback=True,
        )

    counts = Counter(e.mood for e in entries)
    slices = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return EmotionDistribution(
        slices=tuple(EmotionSlice(label, count) for label, count in slices),
        is_fallback=False,
    )


def classify_average(average: float) -> InsightLevel:
    if average > 7:
        return InsightLevel.POSITIVE_HIGH
    if average > 5:
        return InsightLevel.POSITIVE
    if average > 3:
        return InsightLevel.LOW
    return InsightLevel.CONCERNING


def mood_insight(series: Sequence[SeriesPoint]) -> MoodInsight:
    """
    Insight sentence from the average of the last three real points.

    When the series has no real points at all, the last three points of the
    filled series are used instead, matching what the chart shows.
    """
    real = [p.average_mood_score for p in series if not p.synthetic]
    recent = real[-INSIGHT_LOOKBACK:] or [p.average_mood_score for p in series][-INSIGHT_LOOKBACK:]
    average = round(sum(recent) / len(recent), 1) if recent else 5.0

    level = classify_average(average)
    return MoodInsight(level=level, message=INSIGHT_MESSAGES[level], average=average)


def top_influencer(
    history: Sequence[MoodEntry],
    window: TimeWindow,
    now: Optional[datetime] = None,
) -> str:
    """Music tag or action seen most often alongside positive entries (score >= 7)."""
    counts: Counter = Counter()
    for entry in filter_window(history, window, now):
        if mood_score(entry) >= POSITIVE_SCORE_THRESHOLD:
            counts.update(entry.music_played)
            counts.update(entry.actions)

    if not counts:
        return DEFAULT_INFLUENCER
    tag, _ = min(counts.items(), key=lambda item: (-item[1], item[0]))
    return tag


def build_dashboard(
    history: Sequence[MoodEntry],
    window: TimeWindow,
    now: Optional[datetime] = None,
    suggested_category: Optional[MusicCategory] = None,
) -> Dashboard:
    """Bundle series, distribution, insight and influencer for one window."""
    now = now or utc_now()
    series = daily_mood_series(history, window, now)
    return Dashboard(
        window=window,
        series=tuple(series),
        distribution=emotion_distribution(history, window, now),
        insight=mood_insight(series),
        top_influencer=top_influencer(history, window, now),
        suggested_music_category=suggested_category,
    )
