"""
Keyword-based Mood Classifier.

Maps free text to a mood label, an intensity score and a fixed
recommendation bundle. The classification is a pure function of the text:
the same input always yields the same mood, intensity and recommendations.

Matching modes:
    substring: a keyword counts if it appears anywhere in the lower-cased
        text ("sad" matches "sadly"). This is the default.
    word: a keyword counts only on word boundaries.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Literal, Tuple

from .models import Classification, MoodLabel

logger = logging.getLogger(__name__)

MatchMode = Literal["substring", "word"]

# Evaluation order doubles as the tie-break priority
CATEGORY_ORDER: Tuple[MoodLabel, ...] = (
    MoodLabel.HAPPY,
    MoodLabel.SAD,
    MoodLabel.ANGRY,
    MoodLabel.ANXIOUS,
    MoodLabel.CALM,
)

MOOD_KEYWORDS: Dict[MoodLabel, Tuple[str, ...]] = {
    MoodLabel.HAPPY: (
        "happy", "joy", "excited", "great", "wonderful", "amazing",
        "glad", "cheerful", "delighted", "grateful", "love",
    ),
    MoodLabel.SAD: (
        "sad", "down", "depressed", "lonely", "miserable", "cry",
        "upset", "heartbroken", "hopeless", "gloomy",
    ),
    MoodLabel.ANGRY: (
        "angry", "mad", "furious", "annoyed", "frustrated",
        "irritated", "hate", "rage",
    ),
    MoodLabel.ANXIOUS: (
        "anxious", "worried", "nervous", "stressed", "scared",
        "afraid", "panic", "overwhelmed", "tense",
    ),
    MoodLabel.CALM: (
        "calm", "relaxed", "peaceful", "content", "serene",
        "chill", "rested", "okay",
    ),
}


@dataclass(frozen=True)
class Recommendation:
    """Static recommendation row for one mood label."""

    actions: Tuple[str, str, str]
    music: Tuple[str, str, str]
    summary: str


# Music tags are playlist slugs from the catalog
RECOMMENDATIONS: Dict[MoodLabel, Recommendation] = {
    MoodLabel.HAPPY: Recommendation(
        actions=(
            "Share your good mood with someone you care about",
            "Write down what made today great",
            "Channel the energy into a creative hobby",
        ),
        music=("feel-good-classics", "upbeat-pop", "dance-hits"),
        summary="You're feeling upbeat and positive. Enjoy the moment and let it carry you.",
    ),
    MoodLabel.SAD: Recommendation(
        actions=(
            "Take some time for self-care",
            "Talk to someone you trust about your feelings",
            "Be gentle with yourself today",
        ),
        music=("gentle-piano", "acoustic-ballads", "melancholy-symphonies"),
        summary="It sounds like you're feeling low. It's okay to slow down and be kind to yourself.",
    ),
    MoodLabel.ANGRY: Recommendation(
        actions=(
            "Step away and take ten slow, deep breaths",
            "Go for a brisk walk to release the tension",
            "Write out what's bothering you before responding",
        ),
        music=("soothing-ambient", "deep-focus", "instrumental-jazz"),
        summary="Something has frustrated you. Giving the feeling some space will help it pass.",
    ),
    MoodLabel.ANXIOUS: Recommendation(
        actions=(
            "Try a five-minute breathing exercise",
            "List the things you can control right now",
            "Break your next task into one small step",
        ),
        music=("soothing-ambient", "gentle-piano", "study-beats"),
        summary="You seem worried or on edge. Grounding yourself in the present can ease the pressure.",
    ),
    MoodLabel.CALM: Recommendation(
        actions=(
            "Enjoy a quiet moment of reading",
            "Practice a short meditation to keep the calm",
            "Take a relaxed walk outside",
        ),
        music=("acoustic-ballads", "gentle-piano", "soothing-ambient"),
        summary="You're in a calm and balanced place. A good time to recharge.",
    ),
    MoodLabel.NEUTRAL: Recommendation(
        actions=(
            "Check in with yourself again later today",
            "Plan one small thing to look forward to",
            "Stretch and drink a glass of water",
        ),
        music=("study-beats", "acoustic-covers", "instrumental-jazz"),
        summary="Your mood seems steady. Small positive habits can lift an ordinary day.",
    ),
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count_matches(text: str, keywords: Tuple[str, ...], match_mode: MatchMode) -> int:
    if match_mode == "word":
        return sum(1 for kw in keywords if re.search(rf"\b{re.escape(kw)}\b", text))
    return sum(1 for kw in keywords if kw in text)


def keyword_scores(text: str, match_mode: MatchMode = "substring") -> Dict[MoodLabel, int]:
    """
    Count keyword matches per category, applying fallback heuristics.

    Fallbacks only apply when no keyword matched at all: repeated "!" leans
    happy, repeated "?" and very long text lean anxious, very short text
    leans sad.

    Args:
        text: Raw input text
        match_mode: "substring" or "word"

    Returns:
        Counts keyed by label, in priority order
    """
    lowered = text.lower()
    scores = {
        label: _count_matches(lowered, MOOD_KEYWORDS[label], match_mode)
        for label in CATEGORY_ORDER
    }

    if all(count == 0 for count in scores.values()):
        word_count = len(text.split())
        if text.count("!") > 1:
            scores[MoodLabel.HAPPY] += 1
        if text.count("?") > 1:
            scores[MoodLabel.ANXIOUS] += 1
        if word_count > 50:
            scores[MoodLabel.ANXIOUS] += 1
        if word_count < 5:
            scores[MoodLabel.SAD] += 1

    return scores


def compute_intensity(max_count: int, text_length: int) -> int:
    """Intensity grows with keyword hits and text length, capped at 10."""
    return min(10, _round_half_up((max_count + 1) * 1.5 + text_length / 100))


def classify(text: str, match_mode: MatchMode = "substring") -> Classification:
    """
    Classify free text into a mood with recommendations.

    Args:
        text: Non-empty input text
        match_mode: Keyword matching mode

    Returns:
        Classification with mood, intensity and the static recommendation row

    Raises:
        ValueError: if text is blank
    """
    if not text or not text.strip():
        raise ValueError("Cannot classify blank text")

    scores = keyword_scores(text, match_mode)

    mood = MoodLabel.NEUTRAL
    max_count = 0
    for label in CATEGORY_ORDER:
        if scores[label] > max_count:
            mood = label
            max_count = scores[label]

    intensity = compute_intensity(max_count, len(text))
    row = RECOMMENDATIONS[mood]

    logger.debug(f"[CLASSIFIER] mood={mood.value} intensity={intensity} scores={scores}")

    return Classification(
        mood=mood,
        intensity=intensity,
        suggested_actions=row.actions,
        music_recommendations=row.music,
        summary=row.summary,
        scores={label.value.lower(): count for label, count in scores.items()},
    )
