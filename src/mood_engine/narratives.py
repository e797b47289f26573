"""Canned narrative responses shown after a submission.

Kept apart from the classifier on purpose: picking a sentence is random,
and none of it is persisted.
"""

import random
from typing import Dict, Optional, Tuple

from .models import MoodLabel

GENERAL_RESPONSES: Tuple[str, ...] = (
    "I understand you're feeling that way. Remember to take care of yourself today.",
    "It sounds like you're experiencing some complex emotions. That's completely normal.",
    "Thank you for sharing how you feel. Would you like to explore some self-care activities?",
    "I appreciate your honesty about your feelings. What might help you feel better right now?",
    "Your emotions are valid. Let's think about some ways to support your well-being today.",
)

MOOD_RESPONSES: Dict[MoodLabel, Tuple[str, ...]] = {
    MoodLabel.HAPPY: (
        "That's wonderful to hear! Hold on to this feeling.",
        "Your happiness is contagious. What made today so good?",
        "It's great to see you in such high spirits. Keep it going!",
    ),
    MoodLabel.SAD: (
        "I'm sorry you're feeling down. You don't have to go through it alone.",
        "It's okay to feel sad sometimes. Be gentle with yourself today.",
        "Thank you for sharing this. Small acts of self-care can help right now.",
    ),
    MoodLabel.ANGRY: (
        "It sounds like something really got to you. Let's take a breath together.",
        "Your frustration is valid. Giving it a little space can help.",
        "Anger often points at something that matters to you. What is it telling you?",
    ),
    MoodLabel.ANXIOUS: (
        "That sounds stressful. Let's focus on one small thing at a time.",
        "Worry can feel overwhelming. Try grounding yourself in what you can see and hear.",
        "You're not alone in feeling this way. A few slow breaths can make a difference.",
    ),
    MoodLabel.CALM: (
        "It's lovely that you're feeling at peace. Savor it.",
        "A calm mind is a great place to be. Enjoy the stillness.",
        "You sound balanced today. This is a good moment to recharge.",
    ),
    MoodLabel.NEUTRAL: GENERAL_RESPONSES,
}


class NarrativePicker:
    """Chooses one response sentence per submission.

    Pass a seeded random.Random to make the choice reproducible in tests.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def pick(self, mood: Optional[str]) -> str:
        label = MoodLabel.parse(mood)
        pool = MOOD_RESPONSES.get(label, GENERAL_RESPONSES) if label else GENERAL_RESPONSES
        return self._rng.choice(pool)
