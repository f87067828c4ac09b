"""Keyword-based learner sentiment classification."""

from __future__ import annotations

from enum import Enum


class Sentiment(str, Enum):
    """Coarse learner state used to bias the reply and reward points."""

    NEUTRAL = "neutral"
    CONFUSED = "confused"
    CURIOUS = "curious"


CONFUSION_MARKERS: tuple[str, ...] = (
    "confused",
    "confusing",
    "don't understand",
    "help",
    "difficult",
)

CURIOSITY_MARKERS: tuple[str, ...] = (
    "interesting",
    "learn",
    "explain",
    "curious",
    "wonder",
)


def classify(text: str) -> Sentiment:
    """Classify learner text by case-insensitive substring match.

    Confusion markers win over curiosity markers when both appear.
    Text with neither (including empty text) is neutral.
    """
    lowered = (text or "").lower()

    if any(marker in lowered for marker in CONFUSION_MARKERS):
        return Sentiment.CONFUSED
    if any(marker in lowered for marker in CURIOSITY_MARKERS):
        return Sentiment.CURIOUS
    return Sentiment.NEUTRAL
