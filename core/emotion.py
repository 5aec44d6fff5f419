"""
Distress flagging from transcript vocabulary.

Separate from the risk score: this looks only at how the patient talks
(stress words, superlatives, pleas for help) and flags consultations where
the doctor may want to address the patient's state of mind.
"""

import logging
import re

from models import EmotionAnalysis, StressLevel


# Set up module logger
logger = logging.getLogger(__name__)


EMOTION_DISCLAIMER = "Heuristic-based flagging only - not psychological assessment"

STRESS_WORDS = ["worried", "scared", "can't", "terrible", "unbearable", "afraid", "anxious"]
STRESS_WORD_WEIGHT = 2

# (pattern, weight, indicator)
DISTRESS_PATTERNS: list[tuple[re.Pattern, int, str]] = [
    (re.compile(r"severe|unbearable|worst|excruciating", re.I), 3,
     "High-severity language detected"),
    (re.compile(r"please help|desperate|can't take it", re.I), 4,
     "Potential distress indicators"),
    (re.compile(r"getting worse|can't bear|killing me", re.I), 2,
     "Progressive symptom worsening language"),
]

# (minimum score, level, recommendation), highest first
STRESS_LEVELS = [
    (7, StressLevel.CRITICAL,
     "Patient shows potential signs of severe distress - consider prioritization"),
    (4, StressLevel.HIGH,
     "Potential significant patient distress - consider prioritization"),
    (2, StressLevel.MODERATE, "Monitor patient emotional state"),
]


def analyze_emotion(transcript: str) -> EmotionAnalysis:
    text = (transcript or "").lower()

    stress_count = sum(1 for word in STRESS_WORDS if word in text)
    score = stress_count * STRESS_WORD_WEIGHT
    indicators = []

    for pattern, weight, indicator in DISTRESS_PATTERNS:
        if pattern.search(text):
            indicators.append(indicator)
            score += weight

    stress_level, recommendation = StressLevel.NORMAL, ""
    for threshold, level, advice in STRESS_LEVELS:
        if score >= threshold:
            stress_level, recommendation = level, advice
            break

    logger.debug(f"Distress score {score} -> {stress_level.value}")

    return EmotionAnalysis(
        stress_level=stress_level,
        indicators=indicators,
        recommendation=recommendation,
        distress_score=score,
        disclaimer=EMOTION_DISCLAIMER,
    )
