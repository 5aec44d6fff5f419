"""
Risk stratification.

A weighted sum of independently triggered rules mapped to a priority tier.
Weights are all non-negative, so adding a trigger to a transcript can only
keep or raise the score. This ranks consultations for review order; it is
not a clinical risk model.
"""

import logging

from models import ClinicalSignal, RiskAssessment, RiskLevel, SignalType, SOAPNote


# Set up module logger
logger = logging.getLogger(__name__)


RISK_DISCLAIMER = (
    "Heuristic-based prioritization - not clinically validated. "
    "Prototype estimates based on rule coverage."
)

SEVERITY_WEIGHTS = {
    "Severe": (3, "Severe symptom severity reported"),
    "Moderate": (2, "Moderate symptom severity"),
}

CRITICAL_SYMPTOMS = ["Chest pain", "Breathing difficulty", "Severe headache"]
CRITICAL_SYMPTOM_WEIGHT = 5
CRITICAL_SIGNAL_WEIGHT = 2
WORSENING_WEIGHT = 2
FUNCTIONAL_IMPAIRMENT_WEIGHT = 2

# (minimum score, level, urgency), highest first
RISK_LEVELS = [
    (8, RiskLevel.CRITICAL, "IMMEDIATE attention recommended"),
    (5, RiskLevel.HIGH, "Priority assessment recommended"),
    (3, RiskLevel.MEDIUM, "Standard care pathway"),
    (0, RiskLevel.LOW, "Routine consultation"),
]


def classify_risk(score: int) -> tuple[RiskLevel, str]:
    for threshold, level, urgency in RISK_LEVELS:
        if score >= threshold:
            return level, urgency
    return RiskLevel.LOW, "Routine consultation"


def score_risk(note: SOAPNote, signals: list[ClinicalSignal]) -> RiskAssessment:
    """
    Score a note and its signals.

    Factors are listed in evaluation order, one per rule that contributed.
    """
    score = 0
    factors = []

    weight = SEVERITY_WEIGHTS.get(note.subjective.severity)
    if weight:
        score += weight[0]
        factors.append(weight[1])

    has_critical_symptom = any(
        critical in symptom
        for symptom in note.subjective.symptoms
        for critical in CRITICAL_SYMPTOMS
    )
    if has_critical_symptom:
        score += CRITICAL_SYMPTOM_WEIGHT
        factors.append("Critical symptoms present")

    critical_signals = sum(1 for s in signals if s.type == SignalType.CRITICAL)
    if critical_signals:
        score += critical_signals * CRITICAL_SIGNAL_WEIGHT
        factors.append(f"{critical_signals} critical clinical patterns detected")

    if any("worsening" in s.signal for s in signals):
        score += WORSENING_WEIGHT
        factors.append("Progressive worsening noted")

    if any("Functional impairment" in s.signal for s in signals):
        score += FUNCTIONAL_IMPAIRMENT_WEIGHT
        factors.append("Impact on daily function")

    level, urgency = classify_risk(score)
    logger.debug(f"Risk score {score} -> {level.value}")

    return RiskAssessment(
        score=score,
        level=level,
        urgency=urgency,
        factors=factors,
        disclaimer=RISK_DISCLAIMER,
    )
