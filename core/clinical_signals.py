"""
Clinical Signal Detection
=========================

Flags textual patterns in the patient's own words that a doctor should look
at first: worsening, sleep disruption, delayed care, recurrence, functional
impairment, emotional distress, and two red-flag symptoms.

Every rule is independent. Several may fire on the same transcript and the
output keeps rule-declaration order, not severity order. Signals are read
from the raw transcript, before any translation.
"""

import logging
import re
from typing import NamedTuple, Optional

from models import ClinicalSignal, SignalType, SOAPNote


# Set up module logger
logger = logging.getLogger(__name__)


class SignalRule(NamedTuple):
    name: str
    patterns: tuple
    template: ClinicalSignal

    def matches(self, text: str) -> bool:
        for pattern in self.patterns:
            if isinstance(pattern, re.Pattern):
                if pattern.search(text):
                    return True
            elif pattern in text:
                return True
        return False


def _rx(*expressions: str) -> tuple:
    return tuple(re.compile(expr, re.I) for expr in expressions)


SIGNAL_RULES: list[SignalRule] = [
    SignalRule(
        name="progressive_worsening",
        patterns=_rx(
            r"getting worse", r"keeps coming back", r"more severe",
            r"increasing", r"worsening", r"spreading",
        ),
        template=ClinicalSignal(
            type=SignalType.CRITICAL,
            signal="Progressive symptom worsening",
            evidence="Patient reports symptoms are getting worse over time",
            clinical_implication="May indicate advancing disease process - prioritize assessment",
            recommendation="Consider escalation of care",
        ),
    ),
    SignalRule(
        name="sleep_disruption",
        patterns=_rx(
            r"wakes me up", r"can't sleep", r"disturbs.*sleep",
            r"at night", r"keeps me awake",
        ),
        template=ClinicalSignal(
            type=SignalType.HIGH,
            signal="Sleep disruption due to symptoms",
            evidence="Symptoms severe enough to interfere with sleep",
            clinical_implication="Indicates significant symptom burden",
            recommendation="Assess need for symptom management",
        ),
    ),
    SignalRule(
        name="delayed_care",
        patterns=_rx(
            r"thought it was nothing", r"waited.*days", r"didn't think",
            r"ignored", r"finally decided",
        ),
        template=ClinicalSignal(
            type=SignalType.MEDIUM,
            signal="Delay in seeking medical care",
            evidence="Patient initially minimized or ignored symptoms",
            clinical_implication="Condition may be more advanced than timeline suggests",
            recommendation="Thorough examination warranted",
        ),
    ),
    SignalRule(
        name="recurrence",
        patterns=_rx(
            r"keeps coming back", r"again and again", r"multiple times",
            r"recurring", r"keeps happening",
        ),
        template=ClinicalSignal(
            type=SignalType.HIGH,
            signal="Recurrent symptoms",
            evidence="Pattern of symptom recurrence noted",
            clinical_implication="Consider chronic or relapsing condition",
            recommendation="Investigate underlying cause",
        ),
    ),
    SignalRule(
        name="functional_impairment",
        patterns=_rx(
            r"can't work", r"unable to", r"difficult to",
            r"stopped.*activities", r"had to stop",
        ),
        template=ClinicalSignal(
            type=SignalType.CRITICAL,
            signal="Functional impairment",
            evidence="Symptoms interfering with daily activities",
            clinical_implication="Significant quality of life impact",
            recommendation="Aggressive symptom management needed",
        ),
    ),
    SignalRule(
        name="emotional_distress",
        patterns=_rx(r"worried", r"scared", r"anxious", r"concerned", r"afraid"),
        template=ClinicalSignal(
            type=SignalType.MEDIUM,
            signal="Emotional distress present",
            evidence="Patient expressing worry or anxiety",
            clinical_implication="Consider psychological support",
            recommendation="Address patient concerns and provide reassurance",
        ),
    ),
    # Red flags: literal substrings, always CRITICAL
    SignalRule(
        name="chest_pain",
        patterns=("chest pain", "chest pressure"),
        template=ClinicalSignal(
            type=SignalType.CRITICAL,
            signal="URGENT: Chest pain reported",
            evidence="Patient reports chest pain or pressure",
            clinical_implication="Rule out acute coronary syndrome",
            recommendation="IMMEDIATE cardiac evaluation required",
        ),
    ),
    SignalRule(
        name="respiratory_distress",
        patterns=("shortness of breath", "difficulty breathing"),
        template=ClinicalSignal(
            type=SignalType.CRITICAL,
            signal="URGENT: Respiratory distress",
            evidence="Patient reports breathing difficulty",
            clinical_implication="Potential respiratory emergency",
            recommendation="IMMEDIATE respiratory assessment required",
        ),
    ),
]


def detect_signals(transcript: str, note: Optional[SOAPNote] = None) -> list[ClinicalSignal]:
    """
    Run every signal rule against the lower-cased transcript.

    Args:
        transcript: Raw (untranslated) transcript
        note: The note being assembled. Accepted so callers can pass context;
              the current rules read only the transcript.

    Returns:
        Fresh ClinicalSignal objects in rule-declaration order
    """
    text = (transcript or "").lower()
    signals = []
    for rule in SIGNAL_RULES:
        if rule.matches(text):
            logger.debug(f"Signal rule fired: {rule.name}")
            signals.append(rule.template.model_copy(deep=True))
    return signals
