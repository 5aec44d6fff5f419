"""
Risk stratification tests.
"""

import pytest

from core.clinical_signals import detect_signals
from core.risk import RISK_DISCLAIMER, classify_risk, score_risk
from models import RiskLevel


@pytest.mark.parametrize("score,expected", [
    (0, RiskLevel.LOW),
    (2, RiskLevel.LOW),
    (3, RiskLevel.MEDIUM),
    (4, RiskLevel.MEDIUM),
    (5, RiskLevel.HIGH),
    (7, RiskLevel.HIGH),
    (8, RiskLevel.CRITICAL),
    (20, RiskLevel.CRITICAL),
])
def test_classify_thresholds(score, expected):
    level, _ = classify_risk(score)
    assert level == expected


def test_empty_note_is_routine(make_note):
    risk = score_risk(make_note(), [])
    assert risk.score == 0
    assert risk.level == RiskLevel.LOW
    assert risk.urgency == "Routine consultation"
    assert risk.factors == []
    assert risk.disclaimer == RISK_DISCLAIMER


def test_moderate_severity_only(make_note):
    risk = score_risk(make_note(severity="Moderate"), [])
    assert risk.score == 2
    assert risk.factors == ["Moderate symptom severity"]


def test_worsening_fever(make_note):
    signals = detect_signals("fever, getting worse")
    risk = score_risk(make_note(symptoms=["Fever"]), signals)
    assert risk.score == 4
    assert risk.level == RiskLevel.MEDIUM
    assert risk.factors == [
        "1 critical clinical patterns detected",
        "Progressive worsening noted",
    ]


def test_chest_pain(make_note):
    signals = detect_signals("I have chest pain")
    risk = score_risk(make_note(symptoms=["Chest pain"]), signals)
    assert risk.score == 7
    assert risk.level == RiskLevel.HIGH
    assert risk.urgency == "Priority assessment recommended"


def test_everything_at_once(make_note):
    signals = detect_signals("severe chest pain, getting worse, I can't work")
    note = make_note(symptoms=["Chest pain"], severity="Severe")
    risk = score_risk(note, signals)
    # 3 severe + 5 critical symptom + 3*2 critical signals + 2 worsening + 2 impairment
    assert risk.score == 18
    assert risk.level == RiskLevel.CRITICAL
    assert risk.urgency == "IMMEDIATE attention recommended"
    assert risk.factors == [
        "Severe symptom severity reported",
        "Critical symptoms present",
        "3 critical clinical patterns detected",
        "Progressive worsening noted",
        "Impact on daily function",
    ]


def test_non_critical_signals_do_not_score(make_note):
    signals = detect_signals("I am worried, it wakes me up")
    assert signals
    assert score_risk(make_note(), signals).score == 0
