"""
Shared fixtures.

Pipelines built here never touch the network: the translator is always a
MockTranslator.
"""

import pytest

from config import get_settings_for_testing
from core.translator import MockTranslator
from models import EmotionAnalysis, RiskAssessment, SOAPNote, Subjective
from pipeline import ClinicalNotePipeline


@pytest.fixture
def settings(tmp_path):
    """Isolated settings writing into a temporary directory."""
    return get_settings_for_testing(output_dir=str(tmp_path / "output"))


@pytest.fixture
def translator():
    return MockTranslator()


@pytest.fixture
def pipeline(settings, translator):
    return ClinicalNotePipeline(settings=settings, translator=translator)


@pytest.fixture
def make_note():
    """Build a minimal SOAPNote around the given subjective fields."""
    def _make_note(symptoms=None, severity="Not specified"):
        return SOAPNote(
            subjective=Subjective(
                chief_complaint="test",
                symptoms=symptoms or [],
                severity=severity,
            ),
            risk_assessment=RiskAssessment(disclaimer="test"),
            emotion_analysis=EmotionAnalysis(disclaimer="test"),
        )
    return _make_note
