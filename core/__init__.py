"""
Core Processing Module
======================

Rule-based analysis stages used by the note pipeline:
- language: script-based language detection
- translator: best-effort translation service
- extractors: symptom, timeline, severity, onset and duration extraction
- clinical_signals: red-flag and pattern signals
- consistency: contradiction checks
- risk: heuristic risk stratification
- emotion: distress flagging
- education: patient education lookup
- assessment: observations, clarifying questions and vitals formatting
"""

from core.language import detect_language
from core.translator import GoogleTranslator, MockTranslator, create_translator
from core.extractors import extract_symptoms, extract_timeline, extract_severity
from core.clinical_signals import detect_signals
from core.consistency import check_consistency
from core.risk import score_risk
from core.emotion import analyze_emotion
from core.education import generate_patient_education
from core.assessment import format_vitals, generate_observations, generate_clarifying_questions

__all__ = [
    'detect_language',
    'GoogleTranslator',
    'MockTranslator',
    'create_translator',
    'extract_symptoms',
    'extract_timeline',
    'extract_severity',
    'detect_signals',
    'check_consistency',
    'score_risk',
    'analyze_emotion',
    'generate_patient_education',
    'format_vitals',
    'generate_observations',
    'generate_clarifying_questions',
]
