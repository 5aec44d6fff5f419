"""
Note Assembly Pipeline for ConsultScribe
========================================

This module provides the orchestration layer that turns a consultation
transcript, pain locations and vitals into one structured SOAP note.

Architecture Pattern: Pipeline
------------------------------
Each stage transforms data and hands it to the next:

Transcript → [Language Detector] → [Translator] → working text
           → [Field Extractors] → subjective / objective / questions
           → [Signal Detector, Consistency Checker]   (raw transcript)
           → [Risk Scorer, Emotion Analyzer]
           → [Education Generator] → [Observations] → SOAP Note

The only suspension point is the translation call. Everything after it is
pure computation over strings, so assembly never fails for any input;
translation failures degrade to the untranslated text.

Note the deliberate asymmetry: extractors read the translated text, while
the signal detector and consistency checker read the raw transcript.
"""

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Optional, Sequence

from config import Settings, get_settings
from models import (
    Assessment,
    Consultation,
    Language,
    NoteMetadata,
    Objective,
    PainLocation,
    RiskAssessment,
    EmotionAnalysis,
    SOAPNote,
    Subjective,
    Vitals,
)
from core.assessment import format_vitals, generate_clarifying_questions, generate_observations
from core.clinical_signals import detect_signals
from core.consistency import check_consistency
from core.education import generate_patient_education
from core.emotion import EMOTION_DISCLAIMER, analyze_emotion
from core.extractors import (
    build_chief_complaint,
    extract_duration,
    extract_onset,
    extract_severity,
    extract_symptoms,
    extract_timeline,
    summarize_history,
)
from core.language import detect_language
from core.risk import RISK_DISCLAIMER, score_risk
from core.translator import TranslatorProtocol, create_translator
from exceptions import EmptyTranscriptError, TranslationError


# Set up module logger
logger = logging.getLogger(__name__)


class ClinicalNotePipeline:
    """
    Main pipeline for turning consultation transcripts into SOAP notes.

    Design Principles:
    -----------------
    1. Dependency Injection: the translator is injected for testability
    2. Stateless: nothing is kept between calls, so concurrent consultations
       cannot see each other's data
    3. Total: assembly returns a note for every string input

    Usage:
        pipeline = ClinicalNotePipeline()
        note = pipeline.assemble("I have fever and cough for 3 days")
        print(note.to_formatted_string())
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        translator: Optional[TranslatorProtocol] = None,
    ):
        """
        Initialize the pipeline with optional dependencies.

        Args:
            settings: Application settings
            translator: Translation service (created lazily when omitted)
        """
        self.settings = settings or get_settings()
        self._translator = translator

        logger.info("ClinicalNotePipeline initialized")

    @property
    def translator(self) -> TranslatorProtocol:
        """Lazy-load the translation service."""
        if self._translator is None:
            self._translator = create_translator(settings=self.settings)
        return self._translator

    # =========================================================================
    # Note assembly
    # =========================================================================

    async def aassemble(
        self,
        transcript: str,
        pain_locations: Optional[Sequence[PainLocation]] = None,
        vitals: Optional[Vitals] = None,
    ) -> SOAPNote:
        """
        Assemble a SOAP note from a transcript.

        Steps run in a fixed order; each depends on the previous one.

        Args:
            transcript: Raw consultation transcript (may mix scripts)
            pain_locations: Patient-selected locations, passed through
            vitals: Vitals record; BMI is passed through, never recomputed

        Returns:
            A freshly built SOAPNote
        """
        transcript = transcript or ""
        pain_locations = [p.model_copy() for p in (pain_locations or [])]
        vitals = vitals or Vitals()

        # Step 1: Language
        language = detect_language(transcript)
        logger.info(f"Assembling note ({len(transcript)} chars, language: {language.value})")

        # Step 2: Translation (Hindi only, at most once)
        working_text = transcript
        translated_text = None
        if language == Language.HINDI and self.settings.enable_translation:
            translated_text = await self._atranslate(transcript)
            working_text = translated_text

        metadata = NoteMetadata(
            detected_language=language,
            original_text=transcript if language == Language.HINDI else None,
            translated_text=translated_text,
        )

        # Step 3: Field extraction over the working text
        text = working_text.lower()
        symptoms = extract_symptoms(text)
        severity = extract_severity(text)

        # Step 4: Subjective / objective / questions
        subjective = Subjective(
            chief_complaint=build_chief_complaint(symptoms),
            history_of_present_illness=summarize_history(working_text),
            symptoms=symptoms,
            onset=extract_onset(text),
            duration=extract_duration(text),
            severity=severity,
            pain_locations=pain_locations,
            timeline=extract_timeline(text),
        )

        note = SOAPNote(
            metadata=metadata,
            subjective=subjective,
            objective=Objective(vitals=format_vitals(vitals)),
            assessment=Assessment(
                clarifying_questions=generate_clarifying_questions(symptoms, text)
            ),
            risk_assessment=RiskAssessment(disclaimer=RISK_DISCLAIMER),
            emotion_analysis=EmotionAnalysis(disclaimer=EMOTION_DISCLAIMER),
        )

        # Step 5: Signals and consistency read the RAW transcript
        note.clinical_signals = detect_signals(transcript, note)
        note.consistency_issues = check_consistency(transcript, note)

        # Step 6: Scores
        note.risk_assessment = score_risk(note, note.clinical_signals)
        note.emotion_analysis = analyze_emotion(transcript)

        # Step 7: Education in the patient's language
        note.patient_education = generate_patient_education(note, language)

        # Step 8: Observations
        note.assessment.observations = generate_observations(
            symptoms, severity, note.clinical_signals
        )

        logger.info(
            f"Note assembled: {len(symptoms)} symptoms, "
            f"{len(note.clinical_signals)} signals, "
            f"{len(note.consistency_issues)} consistency issues, "
            f"risk {note.risk_assessment.level.value}"
        )
        return note

    def assemble(
        self,
        transcript: str,
        pain_locations: Optional[Sequence[PainLocation]] = None,
        vitals: Optional[Vitals] = None,
    ) -> SOAPNote:
        """Synchronous wrapper around aassemble() for scripts and the CLI."""
        return asyncio.run(self.aassemble(transcript, pain_locations, vitals))

    async def _atranslate(self, transcript: str) -> str:
        """
        Translate, or return the transcript unchanged on any failure.

        Translation failure is never surfaced to the caller.
        """
        logger.info("Hindi detected, translating...")
        try:
            translated = await self.translator.translate(transcript)
        except TranslationError as e:
            logger.warning(f"Translation failed, using original text: {e.message}")
            return transcript
        except Exception as e:
            logger.warning(f"Unexpected translation failure, using original text: {e}")
            return transcript

        logger.info("Translation complete")
        return translated

    # =========================================================================
    # Consultation processing
    # =========================================================================

    async def aprocess(
        self,
        transcript: str,
        pain_locations: Optional[Sequence[PainLocation]] = None,
        vitals: Optional[Vitals] = None,
    ) -> Consultation:
        """
        Build a draft Consultation around a freshly assembled note.

        Unlike aassemble(), this is the submission boundary, so a blank
        transcript is rejected here.

        Raises:
            EmptyTranscriptError: if the transcript is blank
        """
        if not transcript or not transcript.strip():
            raise EmptyTranscriptError()

        vitals = vitals or Vitals()
        consultation_id = str(uuid.uuid4())[:8]
        logger.info(f"[{consultation_id}] Processing consultation")

        note = await self.aassemble(transcript, pain_locations, vitals)

        return Consultation(
            id=consultation_id,
            transcript=transcript,
            pain_locations=list(note.subjective.pain_locations),
            vitals=vitals,
            detected_language=note.metadata.detected_language,
            soap_note=note,
        )

    def process(
        self,
        transcript: str,
        pain_locations: Optional[Sequence[PainLocation]] = None,
        vitals: Optional[Vitals] = None,
    ) -> Consultation:
        """Synchronous version of aprocess()."""
        return asyncio.run(self.aprocess(transcript, pain_locations, vitals))


def save_consultation_to_file(
    consultation: Consultation,
    output_dir: str = "./output"
) -> dict[str, str]:
    """
    Save a consultation to files.

    Saves:
    1. Full consultation as JSON (for the dashboard or later import)
    2. SOAP note as formatted text (for reading)
    3. Transcript as plain text (for reference)

    Args:
        consultation: The Consultation to save
        output_dir: Directory to save files in

    Returns:
        Dict of saved file paths
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    base_name = f"consultation_{consultation.id}"
    saved_files = {}

    json_path = output_path / f"{base_name}.json"
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(consultation.model_dump(mode='json', by_alias=True), f, indent=2, ensure_ascii=False)
    saved_files['json'] = str(json_path)

    soap_path = output_path / f"{base_name}_soap.txt"
    with open(soap_path, 'w', encoding='utf-8') as f:
        f.write(consultation.soap_note.to_formatted_string())
    saved_files['soap'] = str(soap_path)

    transcript_path = output_path / f"{base_name}_transcript.txt"
    with open(transcript_path, 'w', encoding='utf-8') as f:
        f.write(consultation.transcript)
    saved_files['transcript'] = str(transcript_path)

    logger.info(f"Saved consultation to {output_dir}: {list(saved_files.keys())}")

    return saved_files


def create_pipeline(
    settings: Optional[Settings] = None,
    translator: Optional[TranslatorProtocol] = None,
) -> ClinicalNotePipeline:
    """
    Factory function to create a configured pipeline instance.

    Args:
        settings: Optional custom settings. Uses default if not provided.
        translator: Optional translator (mock in tests)

    Returns:
        ClinicalNotePipeline: Configured pipeline instance
    """
    if settings is None:
        settings = get_settings()

    return ClinicalNotePipeline(settings=settings, translator=translator)
