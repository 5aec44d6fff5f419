"""
Domain Models for ConsultScribe
===============================

This module defines the core data structures used throughout the application.
We use Pydantic for several important reasons:

1. **Validation**: Automatically validates data types and constraints
2. **Serialization**: Easy conversion to/from camelCase JSON for the API and CLI
3. **Documentation**: Self-documenting with type hints

Design Principle: These models are "pure" - they have no dependencies on
external services or frameworks. Every field of the SOAP note has a concrete
type up front, so the pipeline fills a fixed shape rather than growing a
loosely-typed dictionary.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """
    Base for everything that crosses the wire.

    JSON uses camelCase keys (detectedLanguage, chiefComplaint) for the
    browser dashboard, while Python code keeps snake_case attribute names.
    Either spelling is accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Enumerations
# =============================================================================

class Language(str, Enum):
    """Transcript language as detected from its script."""
    ENGLISH = "en"
    HINDI = "hi"


class SignalType(str, Enum):
    """Priority of a rule-detected clinical signal."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class IssueSeverity(str, Enum):
    """Severity of a consistency issue."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class RiskLevel(str, Enum):
    """Heuristic priority tier of a consultation."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class StressLevel(str, Enum):
    """Heuristic distress tier."""
    NORMAL = "normal"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ConsultationStatus(str, Enum):
    """
    Review status of a submitted consultation.

    A consultation starts as a draft and is either approved or rejected by
    the doctor. Both are terminal.
    """
    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"


# =============================================================================
# Inputs
# =============================================================================

def format_number(value: float) -> str:
    """Render 120.0 as '120' and 98.6 as '98.6'."""
    return f"{value:g}"


class Vitals(CamelModel):
    """
    Vitals recorded at the vitals desk.

    Every field is optional; None means "not recorded", never zero.
    BMI is computed by the caller and passed through unchanged.
    """
    height: Optional[float] = Field(default=None, gt=0, description="Height in cm")
    weight: Optional[float] = Field(default=None, gt=0, description="Weight in kg")
    temperature: Optional[float] = Field(default=None, description="Temperature in °F")
    blood_pressure_systolic: Optional[float] = Field(default=None, description="Systolic BP (mmHg)")
    blood_pressure_diastolic: Optional[float] = Field(default=None, description="Diastolic BP (mmHg)")
    pulse_rate: Optional[float] = Field(default=None, description="Pulse rate (bpm)")
    respiratory_rate: Optional[float] = Field(default=None, description="Respiratory rate (/min)")
    oxygen_saturation: Optional[float] = Field(default=None, description="SpO2 (%)")
    bmi: Optional[float] = Field(default=None, description="Body mass index")

    def with_computed_bmi(self) -> "Vitals":
        """
        Return a copy with BMI derived from height and weight.

        Leaves the record unchanged when either measurement is missing.
        """
        if self.height is None or self.weight is None:
            return self.model_copy()
        height_m = self.height / 100
        return self.model_copy(update={"bmi": round(self.weight / (height_m * height_m), 1)})

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class PainLocation(CamelModel):
    """Body location picked by the patient."""
    id: str = Field(..., description="Stable location identifier, e.g. 'chest'")
    label: str = Field(..., description="Display label, e.g. 'Chest'")


# =============================================================================
# SOAP Note Sections
# =============================================================================

class TimelineEvent(CamelModel):
    """A time reference found in the transcript, stamped with the capture instant."""
    time: datetime = Field(default_factory=utc_now)
    event: str


class NoteMetadata(CamelModel):
    detected_language: Language = Language.ENGLISH
    original_text: Optional[str] = Field(
        default=None,
        description="Raw transcript, only when Hindi was detected"
    )
    translated_text: Optional[str] = Field(
        default=None,
        description="Translation output, only when translation ran"
    )


class Subjective(CamelModel):
    chief_complaint: str
    history_of_present_illness: str = ""
    symptoms: List[str] = Field(default_factory=list)
    onset: str = "Not specified"
    duration: str = "Not specified"
    severity: str = "Not specified"
    pain_locations: List[PainLocation] = Field(default_factory=list)
    timeline: List[TimelineEvent] = Field(default_factory=list)


class Objective(CamelModel):
    vitals: str = "To be filled by vitals desk"
    examination: str = "To be documented by doctor"


class Assessment(CamelModel):
    observations: List[str] = Field(default_factory=list)
    clarifying_questions: List[str] = Field(default_factory=list)


class Plan(CamelModel):
    """Doctor-only fields. The pipeline never fills these."""
    recommendations: str = "To be determined by doctor"
    prescriptions: str = "To be prescribed by doctor only"


class ClinicalSignal(CamelModel):
    """A rule-detected textual pattern worth the doctor's attention (not a diagnosis)."""
    type: SignalType
    signal: str
    evidence: str
    clinical_implication: str
    recommendation: str


class ConsistencyIssue(CamelModel):
    severity: IssueSeverity
    type: str
    issue: str
    context: str
    suggestion: str


class RiskAssessment(CamelModel):
    score: int = Field(default=0, ge=0)
    level: RiskLevel = RiskLevel.LOW
    urgency: str = "Routine consultation"
    factors: List[str] = Field(default_factory=list)
    disclaimer: str


class EmotionAnalysis(CamelModel):
    stress_level: StressLevel = StressLevel.NORMAL
    indicators: List[str] = Field(default_factory=list)
    recommendation: str = ""
    distress_score: int = Field(default=0, ge=0)
    disclaimer: str


class PatientEducation(CamelModel):
    condition: str = ""
    explanation: str = ""
    what_to_do: List[str] = Field(default_factory=list)
    what_to_avoid: List[str] = Field(default_factory=list)
    when_to_return: List[str] = Field(default_factory=list)
    language: Language = Language.ENGLISH

    @property
    def is_blank(self) -> bool:
        return not self.condition


class SOAPNote(CamelModel):
    """
    SOAP Note - The standard medical documentation format.

    SOAP stands for:
    - Subjective: Patient's reported symptoms and history
    - Objective: Observable/measurable findings
    - Assessment: Rule-generated observations and clarifying questions
    - Plan: Doctor-only treatment fields

    Alongside the four sections the note carries the heuristic analyses
    (signals, consistency issues, risk, distress, education) that the doctor
    dashboard displays next to it.
    """
    metadata: NoteMetadata = Field(default_factory=NoteMetadata)
    subjective: Subjective
    objective: Objective = Field(default_factory=Objective)
    assessment: Assessment = Field(default_factory=Assessment)
    plan: Plan = Field(default_factory=Plan)
    clinical_signals: List[ClinicalSignal] = Field(default_factory=list)
    consistency_issues: List[ConsistencyIssue] = Field(default_factory=list)
    risk_assessment: RiskAssessment
    emotion_analysis: EmotionAnalysis
    patient_education: PatientEducation = Field(default_factory=PatientEducation)

    def to_formatted_string(self) -> str:
        """
        Returns a nicely formatted SOAP note for display or export.

        The object knows how to present itself, so the CLI and the file
        export share one rendering.
        """
        s = self.subjective
        subjective = "\n".join([
            f"Chief complaint: {s.chief_complaint}",
            f"History: {s.history_of_present_illness or '-'}",
            f"Symptoms: {', '.join(s.symptoms) or 'None identified'}",
            f"Onset: {s.onset} | Duration: {s.duration} | Severity: {s.severity}",
            f"Pain locations: {', '.join(p.label for p in s.pain_locations) or '-'}",
        ] + [f"- {event.event}" for event in s.timeline])

        objective = f"Vitals: {self.objective.vitals}\nExamination: {self.objective.examination}"

        assessment = "\n".join(
            [f"- {obs}" for obs in self.assessment.observations]
            + ["Clarifying questions:"]
            + [f"? {q}" for q in self.assessment.clarifying_questions]
        )

        plan = (
            f"Recommendations: {self.plan.recommendations}\n"
            f"Prescriptions: {self.plan.prescriptions}"
        )

        risk = self.risk_assessment
        analysis_lines = [f"Risk: {risk.level.value} (score {risk.score}) - {risk.urgency}"]
        analysis_lines += [f"[{sig.type.value}] {sig.signal}" for sig in self.clinical_signals]
        analysis_lines += [
            f"[{issue.severity.value}] {issue.issue}" for issue in self.consistency_issues
        ]
        analysis_lines.append(
            f"Distress: {self.emotion_analysis.stress_level.value} "
            f"(score {self.emotion_analysis.distress_score})"
        )
        analysis_lines.append(risk.disclaimer)

        return f"""
╔══════════════════════════════════════════════════════════════════╗
║                         SOAP NOTE                                ║
╠══════════════════════════════════════════════════════════════════╣
║ SUBJECTIVE                                                       ║
╟──────────────────────────────────────────────────────────────────╢
{self._wrap_text(subjective)}
╟──────────────────────────────────────────────────────────────────╢
║ OBJECTIVE                                                        ║
╟──────────────────────────────────────────────────────────────────╢
{self._wrap_text(objective)}
╟──────────────────────────────────────────────────────────────────╢
║ ASSESSMENT                                                       ║
╟──────────────────────────────────────────────────────────────────╢
{self._wrap_text(assessment)}
╟──────────────────────────────────────────────────────────────────╢
║ PLAN                                                             ║
╟──────────────────────────────────────────────────────────────────╢
{self._wrap_text(plan)}
╟──────────────────────────────────────────────────────────────────╢
║ ANALYSIS                                                         ║
╟──────────────────────────────────────────────────────────────────╢
{self._wrap_text(chr(10).join(analysis_lines))}
╚══════════════════════════════════════════════════════════════════╝
"""

    def _wrap_text(self, text: str, width: int = 66) -> str:
        """Helper to wrap text for formatted output."""
        lines = []
        for paragraph in text.split('\n'):
            words = paragraph.split()
            current_line = "║ "
            for word in words:
                if len(current_line) + len(word) + 1 <= width:
                    current_line += word + " "
                else:
                    lines.append(current_line.ljust(67) + "║")
                    current_line = "║ " + word + " "
            if current_line.strip("║ "):
                lines.append(current_line.ljust(67) + "║")
        return '\n'.join(lines) if lines else "║" + " " * 66 + "║"


# =============================================================================
# Consultation (review workflow)
# =============================================================================

class Consultation(CamelModel):
    """
    A submitted consultation and its review state.

    The SOAP note inside is what the pipeline produced, possibly replaced by
    a doctor-edited copy. Timestamps for each review action are kept so the
    dashboard can show when things happened.
    """
    id: str = Field(..., description="Unique identifier for this consultation")
    created_at: datetime = Field(default_factory=utc_now)
    transcript: str
    pain_locations: List[PainLocation] = Field(default_factory=list)
    vitals: Vitals = Field(default_factory=Vitals)
    detected_language: Language = Language.ENGLISH
    soap_note: SOAPNote
    status: ConsultationStatus = ConsultationStatus.DRAFT

    approved_by_doctor: bool = False
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejected_at: Optional[datetime] = None
    sent_to_pharmacy: bool = False
    sent_to_pharmacy_at: Optional[datetime] = None
    sent_to_patient: bool = False
    sent_to_patient_at: Optional[datetime] = None
