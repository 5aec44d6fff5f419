"""
API Response Models
===================

Pydantic models for API responses, serialised with camelCase keys. Full
consultations are returned as the domain Consultation model; the list
endpoint returns compact summaries for the dashboard cards.
"""

from pydantic import ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from models import CamelModel, Consultation, ConsultationStatus, Language, RiskLevel


class ConsultationSummary(CamelModel):
    """One dashboard card."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f2a9c1e",
                "status": "draft",
                "createdAt": "2024-01-17T10:30:00Z",
                "detectedLanguage": "en",
                "chiefComplaint": "Fever, Cough",
                "riskLevel": "MEDIUM",
                "urgency": "Standard care pathway",
                "clinicalSignalCount": 1
            }
        }
    )

    id: str
    status: ConsultationStatus
    created_at: datetime
    detected_language: Language
    chief_complaint: str
    risk_level: RiskLevel
    urgency: str
    clinical_signal_count: int = Field(..., ge=0)
    approved_at: Optional[datetime] = None

    @classmethod
    def from_consultation(cls, consultation: Consultation) -> "ConsultationSummary":
        note = consultation.soap_note
        return cls(
            id=consultation.id,
            status=consultation.status,
            created_at=consultation.created_at,
            detected_language=consultation.detected_language,
            chief_complaint=note.subjective.chief_complaint,
            risk_level=note.risk_assessment.level,
            urgency=note.risk_assessment.urgency,
            clinical_signal_count=len(note.clinical_signals),
            approved_at=consultation.approved_at,
        )


class ConsultationListResponse(CamelModel):
    count: int = Field(..., ge=0)
    consultations: List[ConsultationSummary] = Field(default_factory=list)
