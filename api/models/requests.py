"""
API Request Models
==================

Pydantic models for API request validation.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import List, Optional

from models import CamelModel, PainLocation, SOAPNote, Vitals


class SubmitConsultationRequest(CamelModel):
    """Request model for submitting a recorded consultation."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "transcript": "I have had a fever and cough for 3 days, it is getting worse",
                "painLocations": [{"id": "chest", "label": "Chest"}],
                "vitals": {
                    "temperature": 101.2,
                    "bloodPressureSystolic": 120,
                    "bloodPressureDiastolic": 80,
                    "pulseRate": 92
                }
            }
        }
    )

    transcript: str = Field(
        ...,
        description="Speech-to-text transcript of the consultation",
        min_length=1
    )
    pain_locations: List[PainLocation] = Field(
        default_factory=list,
        description="Body locations picked by the patient"
    )
    vitals: Vitals = Field(
        default_factory=Vitals,
        description="Vitals recorded at the desk; BMI is derived when missing"
    )

    @field_validator('transcript')
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Transcript is empty. Record the consultation before submitting.")
        return v


class UpdateSOAPNoteRequest(CamelModel):
    """Doctor-edited SOAP note replacing the stored one."""

    soap_note: SOAPNote


class ApproveConsultationRequest(CamelModel):
    """Approval, optionally carrying the final edited note."""

    soap_note: Optional[SOAPNote] = Field(
        default=None,
        description="Final edited note; the stored note is kept when omitted"
    )


class RejectConsultationRequest(CamelModel):
    """Rejection with a mandatory reason."""

    reason: str = Field(..., min_length=1, description="Why the note was rejected")

    @field_validator('reason')
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("A rejection reason is required")
        return v
