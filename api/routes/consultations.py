"""
Consultation Endpoints
======================

Submission of recorded consultations and the doctor review workflow.

Endpoints:
- POST /consultations                        - Submit transcript, get draft note
- GET  /consultations                        - Dashboard list
- GET  /consultations/{id}                   - Full consultation
- PUT  /consultations/{id}/soap-note         - Save doctor edits (draft only)
- POST /consultations/{id}/approve           - Approve (optionally with final edits)
- POST /consultations/{id}/reject            - Reject with reason
- POST /consultations/{id}/send-to-pharmacy  - Approved notes with prescriptions
- POST /consultations/{id}/send-to-patient   - Approved notes
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, status

from api.dependencies import get_pipeline, get_consultation_store
from api.middleware.rate_limiter import limiter, submission_rate_limit
from api.models.requests import (
    SubmitConsultationRequest,
    UpdateSOAPNoteRequest,
    ApproveConsultationRequest,
    RejectConsultationRequest,
)
from api.models.responses import ConsultationListResponse, ConsultationSummary
from api.services.consultation_store import ConsultationStore
from models import Consultation
from pipeline import ClinicalNotePipeline


# Set up module logger
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/consultations",
    response_model=Consultation,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a recorded consultation",
)
@limiter.limit(submission_rate_limit)
async def submit_consultation(
    request: Request,
    payload: SubmitConsultationRequest,
    pipeline: ClinicalNotePipeline = Depends(get_pipeline),
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    """
    Assemble a draft SOAP note from the transcript, pain locations and vitals.

    BMI is derived from height and weight when not supplied.
    """
    vitals = payload.vitals
    if vitals.bmi is None:
        vitals = vitals.with_computed_bmi()

    consultation = await pipeline.aprocess(
        payload.transcript,
        pain_locations=payload.pain_locations,
        vitals=vitals,
    )
    risk = consultation.soap_note.risk_assessment
    logger.info(
        f"[{consultation.id}] Draft note created "
        f"(language: {consultation.detected_language.value}, risk: {risk.level.value})"
    )
    return store.add(consultation)


@router.get(
    "/consultations",
    response_model=ConsultationListResponse,
    summary="List consultations",
)
async def list_consultations(
    store: ConsultationStore = Depends(get_consultation_store),
) -> ConsultationListResponse:
    summaries = [ConsultationSummary.from_consultation(c) for c in store.list()]
    return ConsultationListResponse(count=len(summaries), consultations=summaries)


@router.get(
    "/consultations/{consultation_id}",
    response_model=Consultation,
    summary="Get a consultation",
)
async def get_consultation(
    consultation_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    return store.get(consultation_id)


@router.put(
    "/consultations/{consultation_id}/soap-note",
    response_model=Consultation,
    summary="Save doctor edits to a draft note",
)
async def update_soap_note(
    consultation_id: str,
    payload: UpdateSOAPNoteRequest,
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    return store.update_soap_note(consultation_id, payload.soap_note)


@router.post(
    "/consultations/{consultation_id}/approve",
    response_model=Consultation,
    summary="Approve a draft note",
)
async def approve_consultation(
    consultation_id: str,
    payload: Optional[ApproveConsultationRequest] = Body(default=None),
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    soap_note = payload.soap_note if payload else None
    return store.approve(consultation_id, soap_note)


@router.post(
    "/consultations/{consultation_id}/reject",
    response_model=Consultation,
    summary="Reject a draft note",
)
async def reject_consultation(
    consultation_id: str,
    payload: RejectConsultationRequest,
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    return store.reject(consultation_id, payload.reason)


@router.post(
    "/consultations/{consultation_id}/send-to-pharmacy",
    response_model=Consultation,
    summary="Send an approved prescription to the pharmacy",
)
async def send_to_pharmacy(
    consultation_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    return store.send_to_pharmacy(consultation_id)


@router.post(
    "/consultations/{consultation_id}/send-to-patient",
    response_model=Consultation,
    summary="Send the approved note to the patient",
)
async def send_to_patient(
    consultation_id: str,
    store: ConsultationStore = Depends(get_consultation_store),
) -> Consultation:
    return store.send_to_patient(consultation_id)
