"""
Consultation Store
==================

In-memory consultation list and doctor review workflow.

Nothing is persisted: consultations live as long as the process. Each stored
note is a copy, and every edit replaces the stored note with a new validated
SOAPNote, so the note the pipeline returned is never mutated.

Review workflow:
    draft ──approve──▶ approved ──send_to_pharmacy / send_to_patient
      └────reject───▶ rejected
"""

import logging
from typing import Dict, List, Optional

from models import Consultation, ConsultationStatus, Plan, SOAPNote, utc_now
from exceptions import (
    ConsultationNotFoundError,
    InvalidStatusTransitionError,
    MissingPrescriptionError,
)


# Set up module logger
logger = logging.getLogger(__name__)

PRESCRIPTION_PLACEHOLDER = Plan().prescriptions


class ConsultationStore:
    """Keeps consultations in insertion order, newest last."""

    def __init__(self):
        self._consultations: Dict[str, Consultation] = {}

    def __len__(self) -> int:
        return len(self._consultations)

    def add(self, consultation: Consultation) -> Consultation:
        stored = consultation.model_copy(deep=True)
        self._consultations[stored.id] = stored
        logger.info(f"[{stored.id}] Consultation stored (status: {stored.status.value})")
        return stored

    def list(self) -> List[Consultation]:
        return list(self._consultations.values())

    def get(self, consultation_id: str) -> Consultation:
        consultation = self._consultations.get(consultation_id)
        if consultation is None:
            raise ConsultationNotFoundError(consultation_id)
        return consultation

    def update_soap_note(self, consultation_id: str, soap_note: SOAPNote) -> Consultation:
        """Save doctor edits. Only drafts can be edited."""
        consultation = self._require_status(consultation_id, ConsultationStatus.DRAFT, "edit")
        return self._update(consultation, soap_note=soap_note.model_copy(deep=True))

    def approve(
        self,
        consultation_id: str,
        soap_note: Optional[SOAPNote] = None
    ) -> Consultation:
        """
        Approve a draft, optionally saving a final edited note with it.

        Approval locks the note and enables sending to pharmacy and patient.
        """
        consultation = self._require_status(consultation_id, ConsultationStatus.DRAFT, "approve")
        updates = {
            "status": ConsultationStatus.APPROVED,
            "approved_by_doctor": True,
            "approved_at": utc_now(),
        }
        if soap_note is not None:
            updates["soap_note"] = soap_note.model_copy(deep=True)
        return self._update(consultation, **updates)

    def reject(self, consultation_id: str, reason: str) -> Consultation:
        consultation = self._require_status(consultation_id, ConsultationStatus.DRAFT, "reject")
        return self._update(
            consultation,
            status=ConsultationStatus.REJECTED,
            rejection_reason=reason.strip(),
            rejected_at=utc_now(),
        )

    def send_to_pharmacy(self, consultation_id: str) -> Consultation:
        consultation = self._require_status(
            consultation_id, ConsultationStatus.APPROVED, "send to pharmacy"
        )
        prescriptions = consultation.soap_note.plan.prescriptions.strip()
        if not prescriptions or prescriptions == PRESCRIPTION_PLACEHOLDER:
            raise MissingPrescriptionError(consultation_id)
        return self._update(consultation, sent_to_pharmacy=True, sent_to_pharmacy_at=utc_now())

    def send_to_patient(self, consultation_id: str) -> Consultation:
        consultation = self._require_status(
            consultation_id, ConsultationStatus.APPROVED, "send to patient"
        )
        return self._update(consultation, sent_to_patient=True, sent_to_patient_at=utc_now())

    def _require_status(
        self,
        consultation_id: str,
        required: ConsultationStatus,
        action: str
    ) -> Consultation:
        consultation = self.get(consultation_id)
        if consultation.status != required:
            raise InvalidStatusTransitionError(
                consultation_id=consultation_id,
                current_status=consultation.status.value,
                action=action,
            )
        return consultation

    def _update(self, consultation: Consultation, **updates) -> Consultation:
        updated = consultation.model_copy(update=updates)
        self._consultations[updated.id] = updated
        logger.info(f"[{updated.id}] Consultation updated: {sorted(updates)}")
        return updated
