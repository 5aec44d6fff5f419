"""
API endpoint tests.

The app's pipeline is swapped for one with a MockTranslator once the
lifespan has run, so no request reaches the translation service.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app, app_state
from api.middleware.rate_limiter import limiter
from api.services.consultation_store import ConsultationStore
from config import get_settings
from core.translator import MockTranslator
from pipeline import ClinicalNotePipeline


BASE = "/api/v1"

FEVER_COUGH = {
    "transcript": "I have had a fever and cough for 3 days, it is getting worse",
    "painLocations": [{"id": "chest", "label": "Chest"}],
    "vitals": {"temperature": 101.2, "height": 170, "weight": 65},
}


@pytest.fixture
def client(settings):
    """Create a test client with an isolated store and offline translator."""
    limiter.reset()
    with TestClient(app) as test_client:
        app_state["pipeline"] = ClinicalNotePipeline(
            settings=settings,
            translator=MockTranslator(translation="I have fever"),
        )
        app_state["consultation_store"] = ConsultationStore()
        yield test_client


@pytest.fixture
def draft(client):
    response = client.post(f"{BASE}/consultations", json=FEVER_COUGH)
    assert response.status_code == 201
    return response.json()


def prescribed(note, text="Paracetamol 500mg three times daily"):
    note["plan"]["prescriptions"] = text
    return note


# =============================================================================
# Root and health
# =============================================================================

def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/api/v1/health"


def test_health_endpoint(client):
    response = client.get(f"{BASE}/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert set(data["services"]) == {"api", "pipeline", "translator", "consultation_store"}
    assert "cpu_percent" in data["system_metrics"]
    assert data["timestamp"].endswith("Z")


def test_health_reports_disabled_translation(client, settings):
    app_state["pipeline"] = ClinicalNotePipeline(
        settings=settings.model_copy(update={"enable_translation": False}),
        translator=MockTranslator(),
    )
    data = client.get(f"{BASE}/health").json()
    assert data["status"] == "degraded"
    assert data["services"]["translator"]["status"] == "degraded"


def test_readiness_and_liveness(client):
    assert client.get(f"{BASE}/health/ready").json()["status"] == "ready"
    assert client.get(f"{BASE}/health/live").json()["status"] == "alive"


def test_not_ready_without_pipeline(client):
    app_state["pipeline"] = None
    assert client.get(f"{BASE}/health/ready").status_code == 503


# =============================================================================
# Submission
# =============================================================================

def test_submit_consultation(draft):
    assert draft["status"] == "draft"
    assert draft["detectedLanguage"] == "en"
    assert draft["vitals"]["bmi"] == 22.5
    note = draft["soapNote"]
    assert note["subjective"]["symptoms"] == ["Fever", "Cough"]
    assert note["subjective"]["painLocations"] == [{"id": "chest", "label": "Chest"}]
    assert note["objective"]["vitals"] == "Temp: 101.2°F | Ht: 170cm, Wt: 65kg | BMI: 22.5"
    assert note["riskAssessment"]["level"] == "MEDIUM"


def test_responses_use_camel_case_keys(draft):
    assert {"createdAt", "detectedLanguage", "soapNote", "approvedByDoctor"} <= set(draft)
    assert "detected_language" not in draft
    note = draft["soapNote"]
    assert set(note["metadata"]) == {"detectedLanguage", "originalText", "translatedText"}
    assert "chiefComplaint" in note["subjective"]
    assert "clinicalImplication" in note["clinicalSignals"][0]
    assert "stressLevel" in note["emotionAnalysis"]


def test_submit_accepts_snake_case_fields(client):
    payload = {
        "transcript": "I have fever",
        "pain_locations": [{"id": "head", "label": "Head"}],
        "vitals": {"blood_pressure_systolic": 120, "blood_pressure_diastolic": 80},
    }
    response = client.post(f"{BASE}/consultations", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["painLocations"] == [{"id": "head", "label": "Head"}]
    assert data["vitals"]["bloodPressureSystolic"] == 120
    assert data["soapNote"]["objective"]["vitals"] == "BP: 120/80 mmHg"


def test_submit_keeps_supplied_bmi(client):
    payload = {"transcript": "I have fever", "vitals": {"height": 170, "weight": 65, "bmi": 30}}
    response = client.post(f"{BASE}/consultations", json=payload)
    assert response.json()["vitals"]["bmi"] == 30


def test_submit_hindi(client):
    response = client.post(f"{BASE}/consultations", json={"transcript": "मुझे बुखार है"})
    assert response.status_code == 201
    data = response.json()
    assert data["detectedLanguage"] == "hi"
    assert data["soapNote"]["metadata"]["originalText"] == "मुझे बुखार है"
    assert data["soapNote"]["metadata"]["translatedText"] == "I have fever"
    assert data["soapNote"]["subjective"]["symptoms"] == ["Fever"]


@pytest.mark.parametrize("transcript", ["", "   "])
def test_blank_transcript_is_rejected(client, transcript):
    response = client.post(f"{BASE}/consultations", json={"transcript": transcript})
    assert response.status_code == 422
    assert client.get(f"{BASE}/consultations").json()["count"] == 0


def test_submission_rate_limit(client, monkeypatch):
    monkeypatch.setenv("CONSULTSCRIBE_SUBMISSION_RATE_LIMIT", "2/minute")
    get_settings.cache_clear()
    try:
        codes = [
            client.post(f"{BASE}/consultations", json={"transcript": "fever"}).status_code
            for _ in range(3)
        ]
    finally:
        get_settings.cache_clear()
    assert codes == [201, 201, 429]


# =============================================================================
# Listing and retrieval
# =============================================================================

def test_list_consultations(client, draft):
    client.post(f"{BASE}/consultations", json={"transcript": "I have chest pain"})

    data = client.get(f"{BASE}/consultations").json()

    assert data["count"] == 2
    first, second = data["consultations"]
    assert first["id"] == draft["id"]
    assert first["chiefComplaint"] == "Fever, Cough"
    assert first["clinicalSignalCount"] == 1
    assert second["riskLevel"] == "HIGH"


def test_get_consultation(client, draft):
    response = client.get(f"{BASE}/consultations/{draft['id']}")
    assert response.status_code == 200
    assert response.json() == draft


def test_unknown_consultation(client):
    response = client.get(f"{BASE}/consultations/missing")
    assert response.status_code == 404
    body = response.json()
    assert body["error_type"] == "ConsultationNotFoundError"
    assert body["details"] == {"consultation_id": "missing"}


# =============================================================================
# Review workflow
# =============================================================================

def test_edit_draft_note(client, draft):
    note = draft["soapNote"]
    note["plan"]["recommendations"] = "Rest and fluids"

    response = client.put(f"{BASE}/consultations/{draft['id']}/soap-note", json={"soapNote": note})

    assert response.status_code == 200
    assert response.json()["soapNote"]["plan"]["recommendations"] == "Rest and fluids"


def test_approve_with_edits_and_send(client, draft):
    url = f"{BASE}/consultations/{draft['id']}"

    response = client.post(f"{url}/approve", json={"soapNote": prescribed(draft["soapNote"])})
    assert response.status_code == 200
    approved = response.json()
    assert approved["status"] == "approved"
    assert approved["approvedByDoctor"] is True

    response = client.post(f"{url}/send-to-pharmacy")
    assert response.status_code == 200
    assert response.json()["sentToPharmacy"] is True

    response = client.post(f"{url}/send-to-patient")
    assert response.status_code == 200
    assert response.json()["sentToPatient"] is True


def test_approve_without_body(client, draft):
    response = client.post(f"{BASE}/consultations/{draft['id']}/approve")
    assert response.status_code == 200
    assert response.json()["soapNote"] == draft["soapNote"]


def test_pharmacy_requires_prescription(client, draft):
    url = f"{BASE}/consultations/{draft['id']}"
    client.post(f"{url}/approve")

    response = client.post(f"{url}/send-to-pharmacy")

    assert response.status_code == 400
    assert response.json()["message"] == "Please enter prescriptions before sending to pharmacy"


def test_sending_draft_is_conflict(client, draft):
    response = client.post(f"{BASE}/consultations/{draft['id']}/send-to-patient")
    assert response.status_code == 409
    assert response.json()["error_type"] == "InvalidStatusTransitionError"


def test_reject(client, draft):
    url = f"{BASE}/consultations/{draft['id']}"

    response = client.post(f"{url}/reject", json={"reason": "Transcript belongs to another patient"})
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["rejectionReason"] == "Transcript belongs to another patient"

    assert client.post(f"{url}/approve").status_code == 409
    assert client.put(f"{url}/soap-note", json={"soapNote": draft["soapNote"]}).status_code == 409


@pytest.mark.parametrize("body", [{}, {"reason": ""}, {"reason": "  "}])
def test_reject_needs_reason(client, draft, body):
    response = client.post(f"{BASE}/consultations/{draft['id']}/reject", json=body)
    assert response.status_code == 422


def test_approve_twice_is_conflict(client, draft):
    url = f"{BASE}/consultations/{draft['id']}/approve"
    assert client.post(url).status_code == 200
    assert client.post(url).status_code == 409
