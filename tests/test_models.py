"""
Domain model tests.
"""

import pytest
from pydantic import ValidationError

from models import (
    Consultation,
    ConsultationStatus,
    PainLocation,
    PatientEducation,
    RiskLevel,
    Vitals,
    format_number,
)


class TestVitals:
    def test_bmi_from_height_and_weight(self):
        vitals = Vitals(height=170, weight=65).with_computed_bmi()
        assert vitals.bmi == 22.5

    def test_bmi_needs_both_measurements(self):
        assert Vitals(height=170).with_computed_bmi().bmi is None
        assert Vitals(weight=65).with_computed_bmi().bmi is None

    def test_with_computed_bmi_returns_copy(self):
        original = Vitals(height=180, weight=81)
        computed = original.with_computed_bmi()
        assert computed.bmi == 25.0
        assert original.bmi is None

    def test_is_empty(self):
        assert Vitals().is_empty()
        assert not Vitals(pulse_rate=0).is_empty()

    def test_height_must_be_positive(self):
        with pytest.raises(ValidationError):
            Vitals(height=0)


@pytest.mark.parametrize("value,expected", [
    (120.0, "120"),
    (98.6, "98.6"),
    (0, "0"),
    (22.5, "22.5"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_patient_education_blank_by_default():
    assert PatientEducation().is_blank


def test_formatted_string(pipeline):
    note = pipeline.assemble(
        "I have had a fever and cough for 3 days, it is getting worse",
        pain_locations=[PainLocation(id="chest", label="Chest")],
    )
    text = note.to_formatted_string()

    for heading in ("SOAP NOTE", "SUBJECTIVE", "OBJECTIVE", "ASSESSMENT", "PLAN", "ANALYSIS"):
        assert heading in text
    assert "Chief complaint: Fever, Cough" in text
    assert "Pain locations: Chest" in text
    assert "Progressive symptom worsening" in text
    assert "Risk: MEDIUM (score 4)" in text


def test_consultation_serialises_enums_as_values(pipeline):
    consultation = pipeline.process("I have chest pain")
    data = consultation.model_dump(mode="json")

    assert data["status"] == "draft"
    assert data["soap_note"]["risk_assessment"]["level"] == RiskLevel.HIGH.value
    assert data["soap_note"]["clinical_signals"][0]["type"] == "CRITICAL"

    restored = Consultation.model_validate(data)
    assert restored.status == ConsultationStatus.DRAFT
    assert restored.soap_note == consultation.soap_note


def test_wire_format_is_camel_case(pipeline):
    consultation = pipeline.process("I have chest pain", vitals=Vitals(pulse_rate=88))
    data = consultation.model_dump(mode="json", by_alias=True)

    assert data["detectedLanguage"] == "en"
    assert data["vitals"]["pulseRate"] == 88
    assert data["soapNote"]["subjective"]["chiefComplaint"] == "Chest pain"
    assert data["soapNote"]["riskAssessment"]["level"] == "HIGH"
    assert data["sentToPharmacyAt"] is None

    restored = Consultation.model_validate(data)
    assert restored.vitals.pulse_rate == 88
    assert restored.soap_note == consultation.soap_note


def test_vitals_accept_either_spelling():
    assert Vitals(oxygenSaturation=97).oxygen_saturation == 97
    assert Vitals(oxygen_saturation=97).oxygen_saturation == 97
