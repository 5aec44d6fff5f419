"""
Patient education tests.
"""

from core.education import generate_patient_education
from models import Language


def test_fever_and_cough_in_english(make_note):
    education = generate_patient_education(make_note(symptoms=["Fever", "Cough", "Cold"]))
    assert education.condition == "Likely Upper Respiratory Tract Infection"
    assert education.language == Language.ENGLISH
    assert "Drink plenty of fluids (8-10 glasses daily)" in education.what_to_do
    assert education.what_to_avoid == [
        "Avoid cold drinks and ice cream",
        "No smoking",
        "Avoid strenuous exercise",
    ]
    assert len(education.when_to_return) == 3
    assert not education.is_blank


def test_fever_and_cough_in_hindi(make_note):
    education = generate_patient_education(make_note(symptoms=["Fever", "Cough"]), Language.HINDI)
    assert education.condition == "संभावित श्वसन संक्रमण"
    assert education.language == Language.HINDI
    assert education.what_to_avoid[1] == "धूम्रपान न करें"


def test_language_accepts_code(make_note):
    education = generate_patient_education(make_note(symptoms=["Fever", "Cough"]), "hi")
    assert education.language == Language.HINDI


def test_no_match_is_blank(make_note):
    education = generate_patient_education(make_note(symptoms=["Fever"]), Language.HINDI)
    assert education.is_blank
    assert education.condition == ""
    assert education.what_to_do == []
    assert education.language == Language.HINDI


def test_content_lists_are_not_shared(make_note):
    first = generate_patient_education(make_note(symptoms=["Fever", "Cough"]))
    first.what_to_do.append("edited")
    second = generate_patient_education(make_note(symptoms=["Fever", "Cough"]))
    assert "edited" not in second.what_to_do
