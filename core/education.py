"""
Patient education content.

A lookup table from symptom combinations to fixed, bilingual content blocks.
The first entry whose symptoms are all present wins. Adding a condition
means adding an EducationEntry, nothing else.
"""

from typing import NamedTuple

from models import Language, PatientEducation, SOAPNote


class EducationContent(NamedTuple):
    condition: str
    explanation: str
    what_to_do: list[str]
    what_to_avoid: list[str]
    when_to_return: list[str]


class EducationEntry(NamedTuple):
    required_symptoms: frozenset
    content: dict  # Language -> EducationContent


EDUCATION_TABLE: list[EducationEntry] = [
    EducationEntry(
        required_symptoms=frozenset({"Fever", "Cough"}),
        content={
            Language.ENGLISH: EducationContent(
                condition="Likely Upper Respiratory Tract Infection",
                explanation=(
                    "This is commonly caused by viruses or bacteria and typically "
                    "resolves in 5-7 days with proper care."
                ),
                what_to_do=[
                    "Take prescribed medications regularly",
                    "Drink plenty of fluids (8-10 glasses daily)",
                    "Get adequate rest and sleep",
                    "Consume warm liquids (soup, tea)",
                ],
                what_to_avoid=[
                    "Avoid cold drinks and ice cream",
                    "No smoking",
                    "Avoid strenuous exercise",
                ],
                when_to_return=[
                    "Fever persists beyond 3 days",
                    "Breathing difficulty develops",
                    "No improvement with medication",
                ],
            ),
            Language.HINDI: EducationContent(
                condition="संभावित श्वसन संक्रमण",
                explanation=(
                    "यह वायरस या बैक्टीरिया के कारण होता है और आमतौर पर "
                    "5-7 दिनों में ठीक हो जाता है।"
                ),
                what_to_do=[
                    "डॉक्टर द्वारा निर्धारित दवाएं नियमित रूप से लें",
                    "खूब पानी और तरल पदार्थ पिएं",
                    "पर्याप्त आराम करें",
                    "गर्म तरल पदार्थ (सूप, चाय) लें",
                ],
                what_to_avoid=[
                    "ठंडे पेय और आइसक्रीम से बचें",
                    "धूम्रपान न करें",
                    "भारी व्यायाम से बचें",
                ],
                when_to_return=[
                    "बुखार 3 दिन से अधिक रहे",
                    "सांस लेने में कठिनाई हो",
                    "लक्षणों में सुधार न हो",
                ],
            ),
        },
    ),
]


def generate_patient_education(note: SOAPNote, language: Language = Language.ENGLISH) -> PatientEducation:
    """
    Look up education content for the note's symptoms.

    Returns blank fields (with `language` set) when no entry matches.
    """
    language = Language(language)
    symptoms = set(note.subjective.symptoms)

    for entry in EDUCATION_TABLE:
        if entry.required_symptoms <= symptoms:
            content = entry.content.get(language, entry.content[Language.ENGLISH])
            return PatientEducation(
                condition=content.condition,
                explanation=content.explanation,
                what_to_do=list(content.what_to_do),
                what_to_avoid=list(content.what_to_avoid),
                when_to_return=list(content.when_to_return),
                language=language,
            )

    return PatientEducation(language=language)
