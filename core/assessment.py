"""
Assessment and objective-section rules.

Observations and clarifying questions are generated from extracted symptoms,
severity and signals. Observations never come back empty: a note with no
recognised symptoms gets a single non-specific-complaint line.
"""

from models import ClinicalSignal, SignalType, Vitals, format_number


NON_SPECIFIC_OBSERVATION = "Patient presents with non-specific complaints"
PENDING_REVIEW_OBSERVATION = "Differential diagnosis pending physician review and examination"
VITALS_PLACEHOLDER = "To be filled by vitals desk"

# (required symptoms, observation)
OBSERVATION_RULES: list[tuple[frozenset, str]] = [
    (frozenset({"Fever", "Cough"}),
     "Clinical picture consistent with upper respiratory tract infection"),
    (frozenset({"Fever", "Body ache"}), "Viral syndrome under consideration"),
    (frozenset({"Chest pain"}), "URGENT: Chest pain requires immediate cardiac evaluation"),
    (frozenset({"Breathing difficulty"}),
     "URGENT: Respiratory distress - priority assessment required"),
]

QUESTION_RULES: list[tuple[str, list[str]]] = [
    ("Fever", [
        "Have you measured your temperature?",
        "Any chills, sweating, or rigors?",
    ]),
    ("Headache", [
        "Rate pain severity 1-10?",
        "Location: frontal/temporal/occipital?",
        "Any visual disturbances or nausea?",
    ]),
    ("Cough", [
        "Dry or productive (with phlegm)?",
        "Any blood in sputum?",
    ]),
    ("Stomach pain", [
        "Exact location in abdomen?",
        "Relation to meals?",
        "Any vomiting or diarrhea?",
    ]),
    ("Chest pain", [
        "⚠️ URGENT: Radiation to arm/jaw?",
        "⚠️ Any shortness of breath?",
        "⚠️ Immediate ECG needed",
    ]),
]

MEDICATION_TERMS = ("medicine", "tablet", "dawa")


def generate_clarifying_questions(symptoms: list[str], text: str) -> list[str]:
    questions = []
    for symptom, symptom_questions in QUESTION_RULES:
        if symptom in symptoms:
            questions.extend(symptom_questions)

    if not any(term in text for term in MEDICATION_TERMS):
        questions.append("Any medications already taken?")

    if "allergy" not in text:
        questions.append("Known drug allergies?")

    return questions or ["Complete medical history needed"]


def generate_observations(
    symptoms: list[str],
    severity: str,
    signals: list[ClinicalSignal]
) -> list[str]:
    if not symptoms:
        return [NON_SPECIFIC_OBSERVATION]

    present = set(symptoms)
    observations = [text for required, text in OBSERVATION_RULES if required <= present]

    if severity == "Severe":
        observations.append("Severe symptoms reported - prioritize assessment")

    if any(signal.type == SignalType.CRITICAL for signal in signals):
        observations.append("Critical clinical signals detected - see AI analysis above")

    observations.append(PENDING_REVIEW_OBSERVATION)
    return observations


def format_vitals(vitals: Vitals) -> str:
    """
    One labelled segment per recorded vital, joined with " | ".

    Blood pressure needs both readings, and height/weight are shown only as
    a pair.
    """
    parts = []

    if vitals.temperature is not None:
        parts.append(f"Temp: {format_number(vitals.temperature)}°F")

    if vitals.blood_pressure_systolic is not None and vitals.blood_pressure_diastolic is not None:
        parts.append(
            f"BP: {format_number(vitals.blood_pressure_systolic)}/"
            f"{format_number(vitals.blood_pressure_diastolic)} mmHg"
        )

    if vitals.pulse_rate is not None:
        parts.append(f"HR: {format_number(vitals.pulse_rate)} bpm")

    if vitals.respiratory_rate is not None:
        parts.append(f"RR: {format_number(vitals.respiratory_rate)} /min")

    if vitals.oxygen_saturation is not None:
        parts.append(f"SpO2: {format_number(vitals.oxygen_saturation)}%")

    if vitals.height is not None and vitals.weight is not None:
        parts.append(f"Ht: {format_number(vitals.height)}cm, Wt: {format_number(vitals.weight)}kg")

    if vitals.bmi is not None:
        parts.append(f"BMI: {format_number(vitals.bmi)}")

    return " | ".join(parts) if parts else VITALS_PLACEHOLDER
