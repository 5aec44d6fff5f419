"""
Field extractors for the subjective section.

Every extractor is a pure function over the lower-cased working text (the
translation when one ran, otherwise the raw transcript). The patterns live in
module-level tables so each rule can be tested and extended on its own; table
order is output order.
"""

import re
from datetime import datetime
from typing import Callable, Optional

from models import TimelineEvent, utc_now


NOT_SPECIFIED = "Not specified"
CHIEF_COMPLAINT_FALLBACK = "Patient reports discomfort"


# ── Symptoms (English + transliterated Hindi)
SYMPTOM_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("Headache", re.compile(r"headache|head\s*pain|sir\s*dard", re.I)),
    ("Fever", re.compile(r"fever|temperature|bukhar", re.I)),
    ("Cough", re.compile(r"cough|coughing|khansi", re.I)),
    ("Cold", re.compile(r"cold|runny nose|sardi|nazla", re.I)),
    ("Sore throat", re.compile(r"sore throat|throat pain|gale.*dard", re.I)),
    ("Body ache", re.compile(r"body\s*ache|body\s*pain|badan\s*dard", re.I)),
    ("Nausea", re.compile(r"nausea|vomit|ulti", re.I)),
    ("Dizziness", re.compile(r"dizzy|dizziness|chakkar", re.I)),
    ("Weakness", re.compile(r"weak|weakness|kamzori|thakan", re.I)),
    ("Stomach pain", re.compile(r"stomach\s*pain|abdomen|pet.*dard", re.I)),
    ("Chest pain", re.compile(r"chest\s*pain", re.I)),
    ("Breathing difficulty", re.compile(r"breathing|breath|saans", re.I)),
]


# ── Timeline: every matching row yields one event
TIMELINE_PATTERNS: list[tuple[re.Pattern, Callable[[re.Match], str]]] = [
    (re.compile(r"(\d+)\s*days?\s*ago", re.I), lambda m: f"Started {m.group(1)} days ago"),
    (re.compile(r"(\d+)\s*weeks?\s*ago", re.I), lambda m: f"Started {m.group(1)} weeks ago"),
    (re.compile(r"(\d+)\s*months?\s*ago", re.I), lambda m: f"Started {m.group(1)} months ago"),
    (re.compile(r"since\s*yesterday", re.I), lambda m: "Started yesterday"),
    (re.compile(r"since\s*morning", re.I), lambda m: "Started this morning"),
    (re.compile(r"since\s*evening", re.I), lambda m: "Started this evening"),
    (re.compile(r"for\s*(\d+)\s*days?", re.I), lambda m: f"Duration: {m.group(1)} days"),
    (re.compile(r"for\s*(\d+)\s*hours?", re.I), lambda m: f"Duration: {m.group(1)} hours"),
    (re.compile(r"today", re.I), lambda m: "Started today"),
]


# ── Severity tiers, tested in this order
SEVERITY_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("Severe", re.compile(r"severe|very|terrible|unbearable|excruciating|bahut.*zyada", re.I)),
    ("Moderate", re.compile(r"moderate|medium", re.I)),
    ("Mild", re.compile(r"mild|slight|light|minor|halka", re.I)),
]


# ── Onset, first match wins
ONSET_PATTERNS: list[tuple[re.Pattern, Callable[[re.Match], str]]] = [
    (re.compile(r"yesterday|kal", re.I), lambda m: "Yesterday"),
    (re.compile(r"today|aaj", re.I), lambda m: "Today"),
    (re.compile(r"(\d+)\s*days?\s*ago", re.I), lambda m: f"{m.group(1)} days ago"),
    (re.compile(r"(\d+)\s*weeks?\s*ago", re.I), lambda m: f"{m.group(1)} weeks ago"),
]


DURATION_PATTERN = re.compile(
    r"for\s*(\d+)\s*(day|days|week|weeks|month|months|hour|hours)", re.I
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")


def extract_symptoms(text: str) -> list[str]:
    symptoms = [name for name, pattern in SYMPTOM_PATTERNS if pattern.search(text)]
    # order-preserving de-duplication
    return list(dict.fromkeys(symptoms))


def extract_timeline(text: str, now: Optional[datetime] = None) -> list[TimelineEvent]:
    """
    Collect timeline events in table order.

    Each event is stamped with the capture instant, not with the date the
    patient referred to: "3 days ago" is recorded as an event text only.
    """
    captured_at = now or utc_now()
    events = []
    for pattern, formatter in TIMELINE_PATTERNS:
        match = pattern.search(text)
        if match:
            events.append(TimelineEvent(time=captured_at, event=formatter(match)))
    return events


def extract_severity(text: str) -> str:
    for label, pattern in SEVERITY_PATTERNS:
        if pattern.search(text):
            return label
    return NOT_SPECIFIED


def extract_onset(text: str) -> str:
    for pattern, formatter in ONSET_PATTERNS:
        match = pattern.search(text)
        if match:
            return formatter(match)
    return NOT_SPECIFIED


def extract_duration(text: str) -> str:
    match = DURATION_PATTERN.search(text)
    if match:
        return f"{match.group(1)} {match.group(2)}"
    return NOT_SPECIFIED


def build_chief_complaint(symptoms: list[str]) -> str:
    """First three symptoms, comma separated."""
    if symptoms:
        return ", ".join(symptoms[:3])
    return CHIEF_COMPLAINT_FALLBACK


def summarize_history(text: str) -> str:
    """First non-empty sentence of the text, trimmed."""
    for sentence in SENTENCE_SPLIT.split(text):
        if sentence.strip():
            return sentence.strip()
    return ""
