"""
Consistency checking by keyword co-occurrence.

Each rule pairs an affirmative pattern with a negating pattern for the same
concept and fires only when both appear somewhere in the transcript. This is
not a negation parser: "no fever" alone also matches the affirmative
"fever", so a bare denial is reported as a contradiction. Doctors see these
as prompts to clarify, not as findings.
"""

import logging
import re
from typing import NamedTuple, Optional

from models import ConsistencyIssue, IssueSeverity, SOAPNote


# Set up module logger
logger = logging.getLogger(__name__)


class ConsistencyRule(NamedTuple):
    name: str
    affirmative: re.Pattern
    negating: re.Pattern
    template: ConsistencyIssue


CONSISTENCY_RULES: list[ConsistencyRule] = [
    ConsistencyRule(
        name="fever",
        affirmative=re.compile(r"fever|temperature|hot|chills", re.I),
        negating=re.compile(r"no fever|no temperature|afebrile", re.I),
        template=ConsistencyIssue(
            severity=IssueSeverity.HIGH,
            type="Contradiction",
            issue="Conflicting fever information",
            context="Patient both mentioned having fever and denied fever",
            suggestion="Clarify current fever status and obtain temperature measurement",
        ),
    ),
    ConsistencyRule(
        name="pain",
        affirmative=re.compile(r"pain|hurt|ache", re.I),
        negating=re.compile(r"no pain|pain free|doesn't hurt", re.I),
        template=ConsistencyIssue(
            severity=IssueSeverity.MEDIUM,
            type="Contradiction",
            issue="Conflicting pain information",
            context="Contradictory statements about pain presence",
            suggestion="Verify exact location and nature of pain",
        ),
    ),
    ConsistencyRule(
        name="medication",
        affirmative=re.compile(r"taking.*medicine|on medication|prescribed", re.I),
        negating=re.compile(r"no medicine|not taking|no medication", re.I),
        template=ConsistencyIssue(
            severity=IssueSeverity.HIGH,
            type="Medication Conflict",
            issue="Unclear medication history",
            context="Conflicting information about current medications",
            suggestion="Obtain complete and accurate medication list",
        ),
    ),
    ConsistencyRule(
        name="timeline",
        affirmative=re.compile(r"today|yesterday|this morning", re.I),
        negating=re.compile(r"weeks ago|months ago|long time", re.I),
        template=ConsistencyIssue(
            severity=IssueSeverity.MEDIUM,
            type="Timeline Inconsistency",
            issue="Unclear symptom timeline",
            context="Multiple different time references provided",
            suggestion="Establish clear chronological sequence of events",
        ),
    ),
]


def check_consistency(transcript: str, note: Optional[SOAPNote] = None) -> list[ConsistencyIssue]:
    """Return one issue per rule whose two patterns both match."""
    text = (transcript or "").lower()
    issues = []
    for rule in CONSISTENCY_RULES:
        if rule.affirmative.search(text) and rule.negating.search(text):
            logger.debug(f"Consistency rule fired: {rule.name}")
            issues.append(rule.template.model_copy(deep=True))
    return issues
