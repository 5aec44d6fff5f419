"""
Language detection by script inspection.

A transcript is treated as Hindi when it contains any Devanagari character
(U+0900 to U+097F). Transliterated Hindi written in Latin script is reported
as English; the symptom tables carry transliterated terms for that case.
"""

import re

from models import Language


DEVANAGARI_PATTERN = re.compile("[\u0900-\u097F]")


def detect_language(text: str) -> Language:
    """Return Language.HINDI if any Devanagari character is present."""
    if DEVANAGARI_PATTERN.search(text or ""):
        return Language.HINDI
    return Language.ENGLISH
