"""
Extraction grammar for narrative assessments.

Rules, in order:

(a) requirement phrases, case-insensitive; affirmative phrases are
    checked before negative ones
(b) design type labels "Type V" .. "Type I", most specific numeral first,
    matched on word boundaries so "Type I" never matches inside "Type II"
(c) anything else leaves both fields unset; the raw text is kept
"""

import re
from typing import Optional, Tuple

from components.intake.models import DesignType
from components.narrative.models import NarrativeVerdict

AFFIRMATIVE_PHRASES = ("MT Required: Yes", "MT is required", "requires an MT")
NEGATIVE_PHRASES = ("MT Required: No", "MT is not required")

_DESIGN_TYPE_PATTERNS = tuple(
    (design_type, re.compile(rf"\bType\s+{design_type.name}\b", re.IGNORECASE))
    for design_type in (DesignType.V, DesignType.IV, DesignType.III, DesignType.II, DesignType.I)
)


def _phrase_pattern(phrase: str) -> "re.Pattern[str]":
    # Flexible whitespace, whole words at both ends
    words = [re.escape(word) for word in phrase.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


_REQUIREMENT_PATTERNS = tuple(
    (phrase, _phrase_pattern(phrase), True) for phrase in AFFIRMATIVE_PHRASES
) + tuple((phrase, _phrase_pattern(phrase), False) for phrase in NEGATIVE_PHRASES)


def extract_required_flag(text: str) -> Tuple[Optional[bool], Optional[str]]:
    """Return (flag, matched phrase) for the first requirement phrase found."""
    for phrase, pattern, flag in _REQUIREMENT_PATTERNS:
        if pattern.search(text):
            return flag, phrase
    return None, None


def extract_design_type(text: str) -> Optional[DesignType]:
    """Return the first design type label found, checking V before I."""
    for design_type, pattern in _DESIGN_TYPE_PATTERNS:
        if pattern.search(text):
            return design_type
    return None


def extract_verdict(text: Optional[str]) -> NarrativeVerdict:
    """Parse provider prose into a NarrativeVerdict."""
    raw = text or ""
    flag, phrase = extract_required_flag(raw)
    return NarrativeVerdict(
        explicit_required_flag=flag,
        extracted_design_type=extract_design_type(raw),
        raw_text=raw,
        matched_phrase=phrase,
    )
