"""
Keyword signals and reason text.

Signals are detected over the lowercased change text plus the top
equipment label. Each design type has a requirement heuristic and a set
of reason sentences; signal-specific sentences are appended when the
signal is present.
"""

from typing import Callable, Dict, List

from components.base import KeywordPattern
from components.intake.models import DesignType

SAFETY_SIGNIFICANT = KeywordPattern.any_of(
    "emergency",
    "safety",
    "reactor protection",
    "engineered safety",
    "emergency core cooling",
    "diesel generator",
    "emergency power",
    "containment",
    "safety system",
    "protection system",
    "emergency shutdown",
    "safety-related",
    "safety significant",
    "class 1e",
)

CRITICAL_SAFETY = KeywordPattern.any_of(
    "reactor protection",
    "emergency core cooling",
    "containment isolation",
    "emergency shutdown",
    "safety-related",
    "class 1e",
)

DIGITAL_UPGRADE = KeywordPattern.any_of(
    "digital",
    "analog to digital",
    "control system",
    "monitoring system",
    "plc",
    "dcs",
    "scada",
)

ENVIRONMENTAL = KeywordPattern.any_of(
    "discharge",
    "emission",
    "effluent",
    "waste",
    "environmental",
    "stack",
    "cooling water",
    "thermal",
    "chemical discharge",
)

SEISMIC = KeywordPattern.any_of(
    "seismic",
    "earthquake",
    "seismic category i",
    "seismic class",
    "reactor building",
    "containment",
    "auxiliary building",
    "safety-related structure",
)


# Whether a design type requires an MT, given the signal text
REQUIREMENT_HEURISTICS: Dict[DesignType, Callable[[str], bool]] = {
    DesignType.I: lambda text: True,
    DesignType.II: lambda text: True,
    DesignType.III: lambda text: True,
    DesignType.IV: SAFETY_SIGNIFICANT.matches,
    DesignType.V: CRITICAL_SAFETY.matches,
}


def requirement_for(design_type: DesignType, signal_text: str) -> bool:
    return REQUIREMENT_HEURISTICS[design_type](signal_text)


REQUIRED_SENTENCES: Dict[DesignType, List[str]] = {
    DesignType.I: [
        "Type I (New Design) - Major modification introducing new functionality requires "
        "comprehensive MT documentation per 10 CFR 50.59(c)(2)",
        "New design must demonstrate compliance with General Design Criteria and applicable "
        "codes/standards",
    ],
    DesignType.II: [
        "Type II (Modification) - Changes to existing system functionality require engineering "
        "analysis and documentation",
        "Must evaluate impact on accident analysis and Technical Specifications per 10 CFR 50.59",
    ],
    DesignType.III: [
        "Type III (Non-Identical Replacement) - Different form, fit, or function requires design "
        "verification",
        "Non-identical replacement may affect safety function performance and requires 50.59 "
        "evaluation",
    ],
    DesignType.IV: [
        "Type IV (Temporary Modification) - Despite temporary nature, safety impact requires "
        "documented analysis",
        "Temporary modifications affecting safety systems require engineering justification and "
        "controls",
    ],
    DesignType.V: [
        "Type V (Identical Replacement) - Safety-critical equipment requires verification of "
        "continued suitability",
    ],
}

# (signal, sentences) appended to a "required" reason when the signal is present
SIGNAL_SENTENCES = (
    (
        SAFETY_SIGNIFICANT,
        [
            "Safety-significant equipment modification requires comprehensive engineering "
            "analysis per ASME NQA-1 and 10 CFR 50 Appendix B",
            "Changes to safety-related systems must demonstrate continued compliance with design "
            "basis requirements",
        ],
    ),
    (
        DIGITAL_UPGRADE,
        [
            "Digital system implementation requires cybersecurity evaluation per RG 5.71 and "
            "software verification per IEEE 7-4.3.2",
            "Digital upgrades may introduce new failure modes requiring updated probabilistic "
            "risk assessment",
        ],
    ),
    (
        ENVIRONMENTAL,
        ["Environmental impact requires NEPA evaluation and potential Environmental Assessment"],
    ),
    (
        SEISMIC,
        ["Seismic Category I equipment requires seismic qualification per IEEE 344 and ASCE 4"],
    ),
)

REQUIRED_CLOSING = (
    "Documentation ensures regulatory compliance and supports operational safety per facility "
    "Operating License requirements"
)
NOT_REQUIRED_CLOSING = "However, facility-specific procedures may still require engineering evaluation"


def _join(sentences: List[str]) -> str:
    return ". ".join(sentences) + "."


def required_reason(design_type: DesignType, signal_text: str) -> str:
    """Reason text for a change that requires an MT."""
    sentences = list(REQUIRED_SENTENCES[design_type])
    for signal, extra in SIGNAL_SENTENCES:
        if signal.matches(signal_text):
            sentences.extend(extra)
    sentences.append(REQUIRED_CLOSING)
    return _join(sentences)


def not_required_reason(design_type: DesignType, signal_text: str) -> str:
    """Reason text for a change that does not require an MT."""
    sentences: List[str] = []
    if design_type == DesignType.V:
        sentences.append("Type V (Identical Replacement) - No change to form, fit, or function")
        if not CRITICAL_SAFETY.matches(signal_text):
            sentences.append(
                "Non-safety related equipment allows simplified documentation per facility procedures"
            )
    elif design_type == DesignType.IV:
        sentences.append("Type IV (Temporary Modification) with limited duration and scope")
        sentences.append("Temporary nature reduces documentation requirements per 10 CFR 50.59")
    sentences.append(NOT_REQUIRED_CLOSING)
    return _join(sentences)


def generate_reason(required: bool, design_type: DesignType, signal_text: str) -> str:
    if required:
        return required_reason(design_type, signal_text)
    return not_required_reason(design_type, signal_text)
