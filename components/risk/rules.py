"""
Risk rule table.

Every rule whose pattern matches contributes its factors and mitigations;
rules never overwrite each other. Rules with safety_factors add those
only for safety-classified work.
"""

from dataclasses import dataclass
from typing import Tuple

from components.base import KeywordPattern
from components.intake.models import DesignType
from components.synthesis.signals import ENVIRONMENTAL


@dataclass(frozen=True)
class RiskSubject:
    """What the rule patterns look at."""

    text: str
    safety_classification: str
    safety_classified: bool
    design_type: DesignType


@dataclass(frozen=True)
class RiskRule:
    name: str
    pattern: object
    factors: Tuple[str, ...]
    mitigations: Tuple[str, ...]
    safety_factors: Tuple[str, ...] = ()

    def matches(self, subject: RiskSubject) -> bool:
        return self.pattern.matches(subject)


class TextPattern:
    """Applies a keyword pattern to the subject's text."""

    def __init__(self, pattern):
        self.pattern = pattern

    def matches(self, subject: RiskSubject) -> bool:
        return self.pattern.matches(subject.text)


class SafetyClassified:
    def matches(self, subject: RiskSubject) -> bool:
        return subject.safety_classified


class NonIdenticalReplace:
    """'replace' in the text while the decision is not an identical replacement."""

    def matches(self, subject: RiskSubject) -> bool:
        return "replace" in subject.text and subject.design_type != DesignType.V


DIFFERENT_MANUFACTURER_REPLACE = KeywordPattern(["different manufacturer"], ["replace"])
NEW_INSTALLATION = KeywordPattern.any_of(
    "new installation", "install new", "new generator", "new system"
)

ENVIRONMENTAL_KEYWORDS = ENVIRONMENTAL
RADIOLOGICAL_KEYWORDS = KeywordPattern.any_of(
    "radiological",
    "radioactive",
    "radiation",
    "contamination",
    "tritium",
    "airborne release",
)
OPERATIONS_KEYWORDS = KeywordPattern.any_of(
    "setpoint", "alarm", "control system", "software", "shutdown", "outage"
)


RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule(
        name="safety_classified",
        pattern=SafetyClassified(),
        factors=("Safety-classified equipment modification",),
        mitigations=("Enhanced safety review and independent verification required",),
    ),
    RiskRule(
        name="different_manufacturer_valve",
        pattern=TextPattern(KeywordPattern(["valve"], ["different manufacturer"])),
        factors=(
            "Non-identical replacement from different manufacturer",
            "Form, fit, function equivalency requires verification",
            "Potential interface compatibility issues",
        ),
        mitigations=(
            "Perform comprehensive equivalency analysis",
            "Verify all interface connections and mounting requirements",
            "Update vendor qualification and procurement specifications",
        ),
    ),
    RiskRule(
        name="new_installation",
        pattern=TextPattern(NEW_INSTALLATION),
        factors=(
            "Complex new installation with no existing design basis",
            "Integration with existing systems requires careful analysis",
            "Multiple stakeholder coordination required",
            "Extensive documentation and review requirements",
        ),
        safety_factors=("Safety-related system installation requiring enhanced rigor",),
        mitigations=(
            "Develop comprehensive design package with full analysis",
            "Coordinate with all affected Design Authority organizations",
            "Perform thorough safety and environmental impact assessments",
            "Establish detailed testing and commissioning procedures",
            "Plan comprehensive operator training program",
        ),
    ),
    RiskRule(
        name="software_configuration",
        pattern=TextPattern(
            KeywordPattern.any_of("alarm setpoint", "software configuration", "setpoint")
        ),
        factors=(
            "Software configuration change affecting system operation",
            "Potential impact on safety system alarm functions",
            "Operating procedure changes may be required",
        ),
        safety_factors=("Safety-related alarm setpoint modifications",),
        mitigations=(
            "Verify technical basis for all setpoint changes",
            "Assess impact on safety analysis assumptions",
            "Update operator training and procedures",
            "Perform comprehensive testing of new setpoints",
        ),
    ),
    RiskRule(
        name="procedure_only_calibration",
        pattern=TextPattern(KeywordPattern(["procedure"], ["calibration"], ["no physical"])),
        factors=(
            "Calibration procedure changes may affect measurement accuracy",
            "New test instrument requires equivalency verification",
            "Personnel training requirements for new procedures",
            "Quality assurance traceability must be maintained",
        ),
        safety_factors=("Safety-related equipment calibration procedure changes",),
        mitigations=(
            "Verify new instrument meets or exceeds current accuracy requirements",
            "Document equivalency analysis for instrument change",
            "Update training materials and qualify personnel",
            "Ensure calibration traceability is maintained",
        ),
    ),
    RiskRule(
        name="non_identical_replacement",
        pattern=NonIdenticalReplace(),
        factors=("Non-identical replacement requires additional analysis",),
        mitigations=("Document all differences and justify acceptability",),
    ),
    RiskRule(
        name="environmental_release",
        pattern=TextPattern(ENVIRONMENTAL_KEYWORDS),
        factors=("Potential environmental release or discharge pathway affected",),
        mitigations=(
            "Perform environmental screening and confirm permit conditions are met",
        ),
    ),
)
