"""
Risk Service Component.

Derives a RiskAssessment from the change description and the final
Decision by scanning the rule table and escalating levels on the
safety classification and a few high-consequence patterns.
"""

from typing import Any, Dict, List

from components.base import BaseComponent, all_matches, get_logger, normalize_text
from components.intake.models import (
    NON_SAFETY,
    SAFETY_CLASS,
    ClassificationInput,
    canonical_safety_classification,
    is_safety_classified,
)
from components.risk.models import RiskAssessment, RiskLevel, RiskRequest
from components.risk.rules import (
    DIFFERENT_MANUFACTURER_REPLACE,
    NEW_INSTALLATION,
    OPERATIONS_KEYWORDS,
    RADIOLOGICAL_KEYWORDS,
    RISK_RULES,
    ENVIRONMENTAL_KEYWORDS,
    RiskSubject,
)
from components.synthesis.models import Decision

logger = get_logger(__name__)


def _base_level(safety_classification: str) -> RiskLevel:
    if is_safety_classified(safety_classification):
        return RiskLevel.HIGH
    if canonical_safety_classification(safety_classification) == NON_SAFETY:
        return RiskLevel.LOW
    return RiskLevel.MEDIUM


def _escalation_triggers(subject: RiskSubject) -> List[str]:
    triggers = []
    if canonical_safety_classification(subject.safety_classification) == SAFETY_CLASS:
        triggers.append("safety_class")
    if DIFFERENT_MANUFACTURER_REPLACE.matches(subject.text):
        triggers.append("different_manufacturer_replace")
    if NEW_INSTALLATION.matches(subject.text):
        triggers.append("new_installation")
    return triggers


def _safety_risk(subject: RiskSubject) -> RiskLevel:
    base = _base_level(subject.safety_classification)
    triggers = _escalation_triggers(subject)
    if len(triggers) >= 2:
        return RiskLevel.VERY_HIGH
    if triggers:
        return RiskLevel.highest(base, RiskLevel.HIGH)
    return base


def _environmental_risk(text: str) -> RiskLevel:
    if RADIOLOGICAL_KEYWORDS.matches(text):
        return RiskLevel.HIGH
    if ENVIRONMENTAL_KEYWORDS.matches(text):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _operational_risk(text: str, decision: Decision) -> RiskLevel:
    if OPERATIONS_KEYWORDS.matches(text):
        return RiskLevel.HIGH
    if not decision.mt_required:
        return RiskLevel.LOW
    return RiskLevel.MEDIUM


def derive_risk(data: ClassificationInput, decision: Decision) -> RiskAssessment:
    """
    Assess risk for a change. Pure; never raises for valid input.

    Args:
        data: Change description (after scenario inference)
        decision: Final decision for the change

    Returns:
        RiskAssessment with accumulated factors and mitigations
    """
    subject = RiskSubject(
        text=normalize_text(data.problem_description, data.proposed_solution),
        safety_classification=data.safety_classification or "",
        safety_classified=is_safety_classified(data.safety_classification),
        design_type=decision.design_type,
    )

    factors: List[str] = []
    mitigations: List[str] = []
    matched = all_matches(RISK_RULES, subject)
    for rule in matched:
        factors.extend(rule.factors)
        if subject.safety_classified:
            factors.extend(rule.safety_factors)
        mitigations.extend(rule.mitigations)

    safety = _safety_risk(subject)
    environmental = _environmental_risk(subject.text)
    operational = _operational_risk(subject.text, decision)

    return RiskAssessment(
        overall_risk=RiskLevel.highest(safety, environmental, operational),
        safety_risk=safety,
        environmental_risk=environmental,
        operational_risk=operational,
        risk_factors=factors,
        mitigation_recommendations=mitigations,
        triggered_rules=[rule.name for rule in matched],
    )


class RiskDeriver(BaseComponent[RiskRequest, RiskAssessment]):
    """Component wrapper around derive_risk()."""

    @property
    def component_name(self) -> str:
        return "risk"

    async def process(self, request: RiskRequest) -> RiskAssessment:
        return derive_risk(request.input, request.decision)

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "component": self.component_name, "rules": len(RISK_RULES)}
