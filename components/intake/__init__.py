"""
Intake Component.

Validates the submitted change description and fills unset decision
flags from recognised free-text scenarios.
"""

from components.intake.models import (
    FLAG_FIELDS,
    NON_SAFETY,
    SAFETY_CLASS,
    SAFETY_SIGNIFICANT,
    ClassificationInput,
    DesignType,
    ScenarioInference,
    canonical_safety_classification,
    is_safety_classified,
)
from components.intake.scenarios import SCENARIO_RULES, ScenarioProfile, infer_scenario

__all__ = [
    "FLAG_FIELDS",
    "NON_SAFETY",
    "SAFETY_CLASS",
    "SAFETY_SIGNIFICANT",
    "ClassificationInput",
    "DesignType",
    "ScenarioInference",
    "canonical_safety_classification",
    "is_safety_classified",
    "SCENARIO_RULES",
    "ScenarioProfile",
    "infer_scenario",
]
