"""
Pydantic models for the Risk component.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from components.intake.models import ClassificationInput
from components.synthesis.models import Decision


class RiskLevel(str, Enum):
    """Ordered risk levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def highest(cls, *levels: "RiskLevel") -> "RiskLevel":
        return max(levels, key=lambda level: level.rank)


_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.VERY_HIGH]


class RiskRequest(BaseModel):
    """Change and decision to assess."""

    model_config = ConfigDict(frozen=True)

    input: ClassificationInput
    decision: Decision


class RiskAssessment(BaseModel):
    """Risk levels with the factors and mitigations that produced them."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    overall_risk: RiskLevel
    safety_risk: RiskLevel
    environmental_risk: RiskLevel
    operational_risk: RiskLevel
    risk_factors: List[str] = Field(default_factory=list)
    mitigation_recommendations: List[str] = Field(default_factory=list)
    triggered_rules: List[str] = Field(
        default_factory=list,
        description="Names of the rules that matched, in table order",
    )
