"""
Risk Component.

Additive keyword rule table that turns a change and its Decision into a
RiskAssessment.
"""

from components.risk.models import RiskAssessment, RiskLevel, RiskRequest
from components.risk.rules import RISK_RULES, RiskRule, RiskSubject
from components.risk.service import RiskDeriver, derive_risk

__all__ = [
    "RiskAssessment",
    "RiskLevel",
    "RiskRequest",
    "RISK_RULES",
    "RiskRule",
    "RiskSubject",
    "RiskDeriver",
    "derive_risk",
]
