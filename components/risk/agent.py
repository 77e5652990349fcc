"""
Risk Agent - LangGraph node that derives the RiskAssessment.
"""

from typing import Any, Dict

from components.base import get_logger
from components.risk.service import derive_risk

logger = get_logger(__name__)


async def risk_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    LangGraph node for risk derivation.

    Args:
        state: Workflow state containing "classification_input" and "decision"

    Returns:
        Partial state update with "risk_assessment"
    """
    assessment = derive_risk(state["classification_input"], state["decision"])

    logger.info(
        f"Risk: overall={assessment.overall_risk.value} rules={assessment.triggered_rules}",
        extra={"component": "risk"},
    )

    return {
        "risk_assessment": assessment,
        "current_agent": "risk",
        "messages": [{
            "role": "assistant",
            "content": f"Overall risk {assessment.overall_risk.value} "
                       f"({len(assessment.risk_factors)} risk factors)",
        }],
    }
