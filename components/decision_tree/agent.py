"""
Decision Tree Agent - LangGraph node for the MT applicability flowchart.

Runs in the same super-step as the semantic node; the flowchart is pure
and CPU-only so it never waits on a provider.
"""

from typing import Any, Dict

from components.base import get_logger
from components.decision_tree.models import DecisionTreeVerdict
from components.decision_tree.tools import evaluate_mt_decision_tree

logger = get_logger(__name__)


async def decision_tree_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    LangGraph node for decision tree evaluation.

    Args:
        state: Workflow state containing "classification_input"

    Returns:
        Partial state update with "tree_verdict"
    """
    data = state["classification_input"]

    result = await evaluate_mt_decision_tree.ainvoke(
        {"change": data.model_dump(by_alias=True)}
    )
    verdict = DecisionTreeVerdict.model_validate(result)

    logger.info(
        f"Decision tree: required={verdict.required} type={verdict.provisional_design_type.name} "
        f"gate={verdict.fired_gate or 'fallthrough'}",
        extra={"component": "decision_tree"},
    )

    return {
        "tree_verdict": verdict,
        "messages": [{
            "role": "assistant",
            "content": f"Decision tree: {verdict.reason}",
        }],
    }
