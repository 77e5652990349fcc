"""
Decision Tree Tools - LangChain @tool decorated functions.

Exposes the flowchart evaluation so any LangChain agent can call it with
plain JSON arguments.
"""

from typing import Any, Dict

from langchain_core.tools import tool

from components.decision_tree.service import evaluate_decision_tree
from components.intake.models import ClassificationInput


@tool
def evaluate_mt_decision_tree(change: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate the MT applicability flowchart for a change description.

    Args:
        change: Change description using questionnaire keys
            (isTemporary, isPhysicalChange, problemDescription, ...)

    Returns:
        Dict with required, reason, provisional_design_type (1-5),
        evaluation_path and fired_gate
    """
    data = ClassificationInput.model_validate(change)
    verdict = evaluate_decision_tree(data)
    return verdict.model_dump(mode="json")
