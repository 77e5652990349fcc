"""
Review Agent - LangGraph node for the submission review.
"""

from typing import Any, Dict

from components.base import get_logger
from components.review.service import review_input

logger = get_logger(__name__)


async def review_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    LangGraph node for input review.

    Args:
        state: Workflow state containing "classification_input" and "decision"

    Returns:
        Partial state update with "review"
    """
    review = review_input(state["classification_input"], state["decision"])

    if review.missing_elements or review.inconsistencies:
        logger.info(
            f"Review: {len(review.missing_elements)} missing element(s), "
            f"{len(review.inconsistencies)} inconsistency(ies)",
            extra={"component": "review"},
        )

    return {
        "review": review,
        "current_agent": "review",
        "status": "success",
        "messages": [{
            "role": "assistant",
            "content": f"Review complete: {len(review.expected_outputs)} expected design outputs",
        }],
    }
