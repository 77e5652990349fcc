"""
Narrative Agent - LangGraph node for the LLM narrative assessment.

When it runs after the semantic node the semantic verdicts are given to
the model as preliminary analysis; when it runs concurrently with the
other evidence nodes the decision tree verdict is used instead.
"""

from typing import Any, Dict, Optional

from langchain_core.runnables import RunnableConfig

from components.base import get_logger
from components.decision_tree.models import DecisionTreeVerdict
from components.decision_tree.service import evaluate_decision_tree
from components.narrative.models import NarrativeRequest
from components.narrative.service import NarrativeAdapter
from components.semantic.models import SemanticVerdict

logger = get_logger(__name__)

# Singleton adapter (created on first use)
_adapter: Optional[NarrativeAdapter] = None


def get_narrative_adapter() -> NarrativeAdapter:
    """Get or create the default adapter instance."""
    global _adapter
    if _adapter is None:
        _adapter = NarrativeAdapter()
    return _adapter


def semantic_context(
    equipment: Optional[SemanticVerdict],
    modification_type: Optional[SemanticVerdict],
) -> Dict[str, str]:
    """Describe the available semantic verdicts for the prompt."""
    context = {}
    if equipment is not None and equipment.available:
        context["Equipment Classification"] = (
            f"{equipment.label} (Confidence: {equipment.confidence:.1%})"
        )
    if modification_type is not None and modification_type.available:
        context["MT Type Suggestion"] = (
            f"{modification_type.label} (Confidence: {modification_type.confidence:.1%})"
        )
    return context


def tree_context(verdict: DecisionTreeVerdict) -> Dict[str, str]:
    """Describe the decision tree verdict for the prompt."""
    return {
        "Decision Tree": (
            f"MT {'required' if verdict.required else 'not required'}, "
            f"{verdict.provisional_design_type.label} - {verdict.reason}"
        )
    }


async def narrative_node(state: Dict[str, Any], config: Optional[RunnableConfig] = None) -> Dict[str, Any]:
    """
    LangGraph node for the narrative assessment.

    The adapter can be injected per run through
    config["configurable"]["narrative_adapter"].

    Args:
        state: Workflow state containing "classification_input" and, when
            available, the semantic verdicts
        config: LangGraph run configuration

    Returns:
        Partial state update with "narrative"
    """
    configurable = (config or {}).get("configurable", {})
    adapter = configurable.get("narrative_adapter") or get_narrative_adapter()

    data = state["classification_input"]

    if "equipment" in state or "modification_type" in state:
        context = semantic_context(state.get("equipment"), state.get("modification_type"))
    else:
        # Dispatched alongside the tree node; the flowchart is cheap to evaluate here
        context = tree_context(state.get("tree_verdict") or evaluate_decision_tree(data))

    verdict = await adapter.process(NarrativeRequest(text=data.combined_text, context=context))

    logger.info(
        f"Narrative: available={verdict.available} required={verdict.explicit_required_flag} "
        f"type={verdict.extracted_design_type.name if verdict.extracted_design_type else None}",
        extra={"component": "narrative"},
    )

    return {
        "narrative": verdict,
        "messages": [{
            "role": "assistant",
            "content": (
                "Narrative assessment received"
                if verdict.available
                else "Narrative assessment unavailable"
            ),
        }],
    }
