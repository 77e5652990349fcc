"""
Semantic Agent - LangGraph node for embedding-based classification.

Embeds the change text once and classifies it on the equipment and
modification-type axes.
"""

from typing import Any, Dict, Optional

from langchain_core.runnables import RunnableConfig

from components.base import get_logger
from components.semantic.models import SemanticRequest
from components.semantic.service import SemanticClassifier, create_default_classifier

logger = get_logger(__name__)

# Singleton classifier (created on first use)
_classifier: Optional[SemanticClassifier] = None


def get_semantic_classifier() -> SemanticClassifier:
    """Get or create the default classifier instance."""
    global _classifier
    if _classifier is None:
        _classifier = create_default_classifier()
    return _classifier


async def semantic_node(state: Dict[str, Any], config: Optional[RunnableConfig] = None) -> Dict[str, Any]:
    """
    LangGraph node for semantic classification.

    The classifier can be injected per run through
    config["configurable"]["semantic_classifier"].

    Args:
        state: Workflow state containing "classification_input"
        config: LangGraph run configuration

    Returns:
        Partial state update with "equipment" and "modification_type" verdicts
    """
    configurable = (config or {}).get("configurable", {})
    classifier = configurable.get("semantic_classifier") or get_semantic_classifier()

    data = state["classification_input"]
    result = await classifier.process(SemanticRequest(text=data.combined_text))

    equipment = result.equipment
    modification = result.modification_type
    logger.info(
        f"Semantic: equipment={equipment.label} ({equipment.confidence:.2f}), "
        f"modification_type={modification.label} ({modification.confidence:.2f})",
        extra={"component": "semantic"},
    )

    return {
        "equipment": equipment,
        "modification_type": modification,
        "messages": [{
            "role": "assistant",
            "content": f"Semantic match: {equipment.label} / {modification.label}",
        }],
    }
