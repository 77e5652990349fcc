"""
Synthesis Agent - LangGraph node that joins the evidence into a Decision.
"""

from typing import Any, Dict, Optional

from langchain_core.runnables import RunnableConfig

from components.base import get_logger
from components.synthesis.models import SynthesisRequest
from components.synthesis.service import EvidenceSynthesizer, tree_grounding

logger = get_logger(__name__)


async def synthesis_node(state: Dict[str, Any], config: Optional[RunnableConfig] = None) -> Dict[str, Any]:
    """
    LangGraph node for evidence synthesis.

    Args:
        state: Workflow state with the tree, semantic and narrative verdicts
        config: LangGraph run configuration; an EvidenceSynthesizer can be
            injected as config["configurable"]["synthesizer"]

    Returns:
        Partial state update with "decision"
    """
    configurable = (config or {}).get("configurable", {})
    synthesizer = configurable.get("synthesizer") or EvidenceSynthesizer()

    data = state["classification_input"]
    inferred = state.get("inferred_flags") or {}

    request = SynthesisRequest(
        combined_text=data.combined_text,
        tree_verdict=state["tree_verdict"],
        tree_grounding=tree_grounding(state.get("explicit_flags"), inferred),
        equipment=state.get("equipment"),
        modification_type=state.get("modification_type"),
        narrative=state.get("narrative"),
        scenario=state.get("scenario"),
        inferred_flags=inferred,
    )
    decision = synthesizer.synthesize(request)

    logger.info(
        f"Decision: required={decision.mt_required} type={decision.design_type.name} "
        f"confidence={decision.confidence:.2f} basis={decision.requirement_basis}",
        extra={"component": "synthesis"},
    )

    return {
        "decision": decision,
        "current_agent": "synthesis",
        "messages": [{
            "role": "assistant",
            "content": (
                f"MT {'required' if decision.mt_required else 'not required'} - "
                f"{decision.design_type} ({decision.confidence:.0%} confidence)"
            ),
        }],
    }
