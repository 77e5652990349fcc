"""
Intake Agent - LangGraph node that normalizes the submitted change.

Records which flags the caller supplied and applies scenario inference
before the evidence nodes run.
"""

from typing import Any, Dict

from config import Config
from components.base import get_logger
from components.intake.models import ClassificationInput
from components.intake.scenarios import infer_scenario

logger = get_logger(__name__)


async def intake_node(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    LangGraph node for input intake.

    Args:
        state: Workflow state containing the raw "input"

    Returns:
        Partial state update with the normalized input and inference results
    """
    raw = state.get("input")
    if not isinstance(raw, ClassificationInput):
        raw = ClassificationInput.model_validate(raw or {})

    explicit = sorted(raw.explicit_flags())

    if Config.SCENARIO_INFERENCE_ENABLED:
        inference = infer_scenario(raw)
    else:
        inference = None

    normalized = inference.input if inference else raw
    inferred = inference.inferred_flags if inference else {}
    scenario = inference.scenario if inference else None

    logger.info(
        f"Intake complete: {len(explicit)} explicit flag(s), scenario={scenario}",
        extra={"component": "intake"},
    )

    return {
        "input": raw,
        "classification_input": normalized,
        "explicit_flags": explicit,
        "inferred_flags": inferred,
        "scenario": scenario,
        "current_agent": "intake",
        "messages": [{
            "role": "assistant",
            "content": f"Received change description (scenario: {scenario or 'none'})",
        }],
    }
