"""
LangGraph Workflow - Orchestrates agent components into a pipeline.

Intake -> {Decision Tree, Semantic Classification} -> Narrative Assessment
-> Evidence Synthesis -> Risk Assessment -> Input Review

The decision tree and semantic nodes share a super-step. The narrative
node follows the semantic node when Config.NARRATIVE_USES_SEMANTIC_CONTEXT
is set; otherwise it joins the same super-step and uses the tree verdict
as context. Synthesis waits for every evidence node.
"""

import os
from typing import Optional

from langgraph.graph import StateGraph, END

from config import Config
from components.base import get_logger
from pipeline.orchestrator.state import AnalysisState

# Import agent nodes from components
from components.intake.agent import intake_node
from components.decision_tree.agent import decision_tree_node
from components.semantic.agent import semantic_node
from components.narrative.agent import narrative_node
from components.synthesis.agent import synthesis_node
from components.risk.agent import risk_node
from components.review.agent import review_node

logger = get_logger(__name__)

INTAKE = "Scenario Intake Agent"
DECISION_TREE = "Decision Tree Agent"
SEMANTIC = "Semantic Classification Agent"
NARRATIVE = "Narrative Assessment Agent"
SYNTHESIS = "Evidence Synthesis Agent"
RISK = "Risk Assessment Agent"
REVIEW = "Input Review Agent"


def build_workflow(narrative_uses_semantic_context: Optional[bool] = None):
    """
    Build the LangGraph workflow for MT analysis.

    Args:
        narrative_uses_semantic_context: Run the narrative node after the
            semantic node (True) or alongside it (False). Defaults to
            Config.NARRATIVE_USES_SEMANTIC_CONTEXT.

    Returns:
        Compiled StateGraph ready for execution
    """
    if narrative_uses_semantic_context is None:
        narrative_uses_semantic_context = Config.NARRATIVE_USES_SEMANTIC_CONTEXT

    workflow = StateGraph(AnalysisState)

    workflow.add_node(INTAKE, intake_node)
    workflow.add_node(DECISION_TREE, decision_tree_node)
    workflow.add_node(SEMANTIC, semantic_node)
    workflow.add_node(NARRATIVE, narrative_node)
    workflow.add_node(SYNTHESIS, synthesis_node)
    workflow.add_node(RISK, risk_node)
    workflow.add_node(REVIEW, review_node)

    workflow.set_entry_point(INTAKE)

    # Fan out to the evidence nodes
    workflow.add_edge(INTAKE, DECISION_TREE)
    workflow.add_edge(INTAKE, SEMANTIC)
    if narrative_uses_semantic_context:
        workflow.add_edge(SEMANTIC, NARRATIVE)
        workflow.add_edge([DECISION_TREE, NARRATIVE], SYNTHESIS)
    else:
        workflow.add_edge(INTAKE, NARRATIVE)
        workflow.add_edge([DECISION_TREE, SEMANTIC, NARRATIVE], SYNTHESIS)

    workflow.add_edge(SYNTHESIS, RISK)
    workflow.add_edge(RISK, REVIEW)
    workflow.add_edge(REVIEW, END)

    logger.info(
        f"Workflow built (narrative after semantic: {narrative_uses_semantic_context})",
        extra={"component": "orchestrator"},
    )
    return workflow.compile()


def visualize_workflow(output_path: str = "output/workflow_graph.png") -> None:
    """
    Render the workflow graph as a PNG.

    Args:
        output_path: Path where the PNG will be saved
    """
    app = get_workflow()

    try:
        png_data = app.get_graph().draw_mermaid_png()
    except Exception as e:
        logger.warning(f"Failed to generate workflow graph: {e}", extra={"component": "orchestrator"})
        return

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "wb") as f:
        f.write(png_data)
    logger.info(f"Workflow graph saved to: {output_path}", extra={"component": "orchestrator"})


# Singleton workflow instance
_workflow = None


def get_workflow():
    """
    Get the compiled workflow instance (singleton).

    Returns:
        Compiled LangGraph workflow
    """
    global _workflow
    if _workflow is None:
        _workflow = build_workflow()
    return _workflow
