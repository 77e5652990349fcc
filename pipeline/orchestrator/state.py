"""
Workflow State Schema - TypedDict for LangGraph workflow state.

Defines the shared state structure that flows through all agents
in the MT analysis pipeline.
"""

from typing import TypedDict, List, Dict, Optional, Literal, Annotated
import operator

from components.decision_tree.models import DecisionTreeVerdict
from components.intake.models import ClassificationInput
from components.narrative.models import NarrativeVerdict
from components.review.models import InputReview
from components.risk.models import RiskAssessment
from components.semantic.models import SemanticVerdict
from components.synthesis.models import Decision


class AnalysisState(TypedDict, total=False):
    """
    State schema for the LangGraph MT analysis workflow.

    Uses TypedDict with total=False to allow partial state updates.
    Evidence nodes that run in the same super-step write disjoint keys;
    only "messages" has a reducer.
    """

    # ========== Input Fields ==========
    input: ClassificationInput  # As submitted
    classification_input: ClassificationInput  # After scenario inference

    # ========== Intake Output ==========
    explicit_flags: List[str]
    inferred_flags: Dict[str, bool]
    scenario: Optional[str]

    # ========== Evidence ==========
    tree_verdict: DecisionTreeVerdict
    equipment: SemanticVerdict
    modification_type: SemanticVerdict
    narrative: NarrativeVerdict

    # ========== Outputs ==========
    decision: Decision
    risk_assessment: RiskAssessment
    review: InputReview

    # ========== Workflow Control ==========
    status: Literal["processing", "success", "error", "failed"]
    error_message: Optional[str]
    current_agent: str  # Last sequential agent; parallel evidence nodes leave it alone

    # ========== Accumulated Messages (uses reducer) ==========
    messages: Annotated[List[Dict], operator.add]

    # ========== Overall Metrics ==========
    processing_time_seconds: Optional[float]
