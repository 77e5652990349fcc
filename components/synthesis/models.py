"""
Pydantic models for the Evidence Synthesis component.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from components.decision_tree.models import DecisionTreeVerdict
from components.intake.models import DesignType
from components.narrative.models import NarrativeVerdict
from components.semantic.models import SemanticVerdict

# Tree grounding
GROUNDING_EXPLICIT = "explicit"
GROUNDING_INFERRED = "inferred"
GROUNDING_DEFAULT = "default"

# Requirement basis
BASIS_TERMINAL_EXEMPTION = "terminal_exemption"
BASIS_NARRATIVE = "narrative"
BASIS_HEURISTIC = "design_type_heuristic"
BASIS_FALLBACK = "insufficient_evidence"

INSUFFICIENT_EVIDENCE_REASON = "Insufficient evidence - manual review required"


class EvidenceItem(BaseModel):
    """One entry of the decision's audit trail."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    source: str
    summary: str
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class Decision(BaseModel):
    """Final MT decision."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    mt_required: bool
    design_type: DesignType
    reason: str
    confidence: float = Field(ge=0.0, le=1.0)
    evidence_trail: List[EvidenceItem] = Field(default_factory=list)
    requirement_basis: str
    design_type_basis: str
    tree_grounding: str


class SynthesisRequest(BaseModel):
    """Everything the synthesizer weighs for one change."""

    model_config = ConfigDict(frozen=True)

    combined_text: str = ""
    tree_verdict: DecisionTreeVerdict
    tree_grounding: str = GROUNDING_DEFAULT
    equipment: Optional[SemanticVerdict] = None
    modification_type: Optional[SemanticVerdict] = None
    narrative: Optional[NarrativeVerdict] = None
    scenario: Optional[str] = None
    inferred_flags: Dict[str, bool] = Field(default_factory=dict)
