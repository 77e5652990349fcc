"""
Evidence Synthesis Component.

Resolves the decision tree, semantic and narrative evidence into a
confidence-scored, auditable MT Decision.
"""

from components.synthesis.models import (
    BASIS_FALLBACK,
    BASIS_HEURISTIC,
    BASIS_NARRATIVE,
    BASIS_TERMINAL_EXEMPTION,
    GROUNDING_DEFAULT,
    GROUNDING_EXPLICIT,
    GROUNDING_INFERRED,
    INSUFFICIENT_EVIDENCE_REASON,
    Decision,
    EvidenceItem,
    SynthesisRequest,
)
from components.synthesis.service import (
    EvidenceSynthesizer,
    SynthesisConfig,
    synthesize_from_tree,
    tree_grounding,
)
from components.synthesis.signals import generate_reason, requirement_for

__all__ = [
    "BASIS_FALLBACK",
    "BASIS_HEURISTIC",
    "BASIS_NARRATIVE",
    "BASIS_TERMINAL_EXEMPTION",
    "GROUNDING_DEFAULT",
    "GROUNDING_EXPLICIT",
    "GROUNDING_INFERRED",
    "INSUFFICIENT_EVIDENCE_REASON",
    "Decision",
    "EvidenceItem",
    "SynthesisRequest",
    "EvidenceSynthesizer",
    "SynthesisConfig",
    "synthesize_from_tree",
    "tree_grounding",
    "generate_reason",
    "requirement_for",
]
