"""
Decision Tree Component.

Deterministic ten-gate MT applicability flowchart.

Usage:
    from components.decision_tree import evaluate_decision_tree
    from components.intake import ClassificationInput

    verdict = evaluate_decision_tree(ClassificationInput(isTemporary=True))
    print(verdict.required, verdict.provisional_design_type)  # False DesignType.IV
"""

from components.decision_tree.models import (
    FALLTHROUGH,
    GATE_ORDER,
    DecisionTreeVerdict,
)
from components.decision_tree.service import (
    DESIGN_TYPE_RULES,
    FALLTHROUGH_REASON,
    FCP_REASON,
    DecisionTreeEvaluator,
    determine_design_type,
    evaluate_decision_tree,
)
from components.decision_tree.tools import evaluate_mt_decision_tree

__all__ = [
    "FALLTHROUGH",
    "GATE_ORDER",
    "DecisionTreeVerdict",
    "DESIGN_TYPE_RULES",
    "FALLTHROUGH_REASON",
    "FCP_REASON",
    "DecisionTreeEvaluator",
    "determine_design_type",
    "evaluate_decision_tree",
    "evaluate_mt_decision_tree",
]
