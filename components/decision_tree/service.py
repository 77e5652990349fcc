"""
Decision Tree Service Component.

Deterministic implementation of the MT applicability flowchart. Gates are
evaluated strictly in order and the first gate that applies returns. The
evaluator is pure: no I/O, no shared state, and it never raises for a
valid ClassificationInput.
"""

from typing import Any, Callable, Dict, List, Tuple

from components.base import BaseComponent, KeywordPattern, Rule, first_match
from components.decision_tree.models import (
    FALLTHROUGH,
    GATE_DESIGN_OUTSIDE_AUTHORITY,
    GATE_HOISTING_RIGGING,
    GATE_IDENTICAL_REPLACEMENT,
    GATE_MULTI_DISCIPLINE,
    GATE_MULTIPLE_DOCUMENTS,
    GATE_NEW_PROCEDURES,
    GATE_NON_PHYSICAL,
    GATE_REVISIONS_OUTSIDE_AUTHORITY,
    GATE_SOFTWARE_CHANGE,
    GATE_TEMPORARY,
    DecisionTreeVerdict,
)
from components.intake.models import ClassificationInput, DesignType

FCP_REASON = "Use TFC-ENG-DESIGN-C-67 - Facilities Change Package Process"
FALLTHROUGH_REASON = "Possibly exempt based on decision tree criteria"


class _SolutionOrProblem:
    """Matches keywords in the proposed solution and/or problem description."""

    def __init__(self, solution: Tuple[str, ...] = (), problem: Tuple[str, ...] = ()):
        self.solution = KeywordPattern.any_of(*solution) if solution else None
        self.problem = KeywordPattern.any_of(*problem) if problem else None

    def matches(self, data: ClassificationInput) -> bool:
        return bool(
            (self.solution and self.solution.matches(data.proposed_solution))
            or (self.problem and self.problem.matches(data.problem_description))
        )


# Replacement is checked before new installation
DESIGN_TYPE_RULES = (
    Rule(
        _SolutionOrProblem(
            solution=("replace", "replacement"),
            problem=("replace", "failed"),
        ),
        DesignType.III,
        name="replacement",
    ),
    Rule(
        _SolutionOrProblem(
            solution=("install new", "installing new", "new installation", "new generator", "new system"),
            problem=(
                "new installation",
                "install new",
                "installing new",
                "new generator",
                "new system",
                "new equipment",
            ),
        ),
        DesignType.I,
        name="new_installation",
    ),
)


def determine_design_type(data: ClassificationInput) -> DesignType:
    """
    Provisional design type from flags and keywords.

    Temporary -> IV, identical -> V, then the keyword table; Modification
    (II) when nothing matches.
    """
    if data.is_temporary:
        return DesignType.IV
    if data.is_identical_replacement:
        return DesignType.V
    return first_match(DESIGN_TYPE_RULES, data, default=DesignType.II)


# (gate id, predicate, reason) for gates 4-10; all require an MT
_REQUIRED_GATES: Tuple[Tuple[str, Callable[[ClassificationInput], bool], str], ...] = (
    (
        GATE_DESIGN_OUTSIDE_AUTHORITY,
        lambda d: d.is_design_outside_authority,
        "Design being performed outside DA's group",
    ),
    (
        GATE_NEW_PROCEDURES,
        lambda d: d.requires_new_procedures,
        "New or revised technical procedures/training/maintenance manual required",
    ),
    (
        GATE_MULTIPLE_DOCUMENTS,
        lambda d: d.requires_multiple_documents,
        "Multiple design documents required",
    ),
    (
        GATE_MULTI_DISCIPLINE,
        lambda d: not d.is_single_discipline,
        "Multi-discipline design required",
    ),
    (
        GATE_REVISIONS_OUTSIDE_AUTHORITY,
        lambda d: d.revisions_outside_authority,
        "Revisions implemented outside DA's group",
    ),
    (
        GATE_SOFTWARE_CHANGE,
        lambda d: d.requires_software_change,
        "Software changes required",
    ),
    (
        GATE_HOISTING_RIGGING,
        lambda d: d.requires_hoisting_rigging,
        "Hoisting and/or rigging required",
    ),
)


def evaluate_decision_tree(data: ClassificationInput) -> DecisionTreeVerdict:
    """
    Walk the ten gates in order and return the first verdict that applies.

    Args:
        data: Change description (flags already normalized)

    Returns:
        DecisionTreeVerdict with the evaluation path taken
    """
    path: List[str] = []

    # Gate 1: are all changes temporary?
    path.append(GATE_TEMPORARY)
    if data.is_temporary:
        return DecisionTreeVerdict(
            required=False,
            reason="All changes are temporary",
            provisional_design_type=DesignType.IV,
            evaluation_path=path,
            fired_gate=GATE_TEMPORARY,
        )

    # Gate 2: is the change physical? Checked before identical replacement.
    path.append(GATE_NON_PHYSICAL)
    if not data.is_physical_change:
        if data.facility_change_package_applicable:
            required, reason, fcp = False, FCP_REASON, True
        elif data.requires_new_procedures:
            required, reason, fcp = (
                True,
                "Non-physical change requiring new or revised technical procedures",
                False,
            )
        else:
            required, reason, fcp = False, "Non-physical change - MT may not be required", False
        return DecisionTreeVerdict(
            required=required,
            reason=reason,
            provisional_design_type=DesignType.II,
            evaluation_path=path,
            fired_gate=GATE_NON_PHYSICAL,
            facility_change_package=fcp,
        )

    # Gate 3: identical replacement
    path.append(GATE_IDENTICAL_REPLACEMENT)
    if data.is_identical_replacement:
        return DecisionTreeVerdict(
            required=False,
            reason="Identical replacement - Design Type V",
            provisional_design_type=DesignType.V,
            evaluation_path=path,
            fired_gate=GATE_IDENTICAL_REPLACEMENT,
        )

    # Gates 4-10
    for gate, applies, reason in _REQUIRED_GATES:
        path.append(gate)
        if applies(data):
            return DecisionTreeVerdict(
                required=True,
                reason=reason,
                provisional_design_type=determine_design_type(data),
                evaluation_path=path,
                fired_gate=gate,
            )

    path.append(FALLTHROUGH)
    return DecisionTreeVerdict(
        required=False,
        reason=FALLTHROUGH_REASON,
        provisional_design_type=determine_design_type(data),
        evaluation_path=path,
        fired_gate=None,
    )


class DecisionTreeEvaluator(BaseComponent[ClassificationInput, DecisionTreeVerdict]):
    """
    Component wrapper around evaluate_decision_tree().

    Usage:
        evaluator = DecisionTreeEvaluator()
        verdict = await evaluator.process(ClassificationInput(is_temporary=True))
    """

    @property
    def component_name(self) -> str:
        return "decision_tree"

    async def process(self, request: ClassificationInput) -> DecisionTreeVerdict:
        return evaluate_decision_tree(request)

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "component": self.component_name}
