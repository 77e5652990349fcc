"""Tests for the MT applicability flowchart."""

import pytest

from components.decision_tree.models import (
    FALLTHROUGH,
    GATE_HOISTING_RIGGING,
    GATE_IDENTICAL_REPLACEMENT,
    GATE_NEW_PROCEDURES,
    GATE_NON_PHYSICAL,
    GATE_ORDER,
    GATE_TEMPORARY,
    DecisionTreeVerdict,
)
from components.decision_tree.service import (
    FCP_REASON,
    FALLTHROUGH_REASON,
    DecisionTreeEvaluator,
    determine_design_type,
    evaluate_decision_tree,
)
from components.decision_tree.tools import evaluate_mt_decision_tree
from components.intake.models import ClassificationInput, DesignType


def physical(**flags) -> ClassificationInput:
    return ClassificationInput(is_physical_change=True, **flags)


def test_temporary_is_not_required_type_iv():
    verdict = evaluate_decision_tree(ClassificationInput(is_temporary=True, requires_software_change=True))

    assert verdict.required is False
    assert verdict.provisional_design_type == DesignType.IV
    assert "temporary" in verdict.reason.lower()
    assert verdict.evaluation_path == [GATE_TEMPORARY]
    assert verdict.exempts


def test_identical_replacement_is_not_required_type_v():
    verdict = evaluate_decision_tree(physical(is_identical_replacement=True, requires_new_procedures=True))

    assert verdict.required is False
    assert verdict.provisional_design_type == DesignType.V
    assert verdict.reason == "Identical replacement - Design Type V"
    assert verdict.evaluation_path == [GATE_TEMPORARY, GATE_NON_PHYSICAL, GATE_IDENTICAL_REPLACEMENT]


def test_non_physical_gate_is_checked_before_identical_replacement():
    # An identical replacement that is flagged non-physical stops at the non-physical gate
    verdict = evaluate_decision_tree(ClassificationInput(is_identical_replacement=True))

    assert verdict.fired_gate == GATE_NON_PHYSICAL
    assert verdict.provisional_design_type == DesignType.II
    assert verdict.reason == "Non-physical change - MT may not be required"
    assert not verdict.exempts


def test_non_physical_with_new_procedures_is_required():
    verdict = evaluate_decision_tree(ClassificationInput(requires_new_procedures=True))

    assert verdict.required is True
    assert verdict.reason == "Non-physical change requiring new or revised technical procedures"
    assert verdict.provisional_design_type == DesignType.II


def test_facility_change_package_is_not_required_type_ii():
    verdict = evaluate_decision_tree(
        ClassificationInput(facility_change_package_applicable=True, requires_new_procedures=True)
    )

    assert verdict.required is False
    assert verdict.provisional_design_type == DesignType.II
    assert verdict.reason == FCP_REASON
    assert verdict.facility_change_package
    assert verdict.exempts


@pytest.mark.parametrize(
    "flags, gate, reason",
    [
        ({"is_design_outside_authority": True}, "design_outside_authority", "Design being performed outside DA's group"),
        ({"requires_multiple_documents": True}, "multiple_documents", "Multiple design documents required"),
        ({"is_single_discipline": False}, "multi_discipline", "Multi-discipline design required"),
        ({"revisions_outside_authority": True}, "revisions_outside_authority", "Revisions implemented outside DA's group"),
        ({"requires_software_change": True}, "software_change", "Software changes required"),
        ({"requires_hoisting_rigging": True}, "hoisting_rigging", "Hoisting and/or rigging required"),
    ],
)
def test_required_gates(flags, gate, reason):
    verdict = evaluate_decision_tree(physical(**flags))

    assert verdict.required is True
    assert verdict.fired_gate == gate
    assert verdict.reason == reason
    assert verdict.evaluation_path[-1] == gate
    assert verdict.evaluation_path == list(GATE_ORDER[: GATE_ORDER.index(gate) + 1])


def test_first_applicable_gate_wins():
    verdict = evaluate_decision_tree(
        physical(requires_new_procedures=True, requires_hoisting_rigging=True)
    )

    assert verdict.fired_gate == GATE_NEW_PROCEDURES
    assert GATE_HOISTING_RIGGING not in verdict.evaluation_path


def test_fallthrough_is_possibly_exempt():
    verdict = evaluate_decision_tree(physical())

    assert verdict.required is False
    assert verdict.reason == FALLTHROUGH_REASON
    assert verdict.fired_gate is None
    assert verdict.evaluation_path[-1] == FALLTHROUGH
    assert len(verdict.evaluation_path) == len(GATE_ORDER) + 1


def test_evaluation_is_deterministic():
    data = physical(requires_software_change=True, proposed_solution="Replace the controller")

    assert evaluate_decision_tree(data) == evaluate_decision_tree(data)


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({"is_temporary": True, "proposed_solution": "replace"}, DesignType.IV),
        ({"is_identical_replacement": True}, DesignType.V),
        ({"proposed_solution": "Replacement with a Fisher valve"}, DesignType.III),
        ({"problem_description": "Pump motor failed"}, DesignType.III),
        ({"proposed_solution": "Install new generator"}, DesignType.I),
        ({"problem_description": "new equipment for sampling"}, DesignType.I),
        ({"proposed_solution": "Reroute cable tray"}, DesignType.II),
    ],
)
def test_determine_design_type(fields, expected):
    assert determine_design_type(ClassificationInput(**fields)) == expected


def test_replacement_is_checked_before_new_installation():
    data = ClassificationInput(proposed_solution="Replace the old unit and install new supports")
    assert determine_design_type(data) == DesignType.III


@pytest.mark.asyncio
async def test_tool_returns_verdict_dict():
    data = physical(requires_software_change=True)

    result = await evaluate_mt_decision_tree.ainvoke({"change": data.model_dump(by_alias=True)})
    verdict = DecisionTreeVerdict.model_validate(result)

    assert verdict == evaluate_decision_tree(data)


@pytest.mark.asyncio
async def test_evaluator_component():
    evaluator = DecisionTreeEvaluator()

    verdict = await evaluator.process(ClassificationInput(is_temporary=True))

    assert verdict.provisional_design_type == DesignType.IV
    assert (await evaluator.health_check())["status"] == "healthy"
