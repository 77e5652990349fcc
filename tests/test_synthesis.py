"""Tests for evidence synthesis."""

import pytest

from components.decision_tree.service import evaluate_decision_tree
from components.intake.models import ClassificationInput, DesignType
from components.narrative.extraction import extract_verdict
from components.narrative.models import NarrativeVerdict
from components.semantic.models import SemanticVerdict
from components.synthesis.agent import synthesis_node
from components.synthesis.models import (
    BASIS_FALLBACK,
    BASIS_HEURISTIC,
    BASIS_NARRATIVE,
    BASIS_TERMINAL_EXEMPTION,
    GROUNDING_DEFAULT,
    GROUNDING_EXPLICIT,
    GROUNDING_INFERRED,
    INSUFFICIENT_EVIDENCE_REASON,
    SynthesisRequest,
)
from components.synthesis.service import (
    EvidenceSynthesizer,
    SynthesisConfig,
    synthesize_from_tree,
    tree_grounding,
)
from components.synthesis.signals import generate_reason, requirement_for

UNAVAILABLE_EQUIPMENT = SemanticVerdict.unavailable("equipment")
UNAVAILABLE_MODIFICATION = SemanticVerdict.unavailable("modification_type")


def equipment(label: str, confidence: float, category: str = "General Equipment") -> SemanticVerdict:
    return SemanticVerdict(axis="equipment", label=label, confidence=confidence, category=category)


def modification(category: str, confidence: float) -> SemanticVerdict:
    return SemanticVerdict(
        axis="modification_type", label=f"type {category}", confidence=confidence, category=category
    )


def request_for(data: ClassificationInput, grounding: str = GROUNDING_EXPLICIT, **evidence) -> SynthesisRequest:
    evidence.setdefault("equipment", UNAVAILABLE_EQUIPMENT)
    evidence.setdefault("modification_type", UNAVAILABLE_MODIFICATION)
    evidence.setdefault("narrative", NarrativeVerdict.unavailable())
    return SynthesisRequest(
        combined_text=data.combined_text,
        tree_verdict=evaluate_decision_tree(data),
        tree_grounding=grounding,
        **evidence,
    )


@pytest.fixture
def synthesizer():
    return EvidenceSynthesizer(SynthesisConfig())


def test_identical_replacement_stands_against_narrative(synthesizer):
    data = ClassificationInput(
        is_physical_change=True,
        is_identical_replacement=True,
        problem_description="Replace worn pump impeller with an identical part",
    )
    request = request_for(
        data,
        equipment=equipment("reactor coolant pump, RCP", 0.7),
        narrative=extract_verdict("MT Required: Yes\nDesign Type: Type III"),
    )

    decision = synthesizer.synthesize(request)

    assert decision.mt_required is False
    assert decision.design_type == DesignType.V
    assert decision.requirement_basis == BASIS_TERMINAL_EXEMPTION
    assert decision.confidence >= 0.95
    assert decision.reason.startswith("Identical replacement - Design Type V")
    conflicts = [item for item in decision.evidence_trail if item.source == "conflict"]
    assert len(conflicts) == 1
    assert "identical_replacement" in conflicts[0].summary


def test_temporary_change_is_exempt(synthesizer):
    data = ClassificationInput(is_temporary=True, problem_description="Temporary jumper on a lighting panel")

    decision = synthesizer.synthesize(request_for(data))

    assert decision.mt_required is False
    assert decision.design_type == DesignType.IV
    assert "temporary" in decision.reason.lower()
    assert decision.confidence == pytest.approx(0.95)


def test_facility_change_package_is_exempt_type_ii(synthesizer):
    data = ClassificationInput(facility_change_package_applicable=True)

    decision = synthesizer.synthesize(request_for(data, narrative=extract_verdict("Type I")))

    assert decision.mt_required is False
    assert decision.design_type == DesignType.II
    assert decision.requirement_basis == BASIS_TERMINAL_EXEMPTION


def test_inferred_exemption_is_not_terminal(synthesizer):
    data = ClassificationInput(is_physical_change=True, is_identical_replacement=True)
    request = request_for(
        data,
        grounding=GROUNDING_INFERRED,
        narrative=extract_verdict("MT Required: Yes"),
    )

    decision = synthesizer.synthesize(request)

    assert decision.mt_required is True
    assert decision.requirement_basis == BASIS_NARRATIVE


def test_narrative_statement_decides_requirement(synthesizer):
    data = ClassificationInput(
        is_physical_change=True,
        requires_software_change=True,
        proposed_solution="Upgrade controller firmware",
    )
    request = request_for(
        data,
        equipment=equipment("pressure transmitter, pressure sensor", 0.8),
        modification_type=modification("III", 0.7),
        narrative=extract_verdict("After review, MT is not required. Design Type: Type III"),
    )

    decision = synthesizer.synthesize(request)

    assert decision.mt_required is False
    assert decision.requirement_basis == BASIS_NARRATIVE
    # grounded gate fired, so the tree's type wins over the narrative type
    assert decision.design_type == DesignType.II
    assert decision.design_type_basis == "decision_tree"
    assert decision.confidence == pytest.approx(0.4 * 0.8 + 0.6)
    assert decision.reason.startswith("Narrative assessment states 'MT is not required'")
    assert any(item.source == "conflict" for item in decision.evidence_trail)


def test_heuristic_used_when_narrative_has_no_statement(synthesizer):
    data = ClassificationInput(
        is_physical_change=True,
        requires_software_change=True,
        proposed_solution="Upgrade controller firmware",
    )
    request = request_for(
        data,
        equipment=equipment("pressure transmitter, pressure sensor", 0.8),
        modification_type=modification("III", 0.7),
        narrative=extract_verdict("Routine work."),
    )

    decision = synthesizer.synthesize(request)

    assert decision.mt_required is True
    assert decision.requirement_basis == BASIS_HEURISTIC
    assert decision.confidence == pytest.approx(0.8)
    assert not any(item.source == "conflict" for item in decision.evidence_trail)


def test_design_type_falls_back_to_narrative_then_semantic(synthesizer):
    data = ClassificationInput(problem_description="Rework the sampling skid")

    with_narrative = synthesizer.synthesize(request_for(
        data,
        grounding=GROUNDING_DEFAULT,
        modification_type=modification("I", 0.6),
        narrative=extract_verdict("Design Type: Type III"),
    ))
    semantic_only = synthesizer.synthesize(request_for(
        data, grounding=GROUNDING_DEFAULT, modification_type=modification("I", 0.6)
    ))

    assert with_narrative.design_type == DesignType.III
    assert with_narrative.design_type_basis == "narrative"
    assert semantic_only.design_type == DesignType.I
    assert semantic_only.design_type_basis == "semantic_modification_type"


@pytest.mark.parametrize(
    "text, required",
    [
        ("Temporary jumper on a lighting circuit", False),
        ("Temporary jumper on emergency lighting circuit", True),
    ],
)
def test_temporary_heuristic_depends_on_safety_signal(synthesizer, text, required):
    data = ClassificationInput(problem_description=text)

    decision = synthesizer.synthesize(request_for(
        data, grounding=GROUNDING_DEFAULT, modification_type=modification("IV", 0.7)
    ))

    assert decision.design_type == DesignType.IV
    assert decision.mt_required is required


def test_identical_heuristic_reads_equipment_label(synthesizer):
    data = ClassificationInput(problem_description="Swap the actuator like-for-like")
    label = "containment isolation valve, isolation valve"

    flagged = synthesizer.synthesize(request_for(
        data,
        grounding=GROUNDING_DEFAULT,
        equipment=equipment(label, 0.6),
        modification_type=modification("V", 0.7),
    ))
    plain = synthesizer.synthesize(request_for(
        data, grounding=GROUNDING_DEFAULT, modification_type=modification("V", 0.7)
    ))

    assert flagged.mt_required is True
    assert plain.mt_required is False


def test_no_usable_evidence_is_conservative(synthesizer):
    data = ClassificationInput(problem_description="Evaluate the pump vibration readings")

    decision = synthesizer.synthesize(request_for(data, grounding=GROUNDING_DEFAULT))

    assert decision.mt_required is True
    assert decision.confidence == pytest.approx(0.25)
    assert decision.reason == INSUFFICIENT_EVIDENCE_REASON
    assert decision.requirement_basis == BASIS_FALLBACK
    assert decision.design_type in set(DesignType)


def test_tree_only_decision_uses_fallback_confidence():
    data = ClassificationInput(is_physical_change=True, requires_hoisting_rigging=True)

    decision = synthesize_from_tree(evaluate_decision_tree(data), data.combined_text, GROUNDING_EXPLICIT)

    assert decision.mt_required is True
    assert decision.confidence == pytest.approx(0.25)
    assert decision.requirement_basis == BASIS_HEURISTIC
    assert decision.reason.startswith(INSUFFICIENT_EVIDENCE_REASON + ". ")


def test_evidence_trail_lists_every_source(synthesizer):
    data = ClassificationInput(is_physical_change=True, requires_new_procedures=True)
    request = request_for(data, grounding=GROUNDING_INFERRED).model_copy(
        update={"scenario": "valve_replacement", "inferred_flags": {"requires_new_procedures": True}}
    )

    decision = synthesizer.synthesize(request)

    assert [item.source for item in decision.evidence_trail] == [
        "scenario_inference",
        "decision_tree",
        "semantic_equipment",
        "semantic_modification_type",
        "narrative",
    ]
    assert "requires_new_procedures=True" in decision.evidence_trail[0].summary


def test_tree_grounding():
    assert tree_grounding(["is_temporary"], {"is_physical_change": True}) == GROUNDING_EXPLICIT
    assert tree_grounding([], {"is_physical_change": True}) == GROUNDING_INFERRED
    assert tree_grounding(None, None) == GROUNDING_DEFAULT


def test_reason_text_includes_signal_sentences():
    reason = generate_reason(True, DesignType.I, "new digital control system in the reactor building")

    assert reason.startswith("Type I (New Design)")
    assert "cybersecurity evaluation" in reason
    assert "seismic qualification" in reason
    assert "NEPA" not in reason
    assert requirement_for(DesignType.II, "") is True


@pytest.mark.asyncio
async def test_synthesis_node_builds_request_from_state():
    data = ClassificationInput(is_temporary=True)
    state = {
        "classification_input": data,
        "tree_verdict": evaluate_decision_tree(data),
        "explicit_flags": ["is_temporary"],
        "inferred_flags": {},
        "equipment": UNAVAILABLE_EQUIPMENT,
        "modification_type": UNAVAILABLE_MODIFICATION,
        "narrative": NarrativeVerdict.unavailable(),
    }

    update = await synthesis_node(state)

    assert update["decision"].design_type == DesignType.IV
    assert update["decision"].tree_grounding == GROUNDING_EXPLICIT
    assert update["current_agent"] == "synthesis"


def test_zero_confidence_modification_verdict_is_ignored(synthesizer):
    data = ClassificationInput(problem_description="Repaint the stairwell handrail")
    tree = evaluate_decision_tree(data)

    decision = synthesizer.synthesize(request_for(
        data,
        grounding=GROUNDING_DEFAULT,
        modification_type=modification("I", 0.0),
        narrative=extract_verdict("Looks routine."),
    ))

    assert decision.design_type == tree.provisional_design_type
    assert decision.design_type_basis == "decision_tree_provisional"


def test_manual_review_flagged_when_only_the_tree_answered(synthesizer):
    data = ClassificationInput(
        is_physical_change=True,
        requires_software_change=True,
        problem_description="Update the pressure transmitter configuration",
    )

    tree_only = synthesizer.synthesize(request_for(data))
    with_semantic = synthesizer.synthesize(request_for(
        data, equipment=equipment("pressure transmitter, pressure sensor", 0.8)
    ))

    assert tree_only.mt_required is True
    assert tree_only.requirement_basis == BASIS_HEURISTIC
    assert tree_only.reason.startswith(INSUFFICIENT_EVIDENCE_REASON)
    assert "manual review" in tree_only.reason.lower()
    assert not with_semantic.reason.startswith(INSUFFICIENT_EVIDENCE_REASON)
