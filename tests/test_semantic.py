"""Tests for the semantic classifier."""

import pytest

from components.base import ProviderTimeoutError
from components.intake.models import ClassificationInput, DesignType
from components.semantic.agent import semantic_node
from components.semantic.models import (
    EQUIPMENT_AXIS,
    MODIFICATION_TYPE_AXIS,
    UNKNOWN_LABEL,
    SemanticRequest,
    SemanticVerdict,
)
from components.semantic.reference_store import ReferenceVectorStore
from components.semantic.service import SemanticClassifier, SemanticConfig, design_type_of
from tests.fakes import ConceptEmbedder, FailingEmbedder


@pytest.mark.asyncio
async def test_equipment_axis_finds_nearest_exemplar(semantic_classifier):
    verdict = await semantic_classifier.classify(
        "Emergency diesel generator governor replacement", EQUIPMENT_AXIS
    )

    assert verdict.available
    assert verdict.label == "emergency diesel generator, EDG"
    assert verdict.category == "Electrical Equipment"
    assert verdict.confidence == pytest.approx(1.0)
    assert len(verdict.alternatives) == 3
    assert all(0.0 <= alt.score <= 1.0 for alt in verdict.alternatives)


@pytest.mark.asyncio
async def test_modification_axis_maps_to_design_type(semantic_classifier):
    verdict = await semantic_classifier.classify(
        "Temporary jumper to bypass the tripped relay", MODIFICATION_TYPE_AXIS
    )

    assert verdict.label == "temporary, temporary modification"
    assert verdict.category == "IV"
    assert design_type_of(verdict) == DesignType.IV
    assert verdict.confidence > 0.9


@pytest.mark.asyncio
async def test_both_axes_share_one_embedding(embedder, semantic_classifier):
    result = await semantic_classifier.process(SemanticRequest(text="Replace pressure transmitter"))

    assert result.equipment.label == "pressure transmitter, pressure sensor"
    assert result.any_available
    assert result.max_confidence == pytest.approx(result.equipment.confidence)
    # reference build plus one call for the request text
    assert embedder.calls[-1] == "Replace pressure transmitter"
    assert len(embedder.calls) == len(semantic_classifier.store.exemplars) + 1


@pytest.mark.asyncio
async def test_store_is_built_once_across_requests(embedder, semantic_classifier):
    for text in ("pump seal", "valve packing", "pressure sensor drift"):
        await semantic_classifier.process(SemanticRequest(text=text))

    assert len(embedder.calls) == len(semantic_classifier.store.exemplars) + 3


@pytest.mark.asyncio
async def test_provider_failure_yields_unknown():
    failing = FailingEmbedder()
    classifier = SemanticClassifier(provider=failing, store=ReferenceVectorStore(failing))

    result = await classifier.process(SemanticRequest(text="Replace pump seal"))

    for verdict in (result.equipment, result.modification_type):
        assert verdict.label == UNKNOWN_LABEL
        assert verdict.confidence == 0.0
        assert verdict.available is False
    assert not result.any_available
    assert result.max_confidence == 0.0


@pytest.mark.asyncio
async def test_timeout_yields_unknown():
    slow = ConceptEmbedder(delay=1.0)
    classifier = SemanticClassifier(
        provider=slow,
        store=ReferenceVectorStore(slow),
        config=SemanticConfig(timeout_seconds=0.05),
    )

    verdict = await classifier.classify("Replace pump seal", EQUIPMENT_AXIS)

    assert verdict.available is False
    assert verdict.label == UNKNOWN_LABEL
    with pytest.raises(ProviderTimeoutError):
        await classifier._embed("Replace pump seal")


@pytest.mark.asyncio
async def test_text_unlike_every_exemplar_is_unavailable(semantic_classifier):
    result = await semantic_classifier.process(SemanticRequest(text="Repaint the stairwell handrail"))

    for verdict in (result.equipment, result.modification_type):
        assert verdict.available is False
        assert verdict.label == UNKNOWN_LABEL
    assert design_type_of(result.modification_type) is None


@pytest.mark.asyncio
async def test_dimension_mismatch_is_unavailable(semantic_classifier):
    await semantic_classifier.store.ensure_built()

    verdict = semantic_classifier._rank([1.0, 0.0, 0.0], EQUIPMENT_AXIS)

    assert verdict.available is False


@pytest.mark.asyncio
async def test_empty_text_skips_provider(embedder, semantic_classifier):
    result = await semantic_classifier.process(SemanticRequest(text="   "))

    assert not result.any_available
    assert embedder.calls == []


def test_design_type_of_ignores_unusable_verdicts():
    assert design_type_of(None) is None
    assert design_type_of(SemanticVerdict.unavailable(MODIFICATION_TYPE_AXIS)) is None
    assert design_type_of(SemanticVerdict(axis=EQUIPMENT_AXIS, label="pump", category="Mechanical Equipment")) is None
    assert design_type_of(SemanticVerdict(axis=MODIFICATION_TYPE_AXIS, label="x", category="III")) is None
    assert design_type_of(
        SemanticVerdict(axis=MODIFICATION_TYPE_AXIS, label="x", category="III", confidence=0.6)
    ) == DesignType.III


@pytest.mark.asyncio
async def test_semantic_node_uses_injected_classifier(semantic_classifier):
    state = {"classification_input": ClassificationInput(problem_description="Reactor coolant pump seal leak")}

    update = await semantic_node(state, {"configurable": {"semantic_classifier": semantic_classifier}})

    assert update["equipment"].label == "reactor coolant pump, RCP"
    assert update["modification_type"].axis == MODIFICATION_TYPE_AXIS
    assert "current_agent" not in update


@pytest.mark.asyncio
async def test_health_check_reports_store_state(semantic_classifier):
    assert (await semantic_classifier.health_check())["status"] == "degraded"
    await semantic_classifier.store.ensure_built()
    assert (await semantic_classifier.health_check())["status"] == "healthy"
