"""Tests for the narrative extraction grammar and adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from components.base import ConfigurationError
from components.decision_tree.service import evaluate_decision_tree
from components.intake.models import ClassificationInput, DesignType
from components.narrative.agent import narrative_node, semantic_context, tree_context
from components.narrative.extraction import extract_design_type, extract_required_flag, extract_verdict
from components.narrative.models import NarrativeRequest, NarrativeVerdict
from components.narrative.prompts import build_analysis_prompt
from components.narrative.service import NarrativeAdapter, NarrativeConfig, NarrativeService
from components.semantic.models import SemanticVerdict
from tests.fakes import FailingNarrativeProvider, ScriptedNarrativeProvider


@pytest.mark.parametrize(
    "text, flag",
    [
        ("MT Required: Yes", True),
        ("mt   required:   YES, due to scope", True),
        ("Conclusion: an MT is required for this change.", True),
        ("This change requires an MT.", True),
        ("MT Required: No", False),
        ("Because of the limited scope the MT is not required.", False),
        ("An MT may be needed after further review.", None),
        ("", None),
    ],
)
def test_required_flag_phrases(text, flag):
    assert extract_required_flag(text)[0] is flag


def test_affirmative_phrase_wins_when_both_present():
    flag, phrase = extract_required_flag("MT Required: No for phase 1. Overall the MT is required.")

    assert flag is True
    assert phrase == "MT is required"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Design Type: Type III (Non-Identical Replacement)", DesignType.III),
        ("Design Type: type ii", DesignType.II),
        ("Classified as Type I new design", DesignType.I),
        ("Type IV temporary", DesignType.IV),
        ("Type V", DesignType.V),
        ("Typed in the log", None),
        ("No classification given", None),
    ],
)
def test_design_type_labels(text, expected):
    assert extract_design_type(text) == expected


def test_type_i_does_not_match_inside_type_ii():
    assert extract_design_type("Design Type: Type II") == DesignType.II


def test_prose_without_markers_keeps_raw_text():
    verdict = extract_verdict("The change looks routine.")

    assert verdict.available
    assert verdict.explicit_required_flag is None
    assert verdict.extracted_design_type is None
    assert verdict.raw_text == "The change looks routine."
    assert not verdict.has_extraction


def test_unavailable_verdict_has_no_extraction():
    verdict = NarrativeVerdict.unavailable()

    assert verdict.available is False
    assert not verdict.has_extraction


@pytest.mark.asyncio
async def test_adapter_extracts_verdict(narrative_adapter, narrative_provider):
    verdict = await narrative_adapter.analyze("Replace valve", {"Equipment Classification": "valve"})

    assert verdict.explicit_required_flag is True
    assert verdict.matched_phrase == "MT Required: Yes"
    assert verdict.extracted_design_type == DesignType.III
    assert narrative_provider.last_context == {"Equipment Classification": "valve"}


@pytest.mark.asyncio
async def test_adapter_degrades_on_provider_failure():
    adapter = NarrativeAdapter(FailingNarrativeProvider(), NarrativeConfig())

    verdict = await adapter.process(NarrativeRequest(text="Replace valve"))

    assert verdict == NarrativeVerdict.unavailable()


@pytest.mark.asyncio
async def test_adapter_degrades_on_timeout():
    slow = ScriptedNarrativeProvider("MT Required: Yes", delay=1.0)
    adapter = NarrativeAdapter(slow, NarrativeConfig(timeout_seconds=0.05))

    verdict = await adapter.process(NarrativeRequest(text="Replace valve"))

    assert verdict.available is False


@pytest.mark.asyncio
async def test_disabled_adapter_skips_provider():
    provider = ScriptedNarrativeProvider("MT Required: Yes")
    adapter = NarrativeAdapter(provider, NarrativeConfig(enabled=False))

    verdict = await adapter.process(NarrativeRequest(text="Replace valve"))

    assert verdict.available is False
    assert provider.contexts == []
    assert (await adapter.health_check())["status"] == "degraded"


@pytest.mark.asyncio
async def test_service_without_key_raises_configuration_error():
    service = NarrativeService(NarrativeConfig(openai_api_key=""))

    with pytest.raises(ConfigurationError):
        await service.analyze("Replace valve", {})

    # the adapter turns the same failure into degraded evidence
    verdict = await NarrativeAdapter(service, service.config).process(NarrativeRequest(text="Replace valve"))
    assert verdict.available is False


@pytest.mark.asyncio
async def test_service_sends_system_and_user_messages():
    service = NarrativeService(NarrativeConfig(openai_api_key="test-key"))
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=SimpleNamespace(content="MT Required: No\nDesign Type: Type V"))
    service._llm = llm

    prose = await service.analyze("Swap pump with identical pump", {"MT Type Suggestion": "identical"})

    assert prose.startswith("MT Required: No")
    messages = llm.ainvoke.call_args.args[0]
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "Swap pump with identical pump" in messages[1]["content"]
    assert "- MT Type Suggestion: identical" in messages[1]["content"]


def test_prompt_placeholder_without_context():
    prompt = build_analysis_prompt("  Replace valve  ", {})

    assert "Replace valve" in prompt
    assert "No preliminary analysis available" in prompt


def test_context_builders():
    equipment = SemanticVerdict(axis="equipment", label="pump", confidence=0.8123)
    context = semantic_context(equipment, SemanticVerdict.unavailable("modification_type"))
    assert context == {"Equipment Classification": "pump (Confidence: 81.2%)"}

    verdict = evaluate_decision_tree(ClassificationInput(is_temporary=True))
    assert tree_context(verdict) == {
        "Decision Tree": "MT not required, Type IV - All changes are temporary"
    }


@pytest.mark.asyncio
async def test_node_uses_semantic_context_when_available(narrative_adapter, narrative_provider):
    state = {
        "classification_input": ClassificationInput(problem_description="Replace pump seal"),
        "equipment": SemanticVerdict(axis="equipment", label="reactor coolant pump, RCP", confidence=0.9),
        "modification_type": SemanticVerdict.unavailable("modification_type"),
    }

    update = await narrative_node(state, {"configurable": {"narrative_adapter": narrative_adapter}})

    assert update["narrative"].explicit_required_flag is True
    assert list(narrative_provider.last_context) == ["Equipment Classification"]
    assert "current_agent" not in update


@pytest.mark.asyncio
async def test_node_uses_tree_context_when_running_alongside_semantic(narrative_adapter, narrative_provider):
    state = {"classification_input": ClassificationInput(is_temporary=True, problem_description="Jumper")}

    await narrative_node(state, {"configurable": {"narrative_adapter": narrative_adapter}})

    assert list(narrative_provider.last_context) == ["Decision Tree"]
