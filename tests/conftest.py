"""Pytest configuration and fixtures."""

import os

import pytest

# Read by config.py at import time
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("REQUEST_TIMEOUT_SECONDS", "30")

from components.intake.models import ClassificationInput  # noqa: E402
from components.narrative.service import NarrativeAdapter, NarrativeConfig  # noqa: E402
from components.semantic.reference_store import ReferenceVectorStore  # noqa: E402
from components.semantic.service import SemanticClassifier, SemanticConfig  # noqa: E402
from tests.fakes import ConceptEmbedder, ScriptedNarrativeProvider  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Keep provider calls offline: no key means real providers fail fast."""
    os.environ["OPENAI_API_KEY"] = ""


@pytest.fixture
def embedder():
    return ConceptEmbedder()


@pytest.fixture
def semantic_classifier(embedder):
    return SemanticClassifier(
        provider=embedder,
        store=ReferenceVectorStore(embedder),
        config=SemanticConfig(timeout_seconds=5),
    )


@pytest.fixture
def narrative_provider():
    return ScriptedNarrativeProvider("MT Required: Yes\nDesign Type: Type III (Non-Identical Replacement)")


@pytest.fixture
def narrative_adapter(narrative_provider):
    return NarrativeAdapter(narrative_provider, NarrativeConfig(timeout_seconds=5))


@pytest.fixture
def valve_replacement():
    """A different-manufacturer valve replacement described only in prose."""
    return ClassificationInput.model_validate({
        "problemDescription": (
            "Replace the failed isolation valve in the emergency cooling system "
            "with a valve from a different manufacturer"
        ),
        "proposedSolution": "Install the replacement valve and update the maintenance procedure",
        "projectNumber": "MT-2024-0117",
        "designAuthority": "Mechanical Engineering",
    })
