"""
Semantic Classification Service Component.

Embeds the change description once and ranks it against the reference
exemplars on two axes:

- equipment: which equipment family the change concerns
- modification_type: which MT design category the wording resembles

Provider failures and timeouts never propagate: the affected axes come
back as zero-confidence "Unknown" verdicts with available=False. So does
an axis where no exemplar has positive similarity.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from config import Config
from components.base import BaseComponent, ComponentConfig, ProviderTimeoutError, get_logger
from components.embedding.models import EmbeddingProvider
from components.embedding.service import EmbeddingService
from components.intake.models import DesignType
from components.semantic.models import (
    AXES,
    EQUIPMENT_AXIS,
    MODIFICATION_TYPE_AXIS,
    ScoredLabel,
    SemanticClassification,
    SemanticRequest,
    SemanticVerdict,
)
from components.semantic.reference_store import ReferenceVectorStore
from components.semantic.similarity import rank_by_similarity

logger = get_logger(__name__)


class SemanticConfig(ComponentConfig):
    """Configuration for Semantic Classification."""

    model_config = SettingsConfigDict(env_prefix="SEMANTIC_")

    max_alternatives: int = Field(default=3, ge=0)
    reference_embeddings_path: str = str(Config.REFERENCE_EMBEDDINGS_PATH)


def _clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def design_type_of(verdict: Optional[SemanticVerdict]) -> Optional[DesignType]:
    """Design type a modification-type verdict points at, if any."""
    if verdict is None or not verdict.available or not verdict.category or verdict.confidence <= 0.0:
        return None
    try:
        return DesignType[verdict.category]
    except KeyError:
        return None


class SemanticClassifier(BaseComponent[SemanticRequest, SemanticClassification]):
    """
    Nearest-exemplar classifier over text embeddings.

    Usage:
        classifier = SemanticClassifier()
        result = await classifier.process(SemanticRequest(text="Replace EDG governor"))
        result.equipment.label  # "emergency diesel generator, EDG"

        # Inject a provider and an owned store (tests, scripts)
        classifier = SemanticClassifier(provider=my_provider, store=my_store)
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider] = None,
        store: Optional[ReferenceVectorStore] = None,
        config: Optional[SemanticConfig] = None,
    ):
        self.config = config or SemanticConfig()
        self.provider = provider if provider is not None else EmbeddingService()
        self.store = store if store is not None else ReferenceVectorStore(self.provider)

    @property
    def component_name(self) -> str:
        return "semantic"

    def _rank(self, embedding: Sequence[float], axis: str) -> SemanticVerdict:
        references = self.store.vectors(axis)
        ranked = rank_by_similarity(embedding, [(ref.label, ref.embedding) for ref in references])
        if not ranked:
            return SemanticVerdict.unavailable(axis)

        top_label, top_score = ranked[0]
        if top_score <= 0.0:
            # Nothing resembles the text; table order would pick the winner
            logger.info(
                f"No exemplar on axis {axis} has positive similarity",
                extra={"component": self.component_name},
            )
            return SemanticVerdict.unavailable(axis)

        categories = {ref.label: ref.category for ref in references}
        alternatives = [
            ScoredLabel(label=label, score=_clamp(score))
            for label, score in ranked[1 : 1 + self.config.max_alternatives]
        ]

        return SemanticVerdict(
            axis=axis,
            label=top_label,
            confidence=_clamp(top_score),
            category=categories.get(top_label),
            alternatives=alternatives,
        )

    async def _embed(self, text: str) -> List[float]:
        timeout = self.config.timeout_seconds
        try:
            await asyncio.wait_for(self.store.ensure_built(), timeout=timeout)
            return await asyncio.wait_for(self.provider.embed(text), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(
                f"Embedding timed out after {timeout}s",
                component=self.component_name,
                service="embedding",
                timeout_seconds=timeout,
            ) from e

    async def classify_axes(self, text: str, axes: Sequence[str] = AXES) -> Dict[str, SemanticVerdict]:
        """
        Classify text on the requested axes with a single embedding call.

        Returns:
            Mapping axis -> SemanticVerdict; every requested axis is present
        """
        if not text or not text.strip():
            logger.warning(
                "No text to classify; semantic evidence unavailable",
                extra={"component": self.component_name},
            )
            return {axis: SemanticVerdict.unavailable(axis) for axis in axes}

        try:
            embedding = await self._embed(text)
        except ProviderTimeoutError as e:
            logger.warning(
                f"{e.message}; semantic evidence unavailable",
                extra={"component": self.component_name},
            )
            return {axis: SemanticVerdict.unavailable(axis) for axis in axes}
        except Exception as e:
            logger.warning(
                f"Embedding failed ({type(e).__name__}: {e}); semantic evidence unavailable",
                extra={"component": self.component_name},
            )
            return {axis: SemanticVerdict.unavailable(axis) for axis in axes}

        return {axis: self._rank(embedding, axis) for axis in axes}

    async def classify(self, text: str, axis: str) -> SemanticVerdict:
        """Classify text on a single axis."""
        verdicts = await self.classify_axes(text, (axis,))
        return verdicts[axis]

    async def process(self, request: SemanticRequest) -> SemanticClassification:
        """
        Classify the request text on both axes.

        Args:
            request: SemanticRequest with the combined change text

        Returns:
            SemanticClassification with equipment and modification-type verdicts
        """
        verdicts = await self.classify_axes(request.text)
        return SemanticClassification(
            equipment=verdicts[EQUIPMENT_AXIS],
            modification_type=verdicts[MODIFICATION_TYPE_AXIS],
        )

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if self.store.is_built else "degraded",
            "component": self.component_name,
            "reference_store_built": self.store.is_built,
            "exemplars": len(self.store.exemplars),
        }


def create_default_classifier(config: Optional[SemanticConfig] = None) -> SemanticClassifier:
    """
    Classifier backed by OpenAI embeddings, preferring precomputed references.
    """
    config = config or SemanticConfig()
    provider = EmbeddingService()

    path = Path(config.reference_embeddings_path)
    if path.exists():
        store = ReferenceVectorStore.from_json(path, provider)
        logger.info(f"Loaded reference embeddings from {path}", extra={"component": "semantic"})
    else:
        store = ReferenceVectorStore(provider)

    return SemanticClassifier(provider=provider, store=store, config=config)
