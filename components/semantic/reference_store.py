"""
Reference Vector Store.

Holds the embedded reference exemplars for both classification axes. The
store is built at most once per instance: concurrent first callers share
one in-flight build, a failed build is discarded so a later call can try
again, and once built the vectors are immutable tuples read without
locking.

Embeddings can also be loaded from the precomputed JSON written by
scripts/generate_reference_embeddings.py, which avoids the provider calls
at startup.
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from components.base import ProcessingError, get_logger
from components.embedding.models import EmbeddingProvider
from components.semantic.models import AXES, ReferenceExemplar, ReferenceVector
from components.semantic.references import DEFAULT_EXEMPLARS

logger = get_logger(__name__)

_Vectors = Dict[str, Tuple[ReferenceVector, ...]]


class ReferenceVectorStore:
    """
    Embedded exemplars, keyed by axis.

    Usage:
        store = ReferenceVectorStore(EmbeddingService())
        await store.ensure_built()
        store.vectors("equipment")
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider],
        exemplars: Iterable[ReferenceExemplar] = DEFAULT_EXEMPLARS,
    ):
        self._provider = provider
        self._exemplars: Tuple[ReferenceExemplar, ...] = tuple(exemplars)
        self._vectors: Optional[_Vectors] = None
        self._lock = asyncio.Lock()
        self._build_task: Optional[asyncio.Task] = None

    @property
    def exemplars(self) -> Tuple[ReferenceExemplar, ...]:
        return self._exemplars

    @property
    def is_built(self) -> bool:
        return self._vectors is not None

    def vectors(self, axis: str) -> Tuple[ReferenceVector, ...]:
        """Reference vectors for one axis. The store must be built."""
        if self._vectors is None:
            raise ProcessingError(
                "Reference store has not been built",
                component="reference_store",
                stage="lookup",
            )
        return self._vectors.get(axis, ())

    async def ensure_built(self) -> None:
        """
        Build the store if needed, sharing one build across concurrent callers.

        Raises:
            Whatever the embedding provider raised, when the build fails.
        """
        if self._vectors is not None:
            return

        async with self._lock:
            if self._vectors is not None:
                return
            if self._build_task is None:
                self._build_task = asyncio.ensure_future(self._build())
                self._build_task.add_done_callback(self._on_build_done)
            task = self._build_task

        # Shielded so a caller timing out does not cancel the shared build
        vectors = await asyncio.shield(task)
        self._vectors = vectors

    def _on_build_done(self, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is not None:
            # Failed builds are not cached
            if self._build_task is task:
                self._build_task = None
            return
        self._vectors = task.result()

    async def _build(self) -> _Vectors:
        if self._provider is None:
            raise ProcessingError(
                "No embedding provider configured for reference store",
                component="reference_store",
                stage="build",
            )

        logger.info(
            f"Building reference store ({len(self._exemplars)} exemplars)",
            extra={"component": "reference_store"},
        )

        embeddings = await asyncio.gather(
            *[self._provider.embed(exemplar.text) for exemplar in self._exemplars]
        )

        vectors = self._group(
            (exemplar, embedding) for exemplar, embedding in zip(self._exemplars, embeddings)
        )
        logger.info("Reference store built", extra={"component": "reference_store"})
        return vectors

    @staticmethod
    def _group(pairs) -> _Vectors:
        grouped: Dict[str, list] = {axis: [] for axis in AXES}
        for exemplar, embedding in pairs:
            grouped.setdefault(exemplar.axis, []).append(
                ReferenceVector(
                    label=exemplar.label,
                    category=exemplar.category,
                    embedding=tuple(embedding),
                )
            )
        return {axis: tuple(items) for axis, items in grouped.items()}

    # ------------------------------------------------------------------
    # Precomputed embeddings
    # ------------------------------------------------------------------

    @classmethod
    def from_json(
        cls,
        path: Union[str, Path],
        provider: Optional[EmbeddingProvider] = None,
        exemplars: Iterable[ReferenceExemplar] = DEFAULT_EXEMPLARS,
    ) -> "ReferenceVectorStore":
        """
        Create a store pre-populated from a precomputed embeddings file.

        If any exemplar is missing from the file the whole store is built
        on first use through the provider, which is then required.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        saved = data.get("embeddings", {})
        store = cls(provider, exemplars)

        pairs = []
        for exemplar in store.exemplars:
            embedding = saved.get(exemplar.axis, {}).get(exemplar.label)
            if embedding is None:
                logger.warning(
                    f"No precomputed embedding for '{exemplar.label}'; store will rebuild",
                    extra={"component": "reference_store"},
                )
                return store
            pairs.append((exemplar, embedding))

        store._vectors = cls._group(pairs)
        return store

    def save_json(self, path: Union[str, Path], model: Optional[str] = None) -> Path:
        """Write the built store in the precomputed embeddings format."""
        if self._vectors is None:
            raise ProcessingError(
                "Reference store has not been built",
                component="reference_store",
                stage="save",
            )

        embeddings = {
            axis: {ref.label: list(ref.embedding) for ref in refs}
            for axis, refs in self._vectors.items()
        }
        dimension = next(
            (len(ref.embedding) for refs in self._vectors.values() for ref in refs), 0
        )
        output = {
            "metadata": {
                "model": model,
                "dimension": dimension,
                "reference_count": sum(len(refs) for refs in self._vectors.values()),
                "generated_at": datetime.now().isoformat(),
            },
            "embeddings": embeddings,
        }

        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output, f)
        return output_path
