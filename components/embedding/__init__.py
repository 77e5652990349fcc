"""
Embedding Service Component.

Generates text embeddings using OpenAI's embedding models.

Usage:
    from components.embedding import EmbeddingService

    service = EmbeddingService()
    vector = await service.embed("Replace emergency diesel generator governor")
    print(len(vector))  # 3072
"""

from components.embedding.models import (
    EmbeddingProvider,
    EmbeddingVector,
    EmbeddingRequest,
    EmbeddingResponse,
)
from components.embedding.service import EmbeddingService, EmbeddingConfig

__all__ = [
    # Contract
    "EmbeddingProvider",
    "EmbeddingVector",
    # Models
    "EmbeddingRequest",
    "EmbeddingResponse",
    # Service
    "EmbeddingService",
    "EmbeddingConfig",
]
