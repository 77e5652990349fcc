"""
Embedding Service Component.

Generates embeddings for change descriptions and reference exemplars using
OpenAI's embedding models. Implements the EmbeddingProvider contract used
by the semantic classifier and the reference store.
"""

import asyncio
from typing import Dict, Any, List, Optional

from openai import AsyncOpenAI
from openai import RateLimitError, APIError, APITimeoutError
from pydantic_settings import SettingsConfigDict

from config import Config
from components.base import BaseComponent, ComponentConfig, get_logger
from components.base.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    ProcessingError,
    ProviderTimeoutError,
)
from components.embedding.models import (
    EmbeddingRequest,
    EmbeddingResponse,
)

logger = get_logger(__name__)


class EmbeddingConfig(ComponentConfig):
    """Configuration for Embedding Service."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    # Model settings
    embedding_model: str = Config.EMBEDDING_MODEL
    embedding_dimensions: int = 3072  # Default for text-embedding-3-large


class EmbeddingService(BaseComponent[EmbeddingRequest, EmbeddingResponse]):
    """
    Service for generating text embeddings using OpenAI.

    Usage:
        service = EmbeddingService()
        vector = await service.embed("Replace pressure transmitter PT-101")

        # With custom config
        config = EmbeddingConfig(embedding_model="text-embedding-3-small")
        service = EmbeddingService(config)
    """

    def __init__(self, config: Optional[EmbeddingConfig] = None):
        """
        Initialize the embedding service.

        Args:
            config: Optional configuration. Uses defaults if not provided.
        """
        self.config = config or EmbeddingConfig()
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not self.config.has_api_key:
                raise ConfigurationError(
                    "OpenAI API key is required",
                    component=self.component_name,
                    missing_keys=["openai_api_key"],
                )
            self._client = AsyncOpenAI(api_key=self.config.openai_api_key)
        return self._client

    @property
    def component_name(self) -> str:
        return "embedding"

    def _clean_text(self, text: str) -> str:
        """Clean text for embedding (remove excess whitespace)."""
        return " ".join((text or "").split())

    async def _generate_embedding_with_retry(self, text: str) -> List[float]:
        """Generate embedding with retry logic."""
        for attempt in range(self.config.max_retries):
            try:
                response = await self.client.embeddings.create(
                    model=self.config.embedding_model,
                    input=text,
                    encoding_format="float",
                )
                return response.data[0].embedding

            except (RateLimitError, APITimeoutError) as e:
                if attempt < self.config.max_retries - 1:
                    wait_time = self.config.retry_delay_seconds * (2**attempt)
                    logger.warning(
                        f"Embedding call throttled, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt + 1}/{self.config.max_retries})",
                        extra={"component": self.component_name},
                    )
                    await asyncio.sleep(wait_time)
                elif isinstance(e, APITimeoutError):
                    raise ProviderTimeoutError(
                        f"Embedding request timed out after {self.config.max_retries} attempts",
                        component=self.component_name,
                        service="openai.embeddings",
                    ) from e
                else:
                    raise ExternalServiceError(
                        f"Max retries exceeded: {str(e)}",
                        component=self.component_name,
                        service="openai.embeddings",
                        retryable=True,
                    ) from e

            except APIError as e:
                if attempt < self.config.max_retries - 1:
                    wait_time = self.config.retry_delay_seconds * (2**attempt)
                    logger.warning(
                        f"Embedding API error, retrying in {wait_time:.1f}s: {e}",
                        extra={"component": self.component_name},
                    )
                    await asyncio.sleep(wait_time)
                else:
                    raise ExternalServiceError(
                        f"OpenAI API error: {str(e)}",
                        component=self.component_name,
                        service="openai.embeddings",
                        status_code=getattr(e, "status_code", None),
                    ) from e

        raise ProcessingError(
            "Failed to generate embedding after all retries",
            component=self.component_name,
            stage="api_call",
        )

    async def embed(self, text: str) -> List[float]:
        """
        Embed a single text.

        Raises:
            ProcessingError: If the text is empty
            ConfigurationError: If no API key is configured
            ProviderTimeoutError: If every attempt timed out
            ExternalServiceError: If the provider keeps failing
        """
        cleaned = self._clean_text(text)
        if not cleaned:
            raise ProcessingError(
                "Cannot embed empty text",
                component=self.component_name,
                stage="input_validation",
            )
        return await self._generate_embedding_with_retry(cleaned)

    async def process(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """
        Generate embedding for the input text.

        Args:
            request: EmbeddingRequest with text

        Returns:
            EmbeddingResponse with embedding vector
        """
        input_text = self._clean_text(request.text)
        embedding = await self.embed(input_text)

        return EmbeddingResponse(
            embedding=embedding,
            model=self.config.embedding_model,
            dimensions=len(embedding),
            input_text=input_text[:200] + "..." if len(input_text) > 200 else input_text,
        )

    async def health_check(self) -> Dict[str, Any]:
        """Check if embedding service is healthy."""
        if not self.config.has_api_key:
            return {
                "status": "unhealthy",
                "component": self.component_name,
                "error": "OpenAI API key not configured",
            }

        try:
            test_response = await self.client.embeddings.create(
                model=self.config.embedding_model,
                input="health check",
                encoding_format="float",
            )
        except APIError as e:
            return {
                "status": "unhealthy",
                "component": self.component_name,
                "error": str(e),
            }

        return {
            "status": "healthy",
            "component": self.component_name,
            "model": self.config.embedding_model,
            "dimensions": len(test_response.data[0].embedding),
        }
