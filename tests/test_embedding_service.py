"""Tests for the OpenAI embedding provider with a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import APITimeoutError

from components.base import ConfigurationError, ProcessingError, ProviderTimeoutError
from components.embedding.models import EmbeddingProvider, EmbeddingRequest
from components.embedding.service import EmbeddingConfig, EmbeddingService


def mock_response(dimension: int = 8, value: float = 0.1):
    item = MagicMock()
    item.embedding = [value] * dimension
    response = MagicMock()
    response.data = [item]
    return response


@pytest.fixture
def service():
    service = EmbeddingService(EmbeddingConfig(openai_api_key="test-key", retry_delay_seconds=0))
    client = MagicMock()
    client.embeddings.create = AsyncMock(return_value=mock_response())
    service._client = client
    return service


def test_service_satisfies_provider_contract(service):
    assert isinstance(service, EmbeddingProvider)


@pytest.mark.asyncio
async def test_embed_cleans_whitespace(service):
    vector = await service.embed("  Replace   valve\n packing ")

    assert vector == [0.1] * 8
    kwargs = service.client.embeddings.create.call_args.kwargs
    assert kwargs["input"] == "Replace valve packing"
    assert kwargs["model"] == service.config.embedding_model


@pytest.mark.asyncio
async def test_empty_text_is_rejected(service):
    with pytest.raises(ProcessingError):
        await service.embed("   ")
    service.client.embeddings.create.assert_not_called()


@pytest.mark.asyncio
async def test_missing_key_raises_configuration_error():
    service = EmbeddingService(EmbeddingConfig(openai_api_key=""))

    with pytest.raises(ConfigurationError):
        await service.embed("Replace valve")

    health = await service.health_check()
    assert health["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_process_reports_dimensions(service):
    response = await service.process(EmbeddingRequest(text="Replace pump seal"))

    assert response.dimensions == 8
    assert response.input_text == "Replace pump seal"
    assert response.model == service.config.embedding_model


@pytest.mark.asyncio
async def test_repeated_timeouts_raise_provider_timeout(service):
    service.client.embeddings.create = AsyncMock(side_effect=APITimeoutError(request=MagicMock()))

    with pytest.raises(ProviderTimeoutError) as exc_info:
        await service.embed("Replace valve")

    assert exc_info.value.retryable is True
    assert exc_info.value.details["service"] == "openai.embeddings"
    assert service.client.embeddings.create.await_count == service.config.max_retries
