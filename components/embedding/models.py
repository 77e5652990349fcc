"""
Pydantic models and provider contract for the Embedding component.
"""

from typing import List, Protocol, runtime_checkable

from pydantic import BaseModel, Field

# A single embedding vector
EmbeddingVector = List[float]


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Anything that turns text into a fixed-length vector.

    Implementations raise on failure; callers decide how to degrade.
    """

    async def embed(self, text: str) -> EmbeddingVector:
        ...


class EmbeddingRequest(BaseModel):
    """Request model for single embedding generation."""

    text: str = Field(
        min_length=1,
        description="Change description text to embed",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"text": "Replace failed containment isolation valve with a Fisher model"},
            ]
        }
    }


class EmbeddingResponse(BaseModel):
    """Response model for single embedding generation."""

    embedding: EmbeddingVector = Field(
        description="Embedding vector as list of floats",
    )
    model: str = Field(
        description="Model used for embedding generation",
    )
    dimensions: int = Field(
        description="Dimensionality of the embedding vector",
    )
    input_text: str = Field(
        description="The text that was embedded (truncated for display)",
    )

