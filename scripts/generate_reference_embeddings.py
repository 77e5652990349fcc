"""
Generate pre-computed embeddings for the reference exemplars.

Embeds every equipment and modification-type exemplar and saves them to a
JSON file so the semantic classifier can start without provider calls.

Usage:
    python scripts/generate_reference_embeddings.py

Output:
    - data/metadata/reference_embeddings.json
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import Config
from components.base import ComponentError
from components.embedding.service import EmbeddingConfig, EmbeddingService
from components.semantic.reference_store import ReferenceVectorStore
from components.semantic.references import DEFAULT_EXEMPLARS


async def generate_reference_embeddings() -> bool:
    """Generate and save reference embeddings to JSON file."""

    print("\n" + "=" * 60)
    print("Reference Embeddings Generator")
    print("=" * 60)

    print(f"\n1. Reference exemplars: {len(DEFAULT_EXEMPLARS)}")

    config = EmbeddingConfig()
    print(f"\n2. Initializing embedding service...")
    print(f"   Model: {config.embedding_model}")

    service = EmbeddingService(config)
    store = ReferenceVectorStore(service, DEFAULT_EXEMPLARS)

    print(f"\n3. Generating embeddings...")
    try:
        await store.ensure_built()
    except ComponentError as e:
        print(f"   FAILED: {e}")
        return False

    output_path = Config.REFERENCE_EMBEDDINGS_PATH
    print(f"\n4. Saving embeddings to: {output_path}")
    store.save_json(output_path, model=config.embedding_model)

    file_size = output_path.stat().st_size / 1024  # KB

    print(f"\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"   Exemplars embedded: {len(DEFAULT_EXEMPLARS)}")
    print(f"   Output file: {output_path}")
    print(f"   File size: {file_size:.1f} KB")
    print(f"\n   Done!")
    return True


if __name__ == "__main__":
    success = asyncio.run(generate_reference_embeddings())
    sys.exit(0 if success else 1)
