"""
Configuration management using environment variables.

Pipeline-level settings live here; provider settings (models, retries,
per-call timeouts) live in each component's ComponentConfig subclass.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration class for application settings."""

    # OpenAI Configuration (optional: missing key degrades provider evidence)
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

    # ========== MODEL CONFIGURATION ==========
    NARRATIVE_MODEL = os.getenv("NARRATIVE_MODEL", "gpt-4o")
    EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-large")

    # ========== PATHS ==========
    PROJECT_ROOT = Path(__file__).parent  # config.py is at project root
    REFERENCE_EMBEDDINGS_PATH = PROJECT_ROOT / os.getenv(
        "REFERENCE_EMBEDDINGS_PATH", "data/metadata/reference_embeddings.json"
    )

    # ========== PIPELINE CONFIGURATION ==========
    # Overall budget for one analysis; on expiry the decision tree result is used
    REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "90"))

    # Narrative node waits for the semantic verdicts and uses them as prompt context.
    # Set to false to dispatch the narrative call concurrently with the semantic call.
    NARRATIVE_USES_SEMANTIC_CONTEXT = _env_flag("NARRATIVE_USES_SEMANTIC_CONTEXT", "true")

    # Fill unset structured flags from recognised free-text scenarios
    SCENARIO_INFERENCE_ENABLED = _env_flag("SCENARIO_INFERENCE_ENABLED", "true")

    # ========== LOGGING ==========
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls):
        """Validate configuration settings."""
        if cls.EMBEDDING_MODEL not in [
            "text-embedding-3-large",
            "text-embedding-3-small",
            "text-embedding-ada-002",
        ]:
            raise ValueError(f"Invalid EMBEDDING_MODEL: {cls.EMBEDDING_MODEL}")

        if cls.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")

        return True


# Validate configuration on import
Config.validate()
