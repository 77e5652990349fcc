"""
Base configuration class for all components.

Uses pydantic-settings for environment variable loading.
Each component extends this with its own settings.
"""

import os
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ComponentConfig(BaseSettings):
    """
    Base configuration for all component services.

    Settings are loaded from:
    1. Environment variables
    2. .env file (if present)
    3. Default values

    Subclasses override model_config to set env_prefix.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # OpenAI Configuration (shared across components)
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key for LLM and embedding calls",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # Retry configuration
    max_retries: int = Field(
        default=3,
        description="Maximum retry attempts for external API calls",
    )
    retry_delay_seconds: float = Field(
        default=2,
        description="Base delay between retries (uses exponential backoff)",
    )

    # Per-call timeout applied by the component that awaits the provider
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single provider call, retries included",
    )

    def __init__(self, **kwargs):
        # Allow openai_api_key to be loaded from OPENAI_API_KEY env var
        if "openai_api_key" not in kwargs:
            kwargs["openai_api_key"] = os.getenv("OPENAI_API_KEY")
        super().__init__(**kwargs)

    @property
    def has_api_key(self) -> bool:
        """True when an OpenAI key is configured (empty strings do not count)."""
        return bool(self.openai_api_key and self.openai_api_key.strip())

