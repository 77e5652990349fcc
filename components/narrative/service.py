"""
Narrative Service Component.

NarrativeService asks an OpenAI chat model for a free-form MT assessment.
NarrativeAdapter wraps any NarrativeProvider with a timeout, extracts a
NarrativeVerdict from the prose, and degrades to an unavailable verdict
when the provider fails.
"""

import asyncio
from typing import Any, Dict, Optional

from langchain_openai import ChatOpenAI
from openai import APIError
from pydantic import Field
from pydantic_settings import SettingsConfigDict

from config import Config
from components.base import BaseComponent, ComponentConfig, get_logger
from components.base.exceptions import ConfigurationError, ExternalServiceError
from components.narrative.extraction import extract_verdict
from components.narrative.models import NarrativeProvider, NarrativeRequest, NarrativeVerdict
from components.narrative.prompts import SYSTEM_PROMPT, build_analysis_prompt

logger = get_logger(__name__)


class NarrativeConfig(ComponentConfig):
    """Configuration for the narrative assessment."""

    model_config = SettingsConfigDict(env_prefix="NARRATIVE_")

    model: str = Config.NARRATIVE_MODEL
    temperature: float = Field(default=0.05, ge=0.0, le=2.0)
    max_tokens: int = Field(default=800, gt=0)
    enabled: bool = True


class NarrativeService:
    """
    NarrativeProvider backed by an OpenAI chat model.

    Usage:
        service = NarrativeService()
        prose = await service.analyze("Replace valve ...", {"Equipment": "..."})
    """

    def __init__(self, config: Optional[NarrativeConfig] = None):
        self.config = config or NarrativeConfig()
        self._llm: Optional[ChatOpenAI] = None

    @property
    def component_name(self) -> str:
        return "narrative"

    @property
    def llm(self) -> ChatOpenAI:
        """Lazy initialization of the chat model."""
        if self._llm is None:
            if not self.config.has_api_key:
                raise ConfigurationError(
                    "OpenAI API key is required",
                    component=self.component_name,
                    missing_keys=["openai_api_key"],
                )
            self._llm = ChatOpenAI(
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                max_retries=self.config.max_retries,
                timeout=self.config.timeout_seconds,
                api_key=self.config.openai_api_key,
            )
        return self._llm

    async def analyze(self, text: str, context: Dict[str, Any]) -> str:
        """
        Request a narrative assessment.

        Raises:
            ConfigurationError: If no API key is configured
            ExternalServiceError: If the chat model call fails
        """
        prompt = build_analysis_prompt(text, context)
        try:
            response = await self.llm.ainvoke(
                [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ]
            )
        except APIError as e:
            raise ExternalServiceError(
                f"Chat completion failed: {str(e)}",
                component=self.component_name,
                service="openai.chat",
                status_code=getattr(e, "status_code", None),
            ) from e

        return response.content if isinstance(response.content, str) else str(response.content)


class NarrativeAdapter(BaseComponent[NarrativeRequest, NarrativeVerdict]):
    """
    Turns provider prose into advisory evidence.

    Usage:
        adapter = NarrativeAdapter()
        verdict = await adapter.process(NarrativeRequest(text="...", context={...}))
        verdict.explicit_required_flag  # True / False / None
    """

    def __init__(
        self,
        provider: Optional[NarrativeProvider] = None,
        config: Optional[NarrativeConfig] = None,
    ):
        self.config = config or NarrativeConfig()
        self.provider = provider if provider is not None else NarrativeService(self.config)

    @property
    def component_name(self) -> str:
        return "narrative"

    async def process(self, request: NarrativeRequest) -> NarrativeVerdict:
        """
        Obtain and parse a narrative assessment.

        Returns:
            NarrativeVerdict; available=False when disabled, failed or timed out
        """
        if not self.config.enabled:
            logger.info("Narrative assessment disabled", extra={"component": self.component_name})
            return NarrativeVerdict.unavailable()

        try:
            prose = await asyncio.wait_for(
                self.provider.analyze(request.text, request.context),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Narrative provider timed out after {self.config.timeout_seconds}s",
                extra={"component": self.component_name},
            )
            return NarrativeVerdict.unavailable()
        except Exception as e:
            logger.warning(
                f"Narrative provider failed ({type(e).__name__}: {e})",
                extra={"component": self.component_name},
            )
            return NarrativeVerdict.unavailable()

        verdict = extract_verdict(prose)
        if not verdict.has_extraction:
            logger.info(
                "Narrative contained no requirement phrase or design type",
                extra={"component": self.component_name},
            )
        return verdict

    async def analyze(self, text: str, context: Optional[Dict[str, Any]] = None) -> NarrativeVerdict:
        """Convenience wrapper around process()."""
        return await self.process(NarrativeRequest(text=text, context=context or {}))

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if self.config.enabled else "degraded",
            "component": self.component_name,
            "enabled": self.config.enabled,
            "model": self.config.model,
        }
