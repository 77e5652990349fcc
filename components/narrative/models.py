"""
Pydantic models and provider contract for the Narrative component.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from components.intake.models import DesignType


@runtime_checkable
class NarrativeProvider(Protocol):
    """
    An external service that writes a free-form assessment of a change.

    Implementations raise on failure; the adapter degrades.
    """

    async def analyze(self, text: str, context: Dict[str, Any]) -> str:
        ...


class NarrativeRequest(BaseModel):
    """Request model for a narrative assessment."""

    text: str = Field(description="Combined problem, solution and justification text")
    context: Dict[str, Any] = Field(
        default_factory=dict,
        description="Preliminary evidence (semantic verdicts or tree verdict) shown to the model",
    )


class NarrativeVerdict(BaseModel):
    """
    Evidence extracted from the provider's prose.

    Both extracted fields are optional: prose that states neither is kept
    only as raw_text.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    explicit_required_flag: Optional[bool] = None
    extracted_design_type: Optional[DesignType] = None
    raw_text: str = ""
    matched_phrase: Optional[str] = Field(
        default=None,
        description="Requirement phrase that set explicit_required_flag",
    )
    available: bool = True

    @classmethod
    def unavailable(cls) -> "NarrativeVerdict":
        return cls(available=False)

    @property
    def has_extraction(self) -> bool:
        """True when the prose yielded a flag or a design type."""
        return self.available and (
            self.explicit_required_flag is not None or self.extracted_design_type is not None
        )
