"""
Pydantic models for the Semantic Classification component.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Axis identifiers
EQUIPMENT_AXIS = "equipment"
MODIFICATION_TYPE_AXIS = "modification_type"
AXES = (EQUIPMENT_AXIS, MODIFICATION_TYPE_AXIS)

UNKNOWN_LABEL = "Unknown"


class ReferenceExemplar(BaseModel):
    """Curated reference text for one label on one axis."""

    model_config = ConfigDict(frozen=True)

    axis: str
    label: str
    category: str
    text: str


class ReferenceVector(BaseModel):
    """An exemplar label with its embedding."""

    model_config = ConfigDict(frozen=True)

    label: str
    category: str
    embedding: Tuple[float, ...]


class ScoredLabel(BaseModel):
    """A ranked alternative."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    label: str
    score: float


class SemanticVerdict(BaseModel):
    """Nearest-exemplar classification on one axis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    axis: str
    label: str = UNKNOWN_LABEL
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    category: Optional[str] = None
    alternatives: List[ScoredLabel] = Field(default_factory=list)
    available: bool = True

    @classmethod
    def unavailable(cls, axis: str) -> "SemanticVerdict":
        """Zero-confidence sentinel for a failed or timed-out axis."""
        return cls(axis=axis, label=UNKNOWN_LABEL, confidence=0.0, available=False)


class SemanticRequest(BaseModel):
    """Request model for semantic classification."""

    text: str = Field(description="Combined problem, solution and justification text")


class SemanticClassification(BaseModel):
    """Verdicts for both axes from a single embedding call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    equipment: SemanticVerdict
    modification_type: SemanticVerdict

    @property
    def any_available(self) -> bool:
        return self.equipment.available or self.modification_type.available

    @property
    def max_confidence(self) -> float:
        return max(
            (v.confidence for v in (self.equipment, self.modification_type) if v.available),
            default=0.0,
        )
