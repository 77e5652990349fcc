"""
Pydantic models for the Review component.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DesignOutput(BaseModel):
    """A design deliverable expected for the change."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    type: str
    description: str
    required: bool = True
    status: str = "Pending"


class ImpactedDocument(BaseModel):
    """A controlled document the change is likely to affect."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    document_type: str
    impact_rationale: str
    requires_update: bool = True
    suggested_reviewers: List[str] = Field(default_factory=list)


class InputReview(BaseModel):
    """Completeness and consistency review of a submission."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    missing_elements: List[str] = Field(default_factory=list)
    inconsistencies: List[str] = Field(default_factory=list)
    suggested_actions: List[str] = Field(default_factory=list)
    expected_outputs: List[DesignOutput] = Field(default_factory=list)
    impacted_documents: List[ImpactedDocument] = Field(default_factory=list)
