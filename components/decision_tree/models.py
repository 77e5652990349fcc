"""
Pydantic models for the Decision Tree component.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from components.intake.models import DesignType


# Gate identifiers, in evaluation order
GATE_TEMPORARY = "temporary"
GATE_NON_PHYSICAL = "non_physical"
GATE_IDENTICAL_REPLACEMENT = "identical_replacement"
GATE_DESIGN_OUTSIDE_AUTHORITY = "design_outside_authority"
GATE_NEW_PROCEDURES = "new_procedures"
GATE_MULTIPLE_DOCUMENTS = "multiple_documents"
GATE_MULTI_DISCIPLINE = "multi_discipline"
GATE_REVISIONS_OUTSIDE_AUTHORITY = "revisions_outside_authority"
GATE_SOFTWARE_CHANGE = "software_change"
GATE_HOISTING_RIGGING = "hoisting_rigging"
FALLTHROUGH = "fallthrough"

GATE_ORDER = (
    GATE_TEMPORARY,
    GATE_NON_PHYSICAL,
    GATE_IDENTICAL_REPLACEMENT,
    GATE_DESIGN_OUTSIDE_AUTHORITY,
    GATE_NEW_PROCEDURES,
    GATE_MULTIPLE_DOCUMENTS,
    GATE_MULTI_DISCIPLINE,
    GATE_REVISIONS_OUTSIDE_AUTHORITY,
    GATE_SOFTWARE_CHANGE,
    GATE_HOISTING_RIGGING,
)


class DecisionTreeVerdict(BaseModel):
    """Result of walking the ten-gate flowchart."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    required: bool
    reason: str
    provisional_design_type: DesignType
    evaluation_path: List[str] = Field(
        description="Gate ids evaluated in order, ending with the gate that fired or 'fallthrough'",
    )
    fired_gate: Optional[str] = Field(default=None, description="None on fallthrough")
    facility_change_package: bool = Field(
        default=False,
        description="True when the non-physical gate routed the change to the FCP process",
    )

    @property
    def exempts(self) -> bool:
        """True when the verdict is one of the terminal exemptions."""
        return not self.required and (
            self.fired_gate in (GATE_TEMPORARY, GATE_IDENTICAL_REPLACEMENT)
            or self.facility_change_package
        )
