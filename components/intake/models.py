"""
Pydantic models for the Intake component.

Defines the change description accepted by the engine and the design
type categories shared by every downstream component.
"""

import re
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class DesignType(int, Enum):
    """The five MT design categories."""

    I = 1
    II = 2
    III = 3
    IV = 4
    V = 5

    @property
    def title(self) -> str:
        return _DESIGN_TYPE_TITLES[self]

    @property
    def label(self) -> str:
        """Display label, e.g. 'Type III'."""
        return f"Type {self.name}"

    def __str__(self) -> str:
        return f"{self.label} ({self.title})"


_DESIGN_TYPE_TITLES = {
    DesignType.I: "New Design",
    DesignType.II: "Modification",
    DesignType.III: "Non-Identical Replacement",
    DesignType.IV: "Temporary",
    DesignType.V: "Identical Replacement",
}


# Safety classification values used by intake, risk and review
SAFETY_CLASS = "Safety-Class"
SAFETY_SIGNIFICANT = "Safety-Significant"
NON_SAFETY = "Non-Safety"


# Keys have case, spaces, hyphens and underscores removed; SC/SS are the questionnaire codes
_SAFETY_CLASSIFICATION_KEYS = {
    "safetyclass": SAFETY_CLASS,
    "sc": SAFETY_CLASS,
    "safetysignificant": SAFETY_SIGNIFICANT,
    "ss": SAFETY_SIGNIFICANT,
    "nonsafety": NON_SAFETY,
}


def canonical_safety_classification(value: Optional[str]) -> Optional[str]:
    """
    Map spelling variants ("Safety Significant", "safety_class", "SS") to the
    canonical value. Unrecognised values come back stripped, blanks as None.
    """
    if value is None or not value.strip():
        return None
    key = re.sub(r"[\s_-]+", "", value).lower()
    return _SAFETY_CLASSIFICATION_KEYS.get(key, value.strip())


def is_safety_classified(value: Optional[str]) -> bool:
    """True for Safety-Class or Safety-Significant, in any accepted spelling."""
    return canonical_safety_classification(value) in (SAFETY_CLASS, SAFETY_SIGNIFICANT)


# Structured decision flags, in decision tree order
FLAG_FIELDS = (
    "is_temporary",
    "is_physical_change",
    "is_identical_replacement",
    "is_design_outside_authority",
    "requires_new_procedures",
    "requires_multiple_documents",
    "is_single_discipline",
    "revisions_outside_authority",
    "requires_software_change",
    "requires_hoisting_rigging",
    "facility_change_package_applicable",
)

# Older clients send the "DA" spelling for the two authority flags
_LEGACY_ALIASES = {
    "is_design_outside_authority": ("isDesignOutsideDA",),
    "revisions_outside_authority": ("revisionsOutsideDA",),
}

_TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "no", "n", "0", "off"}


def _flag_keys() -> Dict[str, str]:
    """Map every accepted input key for a flag to its field name."""
    keys = {}
    for name in FLAG_FIELDS:
        keys[name] = name
        keys[to_camel(name)] = name
        for alias in _LEGACY_ALIASES.get(name, ()):
            keys[alias] = name
    return keys


_FLAG_KEYS = _flag_keys()


def _coerce_flag(value: Any) -> Optional[bool]:
    """Return a bool for well-formed flag values, None for anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


class ClassificationInput(BaseModel):
    """
    A proposed facility change as submitted for MT evaluation.

    Accepts both snake_case field names and the camelCase keys of the
    questionnaire JSON. Missing, null or malformed values fall back to the
    neutral default and are treated as not supplied.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    # Decision tree flags
    is_temporary: bool = False
    is_physical_change: bool = False
    is_identical_replacement: bool = False
    is_design_outside_authority: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "isDesignOutsideAuthority", "isDesignOutsideDA", "is_design_outside_authority"
        ),
    )
    requires_new_procedures: bool = False
    requires_multiple_documents: bool = False
    is_single_discipline: bool = Field(
        default=True,
        description="Neutral value: a single-discipline design does not trip the multi-discipline gate",
    )
    revisions_outside_authority: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "revisionsOutsideAuthority", "revisionsOutsideDA", "revisions_outside_authority"
        ),
    )
    requires_software_change: bool = False
    requires_hoisting_rigging: bool = False
    facility_change_package_applicable: bool = False

    # Free text
    problem_description: str = ""
    proposed_solution: str = ""
    justification: str = ""

    # Categorical
    safety_classification: Optional[str] = None
    hazard_category: Optional[str] = None

    # Administrative (review only)
    project_number: Optional[str] = None
    design_authority: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unusable_values(cls, data: Any) -> Any:
        """Drop null/malformed entries so they take their default and stay unset."""
        if not isinstance(data, dict):
            return data

        cleaned = {}
        for key, value in data.items():
            if value is None:
                continue
            if key in _FLAG_KEYS:
                flag = _coerce_flag(value)
                if flag is None:
                    continue
                cleaned[key] = flag
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                cleaned[key] = str(value)
            elif isinstance(value, str) or key not in cls._text_keys():
                cleaned[key] = value
        return cleaned

    @field_validator("safety_classification")
    @classmethod
    def _canonical_safety_classification(cls, value: Optional[str]) -> Optional[str]:
        return canonical_safety_classification(value)

    @classmethod
    def _text_keys(cls) -> FrozenSet[str]:
        names = (
            "problem_description",
            "proposed_solution",
            "justification",
            "safety_classification",
            "hazard_category",
            "project_number",
            "design_authority",
        )
        return frozenset(names) | frozenset(to_camel(n) for n in names)

    def explicit_flags(self) -> FrozenSet[str]:
        """Decision flags the caller actually supplied."""
        return frozenset(name for name in FLAG_FIELDS if name in self.model_fields_set)

    def flags(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in FLAG_FIELDS}

    @property
    def combined_text(self) -> str:
        """Problem, solution and justification joined for embedding and prompting."""
        return " ".join(
            part.strip()
            for part in (self.problem_description, self.proposed_solution, self.justification)
            if part and part.strip()
        )

    @property
    def scenario_text(self) -> str:
        """Lowercased problem description, or justification when the problem is empty."""
        return (self.problem_description or self.justification or "").lower()


class ScenarioInference(BaseModel):
    """Outcome of matching the free text against the scenario profiles."""

    scenario: Optional[str] = Field(default=None, description="Matched profile name")
    inferred_flags: Dict[str, bool] = Field(
        default_factory=dict,
        description="Flags filled in by the profile (caller-supplied flags are never listed)",
    )
    inferred_safety_classification: Optional[str] = None
    input: ClassificationInput = Field(description="Input with inferred values applied")

    @property
    def inferred_names(self) -> List[str]:
        return list(self.inferred_flags)
