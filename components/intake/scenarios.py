"""
Scenario inference.

Questionnaires submitted from free text often leave the structured flags
blank. A small ordered table of recognised change scenarios supplies
default flag values and a safety classification for those cases. Only
flags the caller left unset are filled; free text is never rewritten.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from components.base import KeywordPattern, Rule, first_match, get_logger
from components.intake.models import (
    NON_SAFETY,
    SAFETY_SIGNIFICANT,
    ClassificationInput,
    ScenarioInference,
)

logger = get_logger(__name__)

# Flags inference is never allowed to turn on
_NEVER_INFERRED = ("is_temporary", "is_identical_replacement")


@dataclass(frozen=True)
class ScenarioProfile:
    """Defaults applied when a scenario is recognised."""

    name: str
    flags: Dict[str, bool] = field(default_factory=dict)
    safety: Optional[Callable[[str], str]] = None


def _safety_when(pattern: KeywordPattern) -> Callable[[str], str]:
    def classify(text: str) -> str:
        return SAFETY_SIGNIFICANT if pattern.matches(text) else NON_SAFETY

    return classify


SCENARIO_RULES = (
    Rule(
        KeywordPattern(["valve"], ["replace", "different manufacturer"]),
        ScenarioProfile(
            name="valve_replacement",
            flags={
                "is_physical_change": True,
                "is_identical_replacement": False,
                "requires_new_procedures": True,
            },
            safety=_safety_when(KeywordPattern.any_of("emergency cooling", "safety")),
        ),
        name="valve_replacement",
    ),
    Rule(
        KeywordPattern(
            ["procedure", "calibration"],
            ["update", "change", "revise"],
            ["no physical", "instrument", "test equipment"],
        ),
        ScenarioProfile(
            name="procedure_only",
            flags={
                "is_physical_change": False,
                "is_identical_replacement": False,
                "requires_new_procedures": True,
                "requires_multiple_documents": False,
            },
        ),
        name="procedure_only",
    ),
    Rule(
        KeywordPattern(["install"], ["new"])
        | KeywordPattern(["installing"], ["new"])
        | KeywordPattern(["new"], ["generator", "system", "equipment"])
        | KeywordPattern.any_of("new installation"),
        ScenarioProfile(
            name="new_installation",
            flags={
                "is_physical_change": True,
                "is_identical_replacement": False,
                "requires_new_procedures": True,
                "requires_multiple_documents": True,
                "is_design_outside_authority": False,
            },
            safety=_safety_when(KeywordPattern.any_of("emergency", "safety", "backup")),
        ),
        name="new_installation",
    ),
    Rule(
        KeywordPattern(["alarm"], ["setpoint"])
        | KeywordPattern(["software"], ["configuration"])
        | KeywordPattern(["control system"], ["change"])
        | KeywordPattern.any_of("setpoint change"),
        ScenarioProfile(
            name="software_configuration",
            flags={
                "is_physical_change": False,
                "requires_new_procedures": True,
                "requires_multiple_documents": True,
            },
        ),
        name="software_configuration",
    ),
)


def infer_scenario(data: ClassificationInput) -> ScenarioInference:
    """
    Fill unset flags from the first scenario profile the text matches.

    Args:
        data: Input as supplied by the caller

    Returns:
        ScenarioInference carrying the (possibly) updated input
    """
    text = data.scenario_text
    profile: Optional[ScenarioProfile] = first_match(SCENARIO_RULES, text)

    if profile is None:
        return ScenarioInference(input=data)

    explicit = data.explicit_flags()
    inferred = {
        name: value
        for name, value in profile.flags.items()
        if name not in explicit and not (name in _NEVER_INFERRED and value)
    }

    update: Dict[str, object] = dict(inferred)
    inferred_safety = None
    if profile.safety is not None and not data.safety_classification:
        inferred_safety = profile.safety(text)
        update["safety_classification"] = inferred_safety

    logger.info(
        f"Scenario '{profile.name}' matched; inferred {sorted(inferred) or 'no flags'}",
        extra={"component": "intake"},
    )

    return ScenarioInference(
        scenario=profile.name,
        inferred_flags=inferred,
        inferred_safety_classification=inferred_safety,
        input=data.model_copy(update=update),
    )
