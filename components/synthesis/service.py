"""
Evidence Synthesis Service Component.

Combines the decision tree verdict, both semantic verdicts and the
narrative verdict into one Decision.

Requirement precedence:
0. terminal exemption from caller-supplied flags (temporary, identical
   replacement, Facilities Change Package): the tree verdict stands
1. explicit requirement statement in the narrative
2. design-type heuristics over the change text and equipment label
3. no usable evidence at all: required, low confidence, manual review

A decision reached from the decision tree alone (both providers down)
leads its reason with the insufficient-evidence sentence.

Design type: the tree's type when grounded flags made a gate fire, else
the narrative type, else the modification-type axis, else the tree's
provisional type.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from components.base import BaseComponent, ComponentConfig, get_logger
from components.decision_tree.models import DecisionTreeVerdict
from components.intake.models import DesignType
from components.narrative.models import NarrativeVerdict
from components.semantic.models import SemanticVerdict
from components.semantic.service import design_type_of
from components.synthesis.models import (
    BASIS_FALLBACK,
    BASIS_HEURISTIC,
    BASIS_NARRATIVE,
    BASIS_TERMINAL_EXEMPTION,
    GROUNDING_DEFAULT,
    GROUNDING_EXPLICIT,
    GROUNDING_INFERRED,
    INSUFFICIENT_EVIDENCE_REASON,
    Decision,
    EvidenceItem,
    SynthesisRequest,
)
from components.synthesis.signals import generate_reason, requirement_for

logger = get_logger(__name__)


class SynthesisConfig(ComponentConfig):
    """Configuration for Evidence Synthesis."""

    model_config = SettingsConfigDict(env_prefix="SYNTHESIS_")

    # Ensemble weights: semantic * max_semantic + narrative * 1.0
    semantic_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    narrative_weight: float = Field(default=0.6, ge=0.0, le=1.0)

    # Conservative decision when nothing usable came back
    fallback_confidence: float = Field(default=0.25, ge=0.0, le=1.0)

    # Confidence of a rule-based exemption
    tree_confidence: float = Field(default=0.95, ge=0.0, le=1.0)


def tree_grounding(explicit_flags, inferred_flags) -> str:
    """Classify how the tree's input flags were obtained."""
    if explicit_flags:
        return GROUNDING_EXPLICIT
    if inferred_flags:
        return GROUNDING_INFERRED
    return GROUNDING_DEFAULT


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _available(verdict: Optional[SemanticVerdict]) -> bool:
    return verdict is not None and verdict.available


class EvidenceSynthesizer(BaseComponent[SynthesisRequest, Decision]):
    """
    Pure evidence synthesizer.

    Usage:
        synthesizer = EvidenceSynthesizer()
        decision = synthesizer.synthesize(request)
    """

    def __init__(self, config: Optional[SynthesisConfig] = None):
        self.config = config or SynthesisConfig()

    @property
    def component_name(self) -> str:
        return "synthesis"

    # ------------------------------------------------------------------
    # Evidence trail
    # ------------------------------------------------------------------

    def _trail(self, request: SynthesisRequest) -> List[EvidenceItem]:
        trail: List[EvidenceItem] = []
        tree = request.tree_verdict

        if request.inferred_flags:
            filled = ", ".join(
                f"{name}={value}" for name, value in sorted(request.inferred_flags.items())
            )
            trail.append(EvidenceItem(
                source="scenario_inference",
                summary=f"Scenario '{request.scenario}' filled unset flags: {filled}",
            ))

        trail.append(EvidenceItem(
            source="decision_tree",
            summary=(
                f"{'Required' if tree.required else 'Not required'}, "
                f"{tree.provisional_design_type.label}: {tree.reason} "
                f"(gate: {tree.fired_gate or 'fallthrough'}, flags: {request.tree_grounding})"
            ),
            confidence=(
                self.config.tree_confidence
                if request.tree_grounding != GROUNDING_DEFAULT
                else 0.0
            ),
        ))

        for name, verdict in (
            ("semantic_equipment", request.equipment),
            ("semantic_modification_type", request.modification_type),
        ):
            if _available(verdict):
                summary = f"{verdict.label} ({verdict.category})"
                if verdict.alternatives:
                    alternatives = ", ".join(
                        f"{alt.label} {alt.score:.2f}" for alt in verdict.alternatives
                    )
                    summary += f"; alternatives: {alternatives}"
                trail.append(EvidenceItem(source=name, summary=summary, confidence=verdict.confidence))
            else:
                trail.append(EvidenceItem(source=name, summary="Unavailable", confidence=0.0))

        narrative = request.narrative
        if narrative is None or not narrative.available:
            trail.append(EvidenceItem(source="narrative", summary="Unavailable", confidence=0.0))
        elif narrative.has_extraction:
            parts = []
            if narrative.explicit_required_flag is not None:
                parts.append(f"states '{narrative.matched_phrase}'")
            if narrative.extracted_design_type is not None:
                parts.append(f"classifies as {narrative.extracted_design_type.label}")
            trail.append(EvidenceItem(source="narrative", summary="; ".join(parts), confidence=1.0))
        else:
            trail.append(EvidenceItem(
                source="narrative",
                summary="No requirement statement or design type found in response",
                confidence=0.0,
            ))

        return trail

    # ------------------------------------------------------------------
    # Resolution steps
    # ------------------------------------------------------------------

    def _is_terminal_exemption(self, request: SynthesisRequest) -> bool:
        return request.tree_grounding == GROUNDING_EXPLICIT and request.tree_verdict.exempts

    def _resolve_design_type(self, request: SynthesisRequest) -> Tuple[DesignType, str]:
        tree = request.tree_verdict
        narrative = request.narrative

        if request.tree_grounding != GROUNDING_DEFAULT and tree.fired_gate is not None:
            return tree.provisional_design_type, "decision_tree"
        if narrative is not None and narrative.available and narrative.extracted_design_type:
            return narrative.extracted_design_type, "narrative"
        semantic_type = design_type_of(request.modification_type)
        if semantic_type is not None:
            return semantic_type, "semantic_modification_type"
        return tree.provisional_design_type, "decision_tree_provisional"

    def _semantic_confidence(self, request: SynthesisRequest) -> Optional[float]:
        scores = [
            v.confidence for v in (request.equipment, request.modification_type) if _available(v)
        ]
        return max(scores) if scores else None

    def _confidence(self, request: SynthesisRequest) -> float:
        semantic = self._semantic_confidence(request)
        narrative = request.narrative

        if narrative is not None and narrative.has_extraction:
            value = self.config.semantic_weight * (semantic or 0.0) + self.config.narrative_weight * 1.0
        elif semantic is not None:
            value = semantic
        else:
            # Grounded tree verdict only
            value = self.config.fallback_confidence
        return _clamp(value)

    def _signal_text(self, request: SynthesisRequest) -> str:
        parts = [request.combined_text]
        if _available(request.equipment):
            parts.append(request.equipment.label)
        return " ".join(p for p in parts if p).lower()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def synthesize(self, request: SynthesisRequest) -> Decision:
        """
        Produce the final Decision. Never raises for a well-formed request.
        """
        tree = request.tree_verdict
        narrative = request.narrative
        narrative_available = narrative is not None and narrative.available
        trail = self._trail(request)

        # Rule 0: terminal exemption from caller-supplied flags
        if self._is_terminal_exemption(request):
            if narrative_available and narrative.explicit_required_flag is True:
                trail.append(EvidenceItem(
                    source="conflict",
                    summary=(
                        f"Narrative states '{narrative.matched_phrase}' but the "
                        f"'{tree.fired_gate}' gate exempts this change; decision tree verdict kept"
                    ),
                ))
                logger.warning(
                    "Narrative disagrees with terminal decision tree exemption",
                    extra={"component": self.component_name},
                )

            design_type = tree.provisional_design_type
            reason = tree.reason
            if design_type in (DesignType.IV, DesignType.V):
                reason = f"{tree.reason}. {generate_reason(False, design_type, self._signal_text(request))}"

            return Decision(
                mt_required=False,
                design_type=design_type,
                reason=reason,
                confidence=_clamp(max(self.config.tree_confidence, self._confidence(request))),
                evidence_trail=trail,
                requirement_basis=BASIS_TERMINAL_EXEMPTION,
                design_type_basis="decision_tree",
                tree_grounding=request.tree_grounding,
            )

        # Rule 3: nothing usable at all
        if (
            request.tree_grounding == GROUNDING_DEFAULT
            and not _available(request.equipment)
            and not _available(request.modification_type)
            and not narrative_available
        ):
            logger.warning(
                "No usable evidence; returning conservative decision",
                extra={"component": self.component_name},
            )
            return Decision(
                mt_required=True,
                design_type=tree.provisional_design_type,
                reason=INSUFFICIENT_EVIDENCE_REASON,
                confidence=_clamp(self.config.fallback_confidence),
                evidence_trail=trail,
                requirement_basis=BASIS_FALLBACK,
                design_type_basis="decision_tree_provisional",
                tree_grounding=request.tree_grounding,
            )

        design_type, design_type_basis = self._resolve_design_type(request)
        signal_text = self._signal_text(request)

        # Rule 1: explicit narrative statement; Rule 2: design-type heuristics
        if narrative_available and narrative.explicit_required_flag is not None:
            required = narrative.explicit_required_flag
            basis = BASIS_NARRATIVE
            lead = f"Narrative assessment states '{narrative.matched_phrase}'. "
        else:
            required = requirement_for(design_type, signal_text)
            basis = BASIS_HEURISTIC
            lead = ""

        if request.tree_grounding == GROUNDING_EXPLICIT and tree.fired_gate and required != tree.required:
            trail.append(EvidenceItem(
                source="conflict",
                summary=(
                    f"Decision tree gate '{tree.fired_gate}' indicated "
                    f"{'required' if tree.required else 'not required'}; "
                    f"{basis.replace('_', ' ')} evidence prevails"
                ),
            ))

        reason = lead + generate_reason(required, design_type, signal_text)
        if not narrative_available and self._semantic_confidence(request) is None:
            # Decision tree only
            logger.warning(
                "Semantic and narrative evidence unavailable; flagging for manual review",
                extra={"component": self.component_name},
            )
            reason = f"{INSUFFICIENT_EVIDENCE_REASON}. {reason}"

        return Decision(
            mt_required=required,
            design_type=design_type,
            reason=reason,
            confidence=self._confidence(request),
            evidence_trail=trail,
            requirement_basis=basis,
            design_type_basis=design_type_basis,
            tree_grounding=request.tree_grounding,
        )

    async def process(self, request: SynthesisRequest) -> Decision:
        return self.synthesize(request)

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "component": self.component_name}


def synthesize_from_tree(
    tree_verdict: DecisionTreeVerdict,
    combined_text: str,
    grounding: str,
    config: Optional[SynthesisConfig] = None,
    scenario: Optional[str] = None,
    inferred_flags: Optional[Dict[str, bool]] = None,
) -> Decision:
    """Decision from the tree verdict alone, with both providers unavailable."""
    request = SynthesisRequest(
        combined_text=combined_text,
        tree_verdict=tree_verdict,
        tree_grounding=grounding,
        equipment=SemanticVerdict.unavailable("equipment"),
        modification_type=SemanticVerdict.unavailable("modification_type"),
        narrative=NarrativeVerdict.unavailable(),
        scenario=scenario,
        inferred_flags=inferred_flags or {},
    )
    return EvidenceSynthesizer(config).synthesize(request)
